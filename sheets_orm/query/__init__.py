"""
Query module for in-memory record collections.

Main Components:
- filter_records: where-clause evaluation with comparison operators
- sort_records: stable multi-key ordering
- apply_query_options / QueryEngine: filter -> sort -> paginate
- Schemas: QueryOptions, Operator, SortDirection
"""

from .engine import QueryEngine, apply_query_options, paginate
from .filters import filter_records, like_to_regex, loose_equals, match_condition, strict_equals
from .sorting import compare_values, sort_records
from .schemas import Operator, QueryOptions, SortDirection

__all__ = [
    # Main entry points
    "QueryEngine",
    "apply_query_options",
    "filter_records",
    "sort_records",
    "paginate",
    # Comparison helpers
    "compare_values",
    "like_to_regex",
    "loose_equals",
    "match_condition",
    "strict_equals",
    # Types
    "Operator",
    "QueryOptions",
    "SortDirection",
]
