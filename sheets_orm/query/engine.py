"""Query engine composing filtering, sorting and pagination."""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from sheets_orm.query.filters import filter_records
from sheets_orm.query.schemas import QueryOptions
from sheets_orm.query.sorting import sort_records

logger = logging.getLogger(__name__)

OptionsInput = Union[QueryOptions, Mapping[str, Any], None]


def paginate(records: List[Any], limit: Optional[int], offset: int = 0) -> List[Any]:
    """Slice ``limit`` records starting at ``offset``; no limit means no slicing."""
    if limit is None:
        return records
    return records[offset:offset + limit]


def apply_query_options(records: Iterable[Any], options: OptionsInput = None) -> List[Any]:
    """
    Apply where -> order_by -> limit/offset to a record collection.

    The order of the stages is fixed. Omitted options skip their stage.
    The input collection is never modified.
    """
    opts = QueryOptions.from_any(options)
    results = list(records)

    if opts.where is not None:
        results = filter_records(results, opts.where)

    if opts.order_by is not None:
        results = sort_records(results, opts.order_by)

    if opts.limit is not None:
        results = paginate(results, opts.limit, opts.offset)

    logger.debug(
        "Query produced %d records (where=%s, order_by=%s, limit=%s, offset=%s)",
        len(results), opts.where, opts.order_by, opts.limit, opts.offset,
    )
    return results


class QueryEngine:
    """
    Reusable query plan bound to one set of options.

    Useful when the same options run over several record collections, e.g.
    one per sheet.
    """

    def __init__(self, options: OptionsInput = None):
        self.options = QueryOptions.from_any(options)

    def run(self, records: Iterable[Any]) -> List[Any]:
        return apply_query_options(records, self.options)

    def count(self, records: Iterable[Any]) -> int:
        """Count matches of the where-clause only, ignoring sort and pagination."""
        if self.options.where is None:
            return len(list(records))
        return len(filter_records(records, self.options.where))
