"""
Schema module: field definitions, defaults, validation and type coercion.

Main Components:
- Schema / FieldSpec: declarative field rules
- apply_defaults: fills absent fields from schema defaults
- validate_data: aggregated rule checking for writes
- coerce / serialize: raw cell <-> typed value conversion
"""

from .schemas import FieldSpec, FieldType, Schema
from .defaults import apply_defaults
from .validator import collect_errors, is_valid, validate_data
from .coercion import coerce, compile_coercer, serialize, serialize_record, to_cell

__all__ = [
    # Definitions
    "FieldSpec",
    "FieldType",
    "Schema",
    # Write path
    "apply_defaults",
    "collect_errors",
    "is_valid",
    "validate_data",
    # Read/write conversion
    "coerce",
    "compile_coercer",
    "serialize",
    "serialize_record",
    "to_cell",
]
