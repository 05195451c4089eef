# sheets_orm/schema/defaults.py
"""Schema default application."""

from typing import Any, Dict, Mapping

from sheets_orm.schema.schemas import Schema, SchemaInput


def apply_defaults(candidate: Mapping[str, Any], schema: SchemaInput) -> Dict[str, Any]:
    """
    Fill fields missing from ``candidate`` with their schema defaults.

    Only absent keys are filled; a key that is present with a falsy value
    (0, False, "", None) is kept. Callable defaults are evaluated on every
    call. The input mapping is not modified.
    """
    result = dict(candidate)

    for field, spec in Schema.build(schema).items():
        if field in result:
            continue
        if spec.has_default:
            result[field] = spec.resolve_default()

    return result
