# sheets_orm/schema/coercion.py
"""Type coercion between raw sheet cells and typed record values."""

import json
import math
from datetime import date, datetime
from typing import Any, Callable, Dict, Mapping, Optional

from sheets_orm.schema.schemas import FieldSpec, FieldType, Schema, SchemaInput
from sheets_orm.utils import parse_date, parse_float


def _to_number(raw: Any) -> Any:
    if isinstance(raw, str) and raw == "":
        return None
    return parse_float(raw)


def _to_boolean(raw: Any) -> bool:
    # Unrecognized values degrade to False; there is no invalid boolean
    return raw is True or raw == "true" or raw == "1"


def _to_date(raw: Any) -> Any:
    if isinstance(raw, (date, datetime)):
        return raw
    if isinstance(raw, str) and raw.strip() == "":
        return None
    return parse_date(raw)


def _to_json(raw: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    try:
        parsed = json.loads(raw)
    except ValueError:
        return raw
    # Only objects and arrays are decoded; scalar JSON text stays a string
    return parsed if isinstance(parsed, (dict, list)) else raw


def _passthrough(raw: Any) -> Any:
    return raw


_COERCERS: Dict[FieldType, Callable[[Any], Any]] = {
    FieldType.NUMBER: _to_number,
    FieldType.BOOLEAN: _to_boolean,
    FieldType.DATE: _to_date,
    FieldType.JSON: _to_json,
    FieldType.STRING: _passthrough,
}


def compile_coercer(spec: FieldSpec) -> Callable[[Any], Any]:
    """Resolve the coercion function for a field once, at schema build time."""
    field_type = spec.field_type
    if field_type is None:
        return _passthrough
    return _COERCERS[field_type]


def coerce(field: str, raw_value: Any, schema: SchemaInput) -> Any:
    """
    Convert a raw cell value into the typed value declared by the schema.

    Unknown fields, untyped fields and ``None`` are returned unchanged.
    Coercing an already-typed value returns an equivalent value.
    """
    schema = Schema.build(schema)
    spec = schema.get(field)
    if spec is None or spec.type is None or raw_value is None:
        return raw_value
    return schema.coercer_for(field)(raw_value)


# ===== SERIALIZATION =====


def _format_number(value: Any) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def to_cell(value: Any, spec: Optional[FieldSpec] = None) -> str:
    """
    Render a typed value as the text a sheet cell holds.

    ``None`` becomes an empty cell. Booleans are written as ``true``/``false``
    so they read back through boolean coercion.
    """
    if value is None:
        return ""
    field_type = spec.field_type if spec is not None else None

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if field_type == FieldType.NUMBER or isinstance(value, (int, float)):
        return _format_number(value)
    if field_type == FieldType.JSON or isinstance(value, (dict, list)):
        if isinstance(value, str):
            return value
        return json.dumps(value, default=str)
    return str(value)


def serialize(field: str, value: Any, schema: SchemaInput) -> str:
    """Serialize one field's value for writing."""
    return to_cell(value, Schema.build(schema).get(field))


def serialize_record(record: Mapping[str, Any], schema: SchemaInput) -> Dict[str, str]:
    """Serialize every value of a record, keeping key order."""
    schema = Schema.build(schema)
    return {field: to_cell(value, schema.get(field)) for field, value in record.items()}
