# sheets_orm/schema/validator.py
"""Schema validation for candidate records."""

from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping

from sheets_orm.core.exceptions import ValidationError
from sheets_orm.schema.schemas import FieldSpec, FieldType, Schema, SchemaInput
from sheets_orm.utils import is_date_like, is_finite_number

BOOLEAN_TOKENS = frozenset({"true", "false", "1", "0"})


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    return is_finite_number(value)


def _is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value in BOOLEAN_TOKENS


def _is_date(value: Any) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    return isinstance(value, str) and is_date_like(value)


TYPE_CHECKS: Dict[FieldType, Callable[[Any], bool]] = {
    FieldType.STRING: _is_string,
    FieldType.NUMBER: _is_number,
    FieldType.BOOLEAN: _is_boolean,
    FieldType.DATE: _is_date,
}


def _is_missing(candidate: Mapping[str, Any], field: str) -> bool:
    if field not in candidate:
        return True
    value = candidate[field]
    return value is None or (isinstance(value, str) and value == "")


def _check_field(field: str, value: Any, spec: FieldSpec) -> List[str]:
    """Run type, range, length and custom rules for one present field."""
    errors: List[str] = []
    field_type = spec.field_type

    type_ok = True
    if value is not None and field_type in TYPE_CHECKS:
        type_ok = TYPE_CHECKS[field_type](value)
        if not type_ok:
            errors.append(f"Field '{field}' should be of type {spec.type}")

    if field_type == FieldType.NUMBER and value is not None and type_ok:
        number = float(value)
        if spec.min is not None and number < spec.min:
            errors.append(f"Field '{field}' must be at least {spec.min}")
        if spec.max is not None and number > spec.max:
            errors.append(f"Field '{field}' must be at most {spec.max}")

    if field_type == FieldType.STRING and value is not None:
        length = len(str(value))
        if spec.min_length is not None and length < spec.min_length:
            errors.append(f"Field '{field}' must be at least {spec.min_length} characters")
        if spec.max_length is not None and length > spec.max_length:
            errors.append(f"Field '{field}' must be at most {spec.max_length} characters")

    if spec.validate_fn is not None and not spec.validate_fn(value):
        errors.append(f"Field '{field}' failed custom validation")

    return errors


def collect_errors(candidate: Mapping[str, Any], schema: SchemaInput, partial: bool = False) -> List[str]:
    """Return every rule violation for ``candidate`` without raising."""
    errors: List[str] = []

    for field, spec in Schema.build(schema).items():
        # Sparse update payloads only check what they carry
        if partial and field not in candidate:
            continue

        if not partial and spec.required and _is_missing(candidate, field):
            errors.append(f"Field '{field}' is required")

        if field not in candidate:
            continue

        errors.extend(_check_field(field, candidate[field], spec))

    return errors


def validate_data(candidate: Mapping[str, Any], schema: SchemaInput, partial: bool = False) -> bool:
    """
    Validate a candidate record against a schema.

    Args:
        candidate: Field values to check
        schema: Schema or plain mapping of field specs
        partial: Skip required checks and only validate present fields (updates)

    Returns:
        True when the candidate is valid

    Raises:
        ValidationError: listing every violated rule
    """
    errors = collect_errors(candidate, schema, partial=partial)
    if errors:
        raise ValidationError(errors)
    return True


def is_valid(candidate: Mapping[str, Any], schema: SchemaInput, partial: bool = False) -> bool:
    return not collect_errors(candidate, schema, partial=partial)
