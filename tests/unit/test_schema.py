"""
Unit tests for schema definitions, default application and validation.
"""

import pytest
from datetime import date, datetime

from sheets_orm.core.exceptions import ValidationError
from sheets_orm.schema import FieldSpec, FieldType, Schema, apply_defaults, collect_errors, is_valid, validate_data


class TestFieldSpec:
    """Test field spec parsing"""

    def test_aliases_and_type_normalization(self):
        """camelCase keys map onto fields and type names are case-insensitive"""
        spec = FieldSpec.model_validate({"type": "Number", "minLength": 1, "maxLength": 3, "defaultValue": 5})

        assert spec.type == "number"
        assert spec.field_type == FieldType.NUMBER
        assert spec.min_length == 1
        assert spec.max_length == 3
        assert spec.default_value == 5

    def test_has_default_distinguishes_none_default(self):
        """A declared None default is still a default"""
        assert FieldSpec(type="string", default_value=None).has_default
        assert not FieldSpec(type="string").has_default

    def test_unknown_type_has_no_field_type(self):
        spec = FieldSpec(type="currency")
        assert spec.type == "currency"
        assert spec.field_type is None

    def test_field_spec_is_frozen(self):
        spec = FieldSpec(type="string")
        with pytest.raises(Exception):
            spec.required = True


class TestSchema:
    """Test the schema mapping"""

    def test_preserves_declaration_order(self):
        schema = Schema({"b": {"type": "string"}, "a": {"type": "number"}, "c": FieldSpec(type="json")})
        assert schema.field_names == ["b", "a", "c"]
        assert list(schema) == ["b", "a", "c"]

    def test_build_returns_existing_schema(self, user_schema):
        assert Schema.build(user_schema) is user_schema

    def test_coerce_row_uses_compiled_coercers(self, product_schema):
        record = product_schema.coerce_row({"price": "9.5", "inStock": "false", "extra": "kept"})
        assert record == {"price": 9.5, "inStock": False, "extra": "kept"}


class TestApplyDefaults:
    """Test default application"""

    def test_fills_missing_fields(self, user_schema):
        result = apply_defaults({"id": "1", "name": "Al"}, user_schema)
        assert result == {"id": "1", "name": "Al", "age": 0}

    def test_never_overwrites_present_keys(self, user_schema):
        """Falsy values that are present are kept"""
        for value in (None, 0, "", False):
            result = apply_defaults({"age": value}, user_schema)
            assert result["age"] is value

    def test_does_not_mutate_input(self, user_schema):
        candidate = {"id": "1"}
        apply_defaults(candidate, user_schema)
        assert candidate == {"id": "1"}

    def test_callable_default_evaluated_per_call(self):
        calls = []

        def next_value():
            calls.append(1)
            return len(calls)

        schema = Schema({"n": {"type": "number", "defaultValue": next_value}})

        assert apply_defaults({}, schema)["n"] == 1
        assert apply_defaults({}, schema)["n"] == 2

    def test_field_without_default_stays_absent(self, user_schema):
        assert "name" not in apply_defaults({}, user_schema)


class TestValidateData:
    """Test schema validation rules"""

    def test_missing_name_is_the_only_error_after_defaults(self, user_schema):
        """Defaults run first, so the defaulted age never counts as missing"""
        with pytest.raises(ValidationError) as exc_info:
            validate_data(apply_defaults({"id": "1"}, user_schema), user_schema)

        assert exc_info.value.errors == ["Field 'name' is required"]
        assert str(exc_info.value) == "Validation failed: Field 'name' is required"

    def test_required_rejects_none_and_empty_string(self, user_schema):
        errors = collect_errors({"id": None, "name": ""}, user_schema)
        assert "Field 'id' is required" in errors
        assert "Field 'name' is required" in errors

    def test_collects_every_violation(self, product_schema):
        """Validation does not stop at the first failure"""
        with pytest.raises(ValidationError) as exc_info:
            validate_data({"id": "p1", "name": "X", "price": -5, "inStock": "yes"}, product_schema)

        assert exc_info.value.errors == [
            "Field 'name' must be at least 2 characters",
            "Field 'price' must be at least 0",
            "Field 'inStock' should be of type boolean",
        ]
        assert str(exc_info.value).startswith("Validation failed: ")
        assert ", " in str(exc_info.value)

    def test_type_checks(self, product_schema):
        valid = {
            "id": "p1",
            "name": "Widget",
            "price": "12.50",
            "inStock": "0",
            "releasedAt": "2024-03-01",
        }
        assert validate_data(valid, product_schema) is True

        errors = collect_errors({"id": 7, "name": "Widget", "price": "cheap", "releasedAt": "someday"}, product_schema)
        assert errors == [
            "Field 'id' should be of type string",
            "Field 'price' should be of type number",
            "Field 'releasedAt' should be of type date",
        ]

    def test_number_rejects_non_finite_and_booleans(self):
        schema = Schema({"n": {"type": "number"}})
        assert not is_valid({"n": float("inf")}, schema)
        assert not is_valid({"n": "nan"}, schema)
        assert not is_valid({"n": True}, schema)
        assert is_valid({"n": 3}, schema)

    def test_date_accepts_date_objects(self):
        schema = Schema({"d": {"type": "date"}})
        assert is_valid({"d": date(2024, 1, 1)}, schema)
        assert is_valid({"d": datetime(2024, 1, 1, 12, 0)}, schema)
        assert is_valid({"d": "2024-01-01T10:00:00.000Z"}, schema)

    def test_max_bounds(self):
        schema = Schema({"qty": {"type": "number", "max": 10}, "code": {"type": "string", "maxLength": 3}})
        errors = collect_errors({"qty": 11, "code": "ABCD"}, schema)
        assert errors == [
            "Field 'qty' must be at most 10",
            "Field 'code' must be at most 3 characters",
        ]

    def test_custom_validator(self):
        schema = Schema({"email": {"type": "string", "validate": lambda v: "@" in v}})
        assert is_valid({"email": "a@b.c"}, schema)
        assert collect_errors({"email": "nope"}, schema) == ["Field 'email' failed custom validation"]

    def test_partial_skips_required_and_absent_fields(self, product_schema):
        """Sparse update payloads only validate what they carry"""
        assert validate_data({"price": 3}, product_schema, partial=True) is True

        with pytest.raises(ValidationError) as exc_info:
            validate_data({"price": -1}, product_schema, partial=True)
        assert exc_info.value.errors == ["Field 'price' must be at least 0"]

    def test_untyped_and_unknown_types_skip_type_checks(self):
        schema = Schema({"free": {}, "money": {"type": "currency"}})
        assert is_valid({"free": object(), "money": "12 USD"}, schema)
