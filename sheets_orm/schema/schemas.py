# sheets_orm/schema/schemas.py
"""
Field and schema definitions.

A schema is an ordered mapping of field name to FieldSpec. Field order is the
header order used when a backing sheet is created.
"""

from collections import OrderedDict
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldType(str, Enum):
    """Field types understood by coercion and validation."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    JSON = "json"


class FieldSpec(BaseModel):
    """Declarative rules for one schema field."""

    type: Optional[str] = None
    required: bool = False
    default_value: Any = Field(default=None, alias="defaultValue")
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    min_length: Optional[int] = Field(default=None, alias="minLength", ge=0)
    max_length: Optional[int] = Field(default=None, alias="maxLength", ge=0)
    validate_fn: Optional[Callable[[Any], Any]] = Field(default=None, alias="validate")

    model_config = ConfigDict(frozen=True, populate_by_name=True, arbitrary_types_allowed=True)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        if v is None:
            return None
        if isinstance(v, FieldType):
            return v.value
        return str(v).lower()

    @property
    def has_default(self) -> bool:
        """True only when a default was declared, so ``None`` can be a real default."""
        return "default_value" in self.model_fields_set

    @property
    def field_type(self) -> Optional[FieldType]:
        """The declared type as a FieldType, or None for untyped/custom types."""
        if self.type is None:
            return None
        try:
            return FieldType(self.type)
        except ValueError:
            return None

    def resolve_default(self) -> Any:
        """Evaluate the default; callables are invoked on every call."""
        if callable(self.default_value):
            return self.default_value()
        return self.default_value


SchemaInput = Union["Schema", Mapping[str, Union[FieldSpec, Mapping[str, Any]]], None]


class Schema(Mapping[str, FieldSpec]):
    """
    Immutable ordered mapping of field name to FieldSpec.

    Per-field coercion functions are compiled once here, so reading rows does
    not re-dispatch on the declared type for every cell.
    """

    def __init__(self, fields: Optional[Mapping[str, Union[FieldSpec, Mapping[str, Any]]]] = None):
        specs: "OrderedDict[str, FieldSpec]" = OrderedDict()
        for name, spec in (fields or {}).items():
            specs[name] = spec if isinstance(spec, FieldSpec) else FieldSpec.model_validate(dict(spec))
        self._fields = specs

        # Imported here to keep schemas.py free of a circular import
        from sheets_orm.schema.coercion import compile_coercer

        self._coercers: "OrderedDict[str, Callable[[Any], Any]]" = OrderedDict(
            (name, compile_coercer(spec)) for name, spec in specs.items()
        )

    @classmethod
    def build(cls, schema: SchemaInput) -> "Schema":
        """Return ``schema`` if it already is a Schema, otherwise build one."""
        if isinstance(schema, Schema):
            return schema
        return cls(schema)

    # ===== MAPPING PROTOCOL =====

    def __getitem__(self, name: str) -> FieldSpec:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Schema({list(self._fields)})"

    # ===== HELPERS =====

    @property
    def field_names(self) -> List[str]:
        return list(self._fields)

    def coercer_for(self, name: str) -> Optional[Callable[[Any], Any]]:
        return self._coercers.get(name)

    def coerce_row(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """Coerce every cell of a raw row; columns unknown to the schema pass through."""
        record: Dict[str, Any] = {}
        for column, value in raw.items():
            coercer = self._coercers.get(column)
            record[column] = coercer(value) if coercer is not None and value is not None else value
        return record
