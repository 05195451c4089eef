"""
Query option schemas and types.

This module defines the types accepted by the in-memory query engine:
where-clause operators, sort directions and the QueryOptions contract.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Operator(str, Enum):
    """Comparison operators accepted inside a where-clause condition."""

    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    IN = "$in"
    NIN = "$nin"
    LIKE = "$like"


# Evaluation order for operator objects
OPERATOR_ORDER = tuple(Operator)


class SortDirection(str, Enum):
    """Sort direction for one order-by key."""

    ASC = "asc"
    DESC = "desc"

    @property
    def multiplier(self) -> int:
        return -1 if self is SortDirection.DESC else 1


class QueryOptions(BaseModel):
    """Filter, sort and pagination options for one query."""

    where: Optional[Dict[str, Any]] = None
    order_by: Optional[Dict[str, SortDirection]] = Field(default=None, alias="orderBy")
    limit: Optional[int] = Field(default=None, ge=0)
    offset: int = Field(default=0, ge=0)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("order_by", mode="before")
    @classmethod
    def normalize_directions(cls, v):
        if v is None:
            return None
        # Anything other than "desc" sorts ascending
        return {
            field: SortDirection.DESC if str(getattr(direction, "value", direction)).lower() == "desc" else SortDirection.ASC
            for field, direction in dict(v).items()
        }

    @field_validator("offset", mode="before")
    @classmethod
    def default_offset(cls, v):
        return 0 if v is None else v

    @classmethod
    def from_any(cls, options: Any) -> "QueryOptions":
        """Accept a QueryOptions, a plain dict or None."""
        if options is None:
            return cls()
        if isinstance(options, QueryOptions):
            return options
        return cls.model_validate(dict(options))
