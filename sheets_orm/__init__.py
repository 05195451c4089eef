"""sheets_orm - use a spreadsheet as a lightweight record store with schemas and queries."""

from sheets_orm.core.base_dao import RecordResult, SheetDAO
from sheets_orm.core.base_service import Model
from sheets_orm.core.config import configure_logging
from sheets_orm.core.exceptions import (
    ModelDefinitionError,
    ModelNotFoundError,
    SheetsORMError,
    StoreError,
    ValidationError,
)
from sheets_orm.orm import SheetsORM
from sheets_orm.query import QueryEngine, QueryOptions, SortDirection, apply_query_options, filter_records, sort_records
from sheets_orm.schema import FieldSpec, FieldType, Schema, apply_defaults, coerce, validate_data
from sheets_orm.store import InMemorySheetStore, SqlSheetStore
from sheets_orm.utils.ids import IdGenerator, SequentialIdGenerator, TimestampIdGenerator

__all__ = [
    # Main API
    "SheetsORM",
    "Model",
    "SheetDAO",
    "RecordResult",
    # Schema
    "FieldSpec",
    "FieldType",
    "Schema",
    "apply_defaults",
    "validate_data",
    "coerce",
    # Query
    "QueryEngine",
    "QueryOptions",
    "SortDirection",
    "apply_query_options",
    "filter_records",
    "sort_records",
    # Stores
    "InMemorySheetStore",
    "SqlSheetStore",
    # Ids
    "IdGenerator",
    "SequentialIdGenerator",
    "TimestampIdGenerator",
    # Errors
    "SheetsORMError",
    "ValidationError",
    "StoreError",
    "ModelDefinitionError",
    "ModelNotFoundError",
    # Logging
    "configure_logging",
]

__version__ = "0.1.0"
