# sheets_orm/core/base_service.py
"""Model service: CRUD orchestration over one sheet."""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from sheets_orm.core.base_dao import RecordResult, SheetDAO
from sheets_orm.core.exceptions import StoreError, ValidationError
from sheets_orm.query.engine import OptionsInput, QueryEngine, apply_query_options
from sheets_orm.schema.defaults import apply_defaults
from sheets_orm.schema.schemas import Schema, SchemaInput
from sheets_orm.schema.validator import validate_data
from sheets_orm.store.protocol import SheetHandle, SheetStore
from sheets_orm.utils.ids import IdGenerator, TimestampIdGenerator

logger = logging.getLogger(__name__)

CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Model:
    """
    CRUD service for one sheet.

    Reads go store -> coercion -> query engine. Writes go id generation ->
    defaults -> timestamps -> validation -> store. Validation errors are
    raised as-is; every other failure is wrapped in a StoreError naming the
    operation and the sheet.
    """

    def __init__(
        self,
        store: SheetStore,
        sheet_name: Optional[str] = None,
        primary_key: str = "id",
        schema: SchemaInput = None,
        timestamps: bool = True,
        id_generator: Optional[IdGenerator] = None,
    ):
        self.store = store
        self.sheet_name = sheet_name or type(self).__name__
        self.primary_key = primary_key or "id"
        self.schema = Schema.build(schema)
        self.timestamps = timestamps is not False
        self.id_generator = id_generator or TimestampIdGenerator()
        self.dao = SheetDAO(store, self.sheet_name, self.schema, self.header_values())

    # ===== SETUP =====

    def header_values(self) -> List[str]:
        """Schema fields in declaration order, plus timestamp columns when enabled."""
        headers = list(self.schema.field_names)
        if self.timestamps:
            for column in (CREATED_AT, UPDATED_AT):
                if column not in headers:
                    headers.append(column)
        return headers

    @property
    def initialized(self) -> bool:
        return self.dao.initialized

    def init(self) -> "Model":
        """Ensure the backing sheet exists. Safe to call repeatedly."""
        if self.dao.initialized:
            return self
        try:
            self.dao.init()
        except Exception as e:
            message = f"Failed to initialize model {self.sheet_name}: {e}"
            logger.error(message)
            raise StoreError(message, "init", self.sheet_name) from e
        return self

    @contextmanager
    def _wrap_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except ValidationError:
            raise
        except Exception as e:
            message = f"Error {action} in {self.sheet_name}: {e}"
            logger.error(message)
            raise StoreError(message, action, self.sheet_name) from e

    # ===== INTERNAL READS =====

    def _results(self) -> List[RecordResult]:
        self.init()
        return self.dao.get_all()

    def _find_result(self, id: Any) -> Optional[RecordResult]:
        results = self._results()
        matches = apply_query_options(
            [result.record for result in results],
            {"where": {self.primary_key: id}, "limit": 1},
        )
        if not matches:
            return None
        # Match back to the row by identity; records are fresh objects per read
        for result in results:
            if result.record is matches[0]:
                return result
        return None

    # ===== READS =====

    def find_all(self, options: OptionsInput = None) -> List[Dict[str, Any]]:
        """All records, filtered, sorted and paginated by ``options``."""
        with self._wrap_errors("finding records"):
            records = [result.record for result in self._results()]
            return apply_query_options(records, options)

    def find_by_id(self, id: Any) -> Optional[Dict[str, Any]]:
        """The record whose primary key equals ``id``, or None."""
        with self._wrap_errors("finding record by ID"):
            result = self._find_result(id)
            return result.record if result is not None else None

    def find(self, criteria: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return self.find_all({"where": dict(criteria)})

    def count(self, criteria: Optional[Mapping[str, Any]] = None) -> int:
        with self._wrap_errors("counting records"):
            records = [result.record for result in self._results()]
            return QueryEngine({"where": dict(criteria or {})}).count(records)

    def get_sheet(self) -> SheetHandle:
        """Raw access to the backing sheet."""
        self.init()
        return self.dao.sheet

    # ===== WRITES =====

    def create(self, data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Create a record and return it as read back from the sheet."""
        with self._wrap_errors("creating record"):
            self.init()
            record = dict(data)

            if self.primary_key == "id" and not record.get("id"):
                record["id"] = self.id_generator.next()

            record = apply_defaults(record, self.schema)

            if self.timestamps:
                now = utc_timestamp()
                record[CREATED_AT] = now
                record[UPDATED_AT] = now

            self._validate_create(record)
            validate_data(record, self.schema)
            if record.get(self.primary_key) in (None, ""):
                raise ValidationError([f"Field '{self.primary_key}' is required"])

            self.dao.add(record)
            logger.debug("Created record %s=%s in %s", self.primary_key, record.get(self.primary_key), self.sheet_name)

            created = self._find_result(record.get(self.primary_key))
            result = created.record if created is not None else None
            self._post_create(result)
            return result

    def create_many(self, records: Sequence[Mapping[str, Any]]) -> List[Optional[Dict[str, Any]]]:
        """Create records one after another, in order."""
        return [self.create(record) for record in records]

    def update(self, id: Any, data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a sparse update; returns None when no record has this id."""
        with self._wrap_errors("updating record"):
            existing = self._find_result(id)
            if existing is None:
                return None

            changes = dict(data)
            validate_data(changes, self.schema, partial=True)
            self._validate_update(existing.record, changes)

            if self.timestamps:
                changes[UPDATED_AT] = utc_timestamp()

            self.dao.save(existing.handle, changes)

            updated = self._find_result(changes.get(self.primary_key, id))
            result = updated.record if updated is not None else None
            self._post_update(result)
            return result

    def delete(self, id: Any) -> bool:
        """Delete a record; returns False when no record has this id."""
        with self._wrap_errors("deleting record"):
            existing = self._find_result(id)
            if existing is None:
                return False

            self._validate_delete(existing.record)
            self.dao.remove(existing.handle)
            self._post_delete(existing.record)
            return True

    # ===== HOOKS (OVERRIDE IN SUBCLASSES) =====

    def _validate_create(self, record: Dict[str, Any]) -> None:
        """Extra checks before creation. Raise ValidationError to reject."""
        pass

    def _validate_update(self, record: Dict[str, Any], changes: Dict[str, Any]) -> None:
        """Extra checks before an update."""
        pass

    def _validate_delete(self, record: Dict[str, Any]) -> None:
        pass

    def _post_create(self, record: Optional[Dict[str, Any]]) -> None:
        pass

    def _post_update(self, record: Optional[Dict[str, Any]]) -> None:
        pass

    def _post_delete(self, record: Dict[str, Any]) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sheet_name={self.sheet_name!r}, primary_key={self.primary_key!r})"
