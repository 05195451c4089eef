# sheets_orm/core/base_dao.py
"""Per-sheet data access: raw rows in, typed records out."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sheets_orm.schema.coercion import serialize_record
from sheets_orm.schema.schemas import Schema
from sheets_orm.store.protocol import RawRow, SheetHandle, SheetStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordResult:
    """A typed record together with the raw row it was read from."""

    record: Dict[str, Any]
    handle: RawRow


class SheetDAO:
    """Data access for one sheet of a store."""

    def __init__(self, store: SheetStore, sheet_name: str, schema: Schema, headers: Sequence[str]):
        self.store = store
        self.sheet_name = sheet_name
        self.schema = schema
        self.headers = list(headers)
        self._sheet: Optional[SheetHandle] = None

    @property
    def initialized(self) -> bool:
        return self._sheet is not None

    def init(self) -> SheetHandle:
        """Get or create the backing sheet; only the first call talks to the store."""
        if self._sheet is None:
            self._sheet = self.store.ensure_sheet(self.sheet_name, self.headers)
            logger.debug("Sheet '%s' ready with headers %s", self.sheet_name, self._sheet.header_values)
        return self._sheet

    @property
    def sheet(self) -> SheetHandle:
        return self.init()

    def to_record(self, row: RawRow) -> Dict[str, Any]:
        """Convert a raw row into a typed record."""
        return self.schema.coerce_row(row.to_dict())

    def get_all(self) -> List[RecordResult]:
        """Read every row and coerce it through the schema."""
        rows = self.sheet.get_rows()
        return [RecordResult(self.to_record(row), row) for row in rows]

    def add(self, record: Mapping[str, Any]) -> RawRow:
        """Serialize and insert one record."""
        return self.sheet.add_row(serialize_record(record, self.schema))

    def save(self, handle: RawRow, changes: Mapping[str, Any]) -> RawRow:
        """Write ``changes`` into the row and persist it."""
        for column, cell in serialize_record(changes, self.schema).items():
            handle[column] = cell
        handle.save()
        return handle

    def remove(self, handle: RawRow) -> None:
        handle.delete()
