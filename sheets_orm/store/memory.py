# sheets_orm/store/memory.py
"""In-process sheet store, handy for tests and scratch work."""

import itertools
import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sheets_orm.core.exceptions import StoreError
from sheets_orm.store.protocol import BaseRow, normalize_cells

logger = logging.getLogger(__name__)


class MemoryRow(BaseRow):
    def __init__(self, sheet: "MemorySheet", row_number: int, cells: Mapping[str, Any]):
        super().__init__(sheet.header_values, cells, row_number)
        self._sheet = sheet

    def _persist(self, cells: Dict[str, Any]) -> None:
        self._sheet._write(self.row_number, cells)

    def _remove(self) -> None:
        self._sheet._remove(self.row_number)


class MemorySheet:
    """One sheet: an ordered set of rows keyed by row number."""

    def __init__(self, title: str, headers: Sequence[str]):
        self.title = title
        self._headers = list(headers)
        self._rows: "OrderedDict[int, Dict[str, str]]" = OrderedDict()
        self._row_numbers = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def header_values(self) -> List[str]:
        return list(self._headers)

    def get_rows(self) -> List[MemoryRow]:
        with self._lock:
            snapshot = [(number, dict(cells)) for number, cells in self._rows.items()]
        return [MemoryRow(self, number, cells) for number, cells in snapshot]

    def add_row(self, values: Mapping[str, Any]) -> MemoryRow:
        cells = normalize_cells(values, self._headers, self.title)
        full = {header: cells.get(header, "") for header in self._headers}
        with self._lock:
            number = next(self._row_numbers)
            self._rows[number] = full
        return MemoryRow(self, number, full)

    def _write(self, row_number: int, cells: Dict[str, Any]) -> None:
        with self._lock:
            if row_number not in self._rows:
                raise StoreError(f"Row {row_number} no longer exists in sheet '{self.title}'", "save", self.title)
            self._rows[row_number].update(cells)

    def _remove(self, row_number: int) -> None:
        with self._lock:
            if self._rows.pop(row_number, None) is None:
                raise StoreError(f"Row {row_number} no longer exists in sheet '{self.title}'", "delete", self.title)

    def __len__(self) -> int:
        return len(self._rows)


class InMemorySheetStore:
    """Sheet store keeping every sheet in process memory."""

    def __init__(self):
        self._sheets: Dict[str, MemorySheet] = {}
        self._lock = threading.Lock()

    def ensure_sheet(self, name: str, headers: Sequence[str]) -> MemorySheet:
        """Get the sheet called ``name``, creating it with ``headers`` if needed."""
        with self._lock:
            sheet = self._sheets.get(name)
            if sheet is None:
                if len(set(headers)) != len(headers):
                    raise StoreError(f"Duplicate headers for sheet '{name}': {list(headers)}", "ensure_sheet", name)
                sheet = MemorySheet(name, headers)
                self._sheets[name] = sheet
                logger.info("Created in-memory sheet '%s' with headers %s", name, list(headers))
        return sheet

    def get_sheet(self, name: str) -> Optional[MemorySheet]:
        return self._sheets.get(name)

    @property
    def sheet_titles(self) -> List[str]:
        return list(self._sheets)
