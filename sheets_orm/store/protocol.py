# sheets_orm/store/protocol.py
"""Row store contract consumed by the DAO layer."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from sheets_orm.schema.coercion import to_cell

logger = logging.getLogger(__name__)


@runtime_checkable
class RawRow(Protocol):
    """One untyped sheet row that can be written back or removed."""

    def __getitem__(self, column: str) -> Any: ...

    def __setitem__(self, column: str, value: Any) -> None: ...

    def keys(self) -> List[str]: ...

    def to_dict(self) -> Dict[str, Any]: ...

    def save(self) -> None: ...

    def delete(self) -> None: ...


@runtime_checkable
class SheetHandle(Protocol):
    """One sheet (tab) of a store."""

    title: str

    @property
    def header_values(self) -> List[str]: ...

    def get_rows(self) -> List[RawRow]: ...

    def add_row(self, values: Mapping[str, Any]) -> RawRow: ...


@runtime_checkable
class SheetStore(Protocol):
    """A spreadsheet-like store holding named sheets."""

    def ensure_sheet(self, name: str, headers: Sequence[str]) -> SheetHandle: ...

    def get_sheet(self, name: str) -> Optional[SheetHandle]: ...


def normalize_cells(values: Mapping[str, Any], headers: Sequence[str], sheet_title: str) -> Dict[str, str]:
    """Render values as cell text, dropping columns the header row does not have."""
    cells: Dict[str, str] = {}
    for column, value in values.items():
        if column not in headers:
            logger.warning("Dropping column '%s' not present in sheet '%s'", column, sheet_title)
            continue
        cells[column] = to_cell(value)
    return cells


class BaseRow(ABC):
    """
    Shared row behaviour: cell access plus staged writes.

    Assignments are kept on the row until ``save()`` pushes them to the store.
    """

    def __init__(self, headers: Sequence[str], cells: Mapping[str, Any], row_number: int):
        self._headers = list(headers)
        self._cells: Dict[str, Any] = {header: cells.get(header, "") for header in self._headers}
        self.row_number = row_number

    def __getitem__(self, column: str) -> Any:
        return self._cells[column]

    def __setitem__(self, column: str, value: Any) -> None:
        if column not in self._headers:
            logger.warning("Ignoring assignment to unknown column '%s'", column)
            return
        self._cells[column] = to_cell(value)

    def __contains__(self, column: object) -> bool:
        return column in self._cells

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def get(self, column: str, default: Any = None) -> Any:
        return self._cells.get(column, default)

    def keys(self) -> List[str]:
        return list(self._cells)

    def items(self):
        return self._cells.items()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._cells)

    def save(self) -> None:
        self._persist(dict(self._cells))

    def delete(self) -> None:
        self._remove()

    @abstractmethod
    def _persist(self, cells: Dict[str, Any]) -> None:
        """Write the row's cells to the store."""

    @abstractmethod
    def _remove(self) -> None:
        """Remove the row from the store."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(row_number={self.row_number}, cells={self._cells!r})"
