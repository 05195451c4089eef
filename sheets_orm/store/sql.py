# sheets_orm/store/sql.py
"""Local sheet store backed by a SQL database through SQLAlchemy."""

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import Column, Integer, MetaData, Table, Text, delete, inspect, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from sheets_orm.core.database import create_session_factory, create_sheet_engine
from sheets_orm.core.exceptions import StoreError
from sheets_orm.store.protocol import BaseRow, normalize_cells

logger = logging.getLogger(__name__)

# Hidden identity column; never exposed as a header
ROW_NUMBER_COLUMN = "_row_number"


class SqlRow(BaseRow):
    def __init__(self, sheet: "SqlSheet", row_number: int, cells: Mapping[str, Any]):
        super().__init__(sheet.header_values, cells, row_number)
        self._sheet = sheet

    def _persist(self, cells: Dict[str, Any]) -> None:
        self._sheet._write(self.row_number, cells)

    def _remove(self) -> None:
        self._sheet._remove(self.row_number)


class SqlSheet:
    """One sheet stored as a table: one text column per header."""

    def __init__(self, store: "SqlSheetStore", table: Table):
        self._store = store
        self.table = table
        self.title = table.name
        self._headers = [column.name for column in table.columns if column.name != ROW_NUMBER_COLUMN]

    @property
    def header_values(self) -> List[str]:
        return list(self._headers)

    def get_rows(self) -> List[SqlRow]:
        query = select(self.table).order_by(self.table.c[ROW_NUMBER_COLUMN])
        with self._store.session(f"reading rows of '{self.title}'") as session:
            result = session.execute(query)
            rows = [dict(row._mapping) for row in result]

        logger.debug("Read %d rows from sheet '%s'", len(rows), self.title)
        return [
            SqlRow(self, row[ROW_NUMBER_COLUMN], {h: row.get(h) or "" for h in self._headers})
            for row in rows
        ]

    def add_row(self, values: Mapping[str, Any]) -> SqlRow:
        cells = normalize_cells(values, self._headers, self.title)
        full = {header: cells.get(header, "") for header in self._headers}

        with self._store.session(f"adding a row to '{self.title}'") as session:
            result = session.execute(insert(self.table).values(full))
            session.commit()
            row_number = result.inserted_primary_key[0]

        return SqlRow(self, row_number, full)

    def _write(self, row_number: int, cells: Dict[str, Any]) -> None:
        values = {column: value for column, value in cells.items() if column in self._headers}
        if not values:
            return
        statement = (
            update(self.table)
            .where(self.table.c[ROW_NUMBER_COLUMN] == row_number)
            .values(values)
        )
        with self._store.session(f"saving row {row_number} of '{self.title}'") as session:
            result = session.execute(statement)
            session.commit()
            if result.rowcount == 0:
                raise StoreError(f"Row {row_number} no longer exists in sheet '{self.title}'", "save", self.title)

    def _remove(self, row_number: int) -> None:
        statement = delete(self.table).where(self.table.c[ROW_NUMBER_COLUMN] == row_number)
        with self._store.session(f"deleting row {row_number} of '{self.title}'") as session:
            result = session.execute(statement)
            session.commit()
            if result.rowcount == 0:
                raise StoreError(f"Row {row_number} no longer exists in sheet '{self.title}'", "delete", self.title)


class _GuardedSession:
    """Session context that turns SQLAlchemy failures into StoreError."""

    def __init__(self, factory, action: str):
        self._factory = factory
        self._action = action
        self._session = None

    def __enter__(self):
        self._session = self._factory()
        return self._session

    def __exit__(self, exc_type, exc, tb):
        try:
            if exc is not None:
                self._session.rollback()
        finally:
            self._session.close()
        if isinstance(exc, SQLAlchemyError):
            raise StoreError(f"Database error while {self._action}: {exc}") from exc
        return False


class SqlSheetStore:
    """
    Sheet store persisting every sheet as a table in a SQL database.

    Cells are stored as text, exactly as a spreadsheet would hold them; type
    coercion happens in the schema layer on the way out.
    """

    def __init__(self, engine: Optional[Engine] = None, database_url: Optional[str] = None):
        self.engine = engine or create_sheet_engine(database_url)
        self._session_factory = create_session_factory(self.engine)
        self.metadata = MetaData()
        self._sheets: Dict[str, SqlSheet] = {}
        self._lock = threading.Lock()

    def session(self, action: str) -> _GuardedSession:
        return _GuardedSession(self._session_factory, action)

    def ensure_sheet(self, name: str, headers: Sequence[str]) -> SqlSheet:
        """Get the sheet called ``name``, creating its table if it does not exist."""
        with self._lock:
            sheet = self._sheets.get(name)
            if sheet is not None:
                return sheet

            try:
                if inspect(self.engine).has_table(name):
                    table = Table(name, self.metadata, autoload_with=self.engine)
                    logger.debug("Loaded existing sheet table '%s'", name)
                else:
                    table = self._create_table(name, headers)
                    logger.info("Created sheet table '%s' with headers %s", name, list(headers))
            except SQLAlchemyError as e:
                raise StoreError(f"Failed to ensure sheet '{name}': {e}", "ensure_sheet", name) from e

            sheet = SqlSheet(self, table)
            self._sheets[name] = sheet
            return sheet

    def get_sheet(self, name: str) -> Optional[SqlSheet]:
        sheet = self._sheets.get(name)
        if sheet is None and inspect(self.engine).has_table(name):
            return self.ensure_sheet(name, [])
        return sheet

    def _create_table(self, name: str, headers: Sequence[str]) -> Table:
        if ROW_NUMBER_COLUMN in headers:
            raise StoreError(f"Header '{ROW_NUMBER_COLUMN}' is reserved", "ensure_sheet", name)
        if len(set(headers)) != len(headers):
            raise StoreError(f"Duplicate headers for sheet '{name}': {list(headers)}", "ensure_sheet", name)

        table = Table(
            name,
            self.metadata,
            Column(ROW_NUMBER_COLUMN, Integer, primary_key=True, autoincrement=True),
            *[Column(header, Text, nullable=False, default="") for header in headers],
        )
        table.create(self.engine)
        return table

    def drop_all(self) -> None:
        """Drop every sheet table this store knows about."""
        with self._lock:
            self.metadata.drop_all(self.engine)
            self.metadata.clear()
            self._sheets.clear()
