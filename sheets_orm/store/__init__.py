"""
Row stores: the spreadsheet-like collaborators the DAO layer reads and writes.

Main Components:
- SheetStore / SheetHandle / RawRow: the contract
- InMemorySheetStore: process-local sheets
- SqlSheetStore: sheets persisted as SQL tables through SQLAlchemy
"""

from .protocol import BaseRow, RawRow, SheetHandle, SheetStore, normalize_cells
from .memory import InMemorySheetStore, MemoryRow, MemorySheet
from .sql import ROW_NUMBER_COLUMN, SqlRow, SqlSheet, SqlSheetStore

__all__ = [
    # Contract
    "RawRow",
    "SheetHandle",
    "SheetStore",
    "BaseRow",
    "normalize_cells",
    # In-memory
    "InMemorySheetStore",
    "MemorySheet",
    "MemoryRow",
    # SQL
    "SqlSheetStore",
    "SqlSheet",
    "SqlRow",
    "ROW_NUMBER_COLUMN",
]
