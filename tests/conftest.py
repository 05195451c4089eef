"""
Test configuration and shared fixtures for the sheets_orm test suite.
Provides schemas, sample records and store setup.
"""

import pytest
from typing import Any, Dict, List

from sheets_orm.core.database import create_sheet_engine
from sheets_orm.orm import SheetsORM
from sheets_orm.schema.schemas import Schema
from sheets_orm.store.memory import InMemorySheetStore
from sheets_orm.store.sql import SqlSheetStore
from sheets_orm.utils.ids import SequentialIdGenerator


# ===== SCHEMA FIXTURES =====

@pytest.fixture
def user_schema() -> Schema:
    """Schema with required, defaulted and constrained fields"""
    return Schema({
        "id": {"type": "string", "required": True},
        "name": {"type": "string", "required": True, "minLength": 2},
        "age": {"type": "number", "defaultValue": 0},
    })


@pytest.fixture
def product_schema() -> Schema:
    """Schema covering every field type"""
    return Schema({
        "id": {"type": "string", "required": True},
        "name": {"type": "string", "required": True, "minLength": 2, "maxLength": 40},
        "price": {"type": "number", "required": True, "min": 0},
        "category": {"type": "string"},
        "inStock": {"type": "boolean", "defaultValue": True},
        "releasedAt": {"type": "date"},
        "attributes": {"type": "json"},
    })


# ===== SAMPLE DATA FIXTURES =====

@pytest.fixture
def people() -> List[Dict[str, Any]]:
    """Three records in insertion order"""
    return [
        {"name": "Alice", "age": 30},
        {"name": "Bob", "age": 25},
        {"name": "Eve", "age": 22},
    ]


@pytest.fixture
def staff() -> List[Dict[str, Any]]:
    """Five records across two departments, with an age tie in engineering"""
    return [
        {"id": "1", "name": "Dana", "dept": "sales", "age": 41},
        {"id": "2", "name": "Ari", "dept": "engineering", "age": 35},
        {"id": "3", "name": "Lee", "dept": "engineering", "age": 28},
        {"id": "4", "name": "Kim", "dept": "sales", "age": 23},
        {"id": "5", "name": "Ola", "dept": "engineering", "age": 35},
    ]


# ===== STORE SETUP =====

@pytest.fixture
def memory_store() -> InMemorySheetStore:
    return InMemorySheetStore()


@pytest.fixture
def sql_store():
    """SQL store on a private in-memory SQLite database"""
    store = SqlSheetStore(engine=create_sheet_engine("sqlite:///:memory:", echo=False))
    try:
        yield store
    finally:
        store.drop_all()
        store.engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def any_store(request):
    """Runs a test once per store implementation"""
    if request.param == "memory":
        yield InMemorySheetStore()
        return

    store = SqlSheetStore(engine=create_sheet_engine("sqlite:///:memory:", echo=False))
    try:
        yield store
    finally:
        store.drop_all()
        store.engine.dispose()


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def orm(any_store) -> SheetsORM:
    return SheetsORM(any_store)
