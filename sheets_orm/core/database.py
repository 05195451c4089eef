# sheets_orm/core/database.py
"""Engine and session factories for the local SQL sheet store."""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sheets_orm.core.config import get_database_url, get_echo_sql


def create_sheet_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Create an engine, defaulting to ``SHEETS_ORM_DATABASE_URL``."""
    url = database_url or get_database_url()
    if echo is None:
        echo = get_echo_sql()

    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory SQLite only lives as long as its single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    return create_engine(url, echo=echo, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory matching the rest of the package's session handling."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
