# sheets_orm/core/config.py
"""Environment-driven settings and logging setup."""

import logging
import os
from typing import Optional, Union

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./sheets_orm.db"
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_database_url() -> str:
    """Database URL backing the local SQL sheet store."""
    return os.getenv("SHEETS_ORM_DATABASE_URL", DEFAULT_DATABASE_URL)


def get_echo_sql() -> bool:
    return os.getenv("SHEETS_ORM_ECHO_SQL", "false").lower() == "true"


def get_log_level() -> str:
    return os.getenv("SHEETS_ORM_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """
    Attach a basic stream handler to the package logger.

    The library never calls this on import; applications opt in. When no
    level is given the ``SHEETS_ORM_LOG_LEVEL`` environment variable is used.
    """
    if level is None:
        level = get_log_level()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    package_logger = logging.getLogger("sheets_orm")
    package_logger.setLevel(level)

    if not any(getattr(h, "_sheets_orm_handler", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._sheets_orm_handler = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)

    return package_logger
