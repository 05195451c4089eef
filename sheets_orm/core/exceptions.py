# sheets_orm/core/exceptions.py
"""Exception hierarchy for the sheets ORM."""

from typing import List, Optional


class SheetsORMError(Exception):
    """Base class for every error raised by the package."""
    pass


class ValidationError(SheetsORMError):
    """Raised when a candidate record violates its schema.

    All violated rules are collected before raising, so ``errors`` holds one
    message per failed rule.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(f"Validation failed: {', '.join(self.errors)}")


class StoreError(SheetsORMError):
    """Raised when a row store operation fails."""

    def __init__(self, message: str, operation: Optional[str] = None, sheet_name: Optional[str] = None):
        self.operation = operation
        self.sheet_name = sheet_name
        super().__init__(message)


class ModelDefinitionError(SheetsORMError):
    """Raised when a model is defined twice or with invalid options."""
    pass


class ModelNotFoundError(SheetsORMError, KeyError):
    """Raised when looking up a model that was never defined."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""
