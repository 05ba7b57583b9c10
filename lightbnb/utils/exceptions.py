"""
Custom exception classes for the LightBnB data-access layer.
Store failures are translated into this hierarchy so callers can tell
an empty result apart from a failed statement.
"""

from typing import Optional


class StoreError(Exception):
    """Base store exception class."""

    retryable: bool = False

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code or "STORE_ERROR"


class StoreNotOpenError(StoreError):
    """Operation attempted on a store handle that is not open."""

    def __init__(self, detail: str = "Store handle is not open"):
        super().__init__(detail, error_code="STORE_NOT_OPEN")


class StoreUnavailableError(StoreError):
    """Connection lost, refused, or timed out."""

    retryable = True

    def __init__(self, detail: str = "Store temporarily unavailable"):
        super().__init__(detail, error_code="STORE_UNAVAILABLE")


class QueryExecutionError(StoreError):
    """The store rejected the statement."""

    def __init__(self, detail: str):
        super().__init__(detail, error_code="QUERY_FAILED")


class ConstraintViolationError(StoreError):
    """Integrity constraint violation (foreign key, not null, check)."""

    def __init__(self, detail: str, constraint: Optional[str] = None, error_code: str = "CONSTRAINT_VIOLATION"):
        super().__init__(detail, error_code=error_code)
        self.constraint = constraint


class DuplicateRecordError(ConstraintViolationError):
    """Unique constraint violation, e.g. a second user with the same email."""

    def __init__(self, detail: str, constraint: Optional[str] = None):
        super().__init__(detail, constraint=constraint, error_code="DUPLICATE_RECORD")
