"""Service-level exceptions with error classification."""

from enum import Enum

from sqlalchemy.exc import (
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError


class ErrorKind(str, Enum):
    """How a failure should be treated by callers."""

    NOT_FOUND = "not_found"
    TRANSIENT = "transient"  # Safe to retry later
    PERMANENT = "permanent"
    VALIDATION_FAILED = "validation_failed"


class GraphDataError(Exception):
    """Base exception for graph data operations."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.PERMANENT):
        self.message = message
        self.kind = kind
        super().__init__(message)


class GraphDataSaveError(GraphDataError):
    """Storing a graph data record failed."""

    def __init__(self, kind: ErrorKind = ErrorKind.PERMANENT):
        super().__init__("Failed to save Graph Data", kind)


class GraphDataFetchError(GraphDataError):
    """Reading graph data records failed."""

    def __init__(self, kind: ErrorKind = ErrorKind.PERMANENT):
        super().__init__("Failed to fetch Graph Data", kind)


class InvalidAIResponseError(GraphDataError):
    """The completion API returned content without a usable title/description."""

    def __init__(self) -> None:
        super().__init__(
            "AI response format invalid or empty", ErrorKind.VALIDATION_FAILED
        )


# Errors raised by the database layer
STORE_ERRORS = (SQLAlchemyError, OSError)

_TRANSIENT_ERRORS = (
    OperationalError,
    DisconnectionError,
    InterfaceError,
    PoolTimeoutError,
    OSError,
)


def classify_store_error(error: Exception) -> ErrorKind:
    """Classify a database error as transient or permanent.

    Connection loss, pool exhaustion and locked databases are transient.
    Constraint violations and programming errors are permanent.
    """
    if isinstance(error, _TRANSIENT_ERRORS):
        return ErrorKind.TRANSIENT
    return ErrorKind.PERMANENT
