"""Error classification for database store failures."""

from enum import Enum
from typing import Optional

from sqlalchemy import exc as sa_exc


class StoreErrorKind(Enum):
    """Classification of store errors."""

    CONNECTION_FAILED = "connection_failed"
    QUERY_FAILED = "query_failed"


class StoreError(Exception):
    """A statement could not be run against the store."""

    def __init__(self, kind: StoreErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"StoreError({self.kind.name}, {self.message!r})"


_CONNECTION_ERRORS = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.DisconnectionError,
    sa_exc.TimeoutError,
)


def classify_error(error: Optional[BaseException]) -> StoreErrorKind:
    """
    Classify a driver-level exception.

    Args:
        error: The exception raised by SQLAlchemy or the DBAPI driver

    Returns:
        CONNECTION_FAILED when the database could not be reached or the
        connection dropped, QUERY_FAILED for everything else
    """
    if isinstance(error, _CONNECTION_ERRORS):
        return StoreErrorKind.CONNECTION_FAILED
    if isinstance(error, sa_exc.DBAPIError) and error.connection_invalidated:
        return StoreErrorKind.CONNECTION_FAILED
    return StoreErrorKind.QUERY_FAILED


def describe_error(error: BaseException) -> str:
    """Return the driver's own message, without SQL text or bound parameters."""
    if isinstance(error, sa_exc.DBAPIError) and error.orig is not None:
        return str(error.orig).strip()
    return str(error)


def wrap_error(error: BaseException) -> StoreError:
    """Convert a driver exception into a StoreError."""
    return StoreError(classify_error(error), describe_error(error))
