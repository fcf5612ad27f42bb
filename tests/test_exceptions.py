"""Tests for error classification."""

import pytest
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    OperationalError,
    ProgrammingError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from graph_registry.exceptions import (
    ErrorKind,
    GraphDataFetchError,
    GraphDataSaveError,
    InvalidAIResponseError,
    classify_store_error,
)


@pytest.mark.parametrize(
    "error",
    [
        OperationalError("SELECT 1", {}, Exception("database is locked")),
        DisconnectionError("connection dropped"),
        PoolTimeoutError("QueuePool limit reached"),
        ConnectionResetError("Connection reset by peer"),
    ],
)
def test_connectivity_errors_are_transient(error):
    assert classify_store_error(error) == ErrorKind.TRANSIENT


@pytest.mark.parametrize(
    "error",
    [
        IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")),
        ProgrammingError("SELECT", {}, Exception("no such table")),
        ValueError("bad value"),
    ],
)
def test_other_errors_are_permanent(error):
    assert classify_store_error(error) == ErrorKind.PERMANENT


def test_fixed_messages():
    """Each error type carries one fixed user-facing message."""
    assert GraphDataSaveError().message == "Failed to save Graph Data"
    assert GraphDataFetchError().message == "Failed to fetch Graph Data"
    assert InvalidAIResponseError().message == "AI response format invalid or empty"
    assert InvalidAIResponseError().kind == ErrorKind.VALIDATION_FAILED
