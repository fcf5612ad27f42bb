"""Translation of service and completion errors into HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from graph_registry.exceptions import ErrorKind, GraphDataError, InvalidAIResponseError
from graph_registry.llm.exceptions import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMError,
    LLMProviderNotConfiguredError,
    LLMRateLimitError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.TRANSIENT: 503,
    ErrorKind.PERMANENT: 500,
}


def graph_data_error_status(error: GraphDataError) -> int:
    """HTTP status for a service error."""
    if isinstance(error, InvalidAIResponseError):
        return 502
    return _STATUS_BY_KIND.get(error.kind, 500)


def llm_error_status(error: LLMError) -> int:
    """HTTP status for a completion API error."""
    if isinstance(error, LLMRateLimitError):
        return 429
    if isinstance(error, (LLMAuthenticationError, LLMProviderNotConfiguredError)):
        return 503
    if isinstance(error, LLMConnectionError):
        return 504
    return 502


async def _handle_graph_data_error(request: Request, exc: GraphDataError) -> JSONResponse:
    return JSONResponse(
        status_code=graph_data_error_status(exc),
        content={"detail": exc.message, "kind": exc.kind.value},
    )


async def _handle_llm_error(request: Request, exc: LLMError) -> JSONResponse:
    logger.error(f"Completion API error on {request.url.path}: {exc}")
    headers = {}
    if isinstance(exc, LLMRateLimitError) and exc.retry_after is not None:
        headers["Retry-After"] = str(int(exc.retry_after))
    return JSONResponse(
        status_code=llm_error_status(exc),
        content={"detail": "Details generation is unavailable", "provider": exc.provider},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""
    app.add_exception_handler(GraphDataError, _handle_graph_data_error)
    app.add_exception_handler(LLMError, _handle_llm_error)
