"""API middleware: request logging, error handling, validation errors.

Starlette middleware is a stack, last added runs first.  ``create_app``
adds ``ErrorHandlingMiddleware`` and then ``RequestLoggingMiddleware``, so
the request passes logging → error handling → route, and the logged status
is the final one, after an error was turned into a JSON body.

Request validation errors never reach the middleware: FastAPI raises and
handles them inside the router, so they get a dedicated exception handler.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from showtracker.api.schemas import ErrorResponse
from showtracker.utils.errors import ShowTrackerError
from showtracker.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                cache=response.headers.get("X-Cache") if response else None,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn ``ShowTrackerError`` subclasses into HTTP 500 ``{"error": ...}``.

    The client sees the bare error message, which for upstream failures
    includes the provider's status code and body text.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except ShowTrackerError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            body = ErrorResponse(error=exc.message)
            return JSONResponse(status_code=500, content=body.model_dump())


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "invalid request"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Render a malformed or incomplete request body as HTTP 400."""
    message = _format_validation_errors(exc)
    _logger.info("request_rejected", path=str(request.url.path), error=message)
    body = ErrorResponse(error=message)
    return JSONResponse(status_code=400, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the 400 handler for request validation errors."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
