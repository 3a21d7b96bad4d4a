"""showtracker API layer: routes, schemas, and middleware."""

from showtracker.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    register_exception_handlers,
)
from showtracker.api.routes import router
from showtracker.api.schemas import DetailsRequest, ErrorResponse, HealthResponse, SearchRequest

__all__ = [
    "DetailsRequest",
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "HealthResponse",
    "RequestLoggingMiddleware",
    "SearchRequest",
    "register_exception_handlers",
    "router",
]
