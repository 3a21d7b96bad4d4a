"""FastAPI routes for the showtracker proxy.

    Endpoint        Method  Description
    ──────────────────────────────────────────────────────────────
    /tv/search      POST    Search TV shows by title (cached)
    /tv/details     POST    Fetch one TV show by TMDB id (cached)
    /health         GET     Liveness plus cache entry counts

Lookup responses pass the upstream JSON through unchanged and carry an
``X-Cache: HIT`` or ``X-Cache: MISS`` header.  Services are resolved from
``app.state`` through ``Depends`` so tests can build an app around mocks.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request, Response

from showtracker import __version__
from showtracker.api.schemas import DetailsRequest, ErrorResponse, HealthResponse, SearchRequest
from showtracker.models.cache import LookupResult
from showtracker.services.lookup_service import LookupService
from showtracker.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed or incomplete request body"},
    500: {"model": ErrorResponse, "description": "Upstream or transport failure"},
}


# ---------------------------------------------------------------------------
# Dependency injection helpers
# ---------------------------------------------------------------------------


def _get_lookup_service(request: Request) -> LookupService:
    """Return the lookup service from application state."""
    return request.app.state.lookup_service


LookupServiceDep = Annotated[LookupService, Depends(_get_lookup_service)]


def _raw_json(result: LookupResult) -> Response:
    return Response(
        content=result.body,
        media_type="application/json",
        headers={"X-Cache": "HIT" if result.cache_hit else "MISS"},
    )


# ---------------------------------------------------------------------------
# Lookup endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/tv/search",
    responses=_ERROR_RESPONSES,
    summary="Search TV shows by title",
)
async def search_tv(body: SearchRequest, service: LookupServiceDep) -> Response:
    """Return TMDB search results for ``query``, page 1, adult titles excluded."""
    result = await service.search(body.query)
    return _raw_json(result)


@router.post(
    "/tv/details",
    responses=_ERROR_RESPONSES,
    summary="Get TV show details by id",
)
async def tv_details(body: DetailsRequest, service: LookupServiceDep) -> Response:
    """Return the TMDB detail record for ``id``."""
    result = await service.details(body.id)
    return _raw_json(result)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(request: Request, service: LookupServiceDep) -> HealthResponse:
    available: bool = request.app.state.upstream_available
    return HealthResponse(
        status="ok" if available else "degraded",
        version=__version__,
        upstream=request.app.state.upstream_name,
        upstream_available=available,
        caches=service.cache_sizes(),
    )
