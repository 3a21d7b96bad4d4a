"""showtracker FastAPI application entry point.

Wires the cache providers, the TMDB fetcher and the lookup service together
and exposes them on ``app.state`` for the routes.  Configuration comes from
``.env`` / environment variables and ``config/config.yaml``.

Startup sequence (in the lifespan hook):

  1. Refuse to start without ``TMDB_BEARER_TOKEN``.
  2. Load both cache tables from disk.  A missing file is an empty table;
     a corrupt one is either logged and discarded or fatal, depending on
     ``CACHE_STRICT_LOAD``.
  3. Open the shared ``httpx.AsyncClient`` (closed again on shutdown).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from showtracker import __version__
from showtracker.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    register_exception_handlers,
)
from showtracker.api.routes import router as api_router
from showtracker.config.loader import load_config
from showtracker.config.settings import Settings
from showtracker.models.cache import CacheNamespace
from showtracker.providers.cache.json_file_cache import JsonFileCacheProvider
from showtracker.providers.metadata.tmdb_provider import TMDBProvider
from showtracker.services.lookup_service import LookupService
from showtracker.utils.errors import ConfigurationError
from showtracker.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def _build_caches(app_settings: Settings) -> dict[CacheNamespace, JsonFileCacheProvider]:
    """Create and load one cache provider per namespace."""
    caches: dict[CacheNamespace, JsonFileCacheProvider] = {}
    for namespace in CacheNamespace:
        cache = JsonFileCacheProvider(namespace, app_settings.cache_path(namespace))
        cache.load(strict=app_settings.cache_strict_load)
        caches[namespace] = cache
    return caches


def _build_all(app_settings: Settings, config_path: str = "config/config.yaml") -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.

    Raises
    ------
    ConfigurationError
        ``TMDB_BEARER_TOKEN`` is not set.
    CacheLoadError
        A cache file is corrupt and ``CACHE_STRICT_LOAD`` is enabled.
    """
    if not app_settings.tmdb_bearer_token:
        raise ConfigurationError(
            message="TMDB_BEARER_TOKEN environment variable is required",
            provider_name="tmdb",
        )

    search_defaults = load_config(config_path)["tmdb"]["search"]

    caches = _build_caches(app_settings)

    http_client = httpx.AsyncClient()
    metadata_provider = TMDBProvider(
        http_client=http_client,
        bearer_token=app_settings.tmdb_bearer_token,
    )

    lookup_service = LookupService(
        metadata_provider=metadata_provider,
        search_cache=caches[CacheNamespace.SEARCH],
        details_cache=caches[CacheNamespace.DETAILS],
        base_url=app_settings.tmdb_base_url,
        language=app_settings.tmdb_language,
        include_adult=bool(search_defaults["include_adult"]),
        page=int(search_defaults["page"]),
    )

    return {
        "http_client": http_client,
        "search_cache": caches[CacheNamespace.SEARCH],
        "details_cache": caches[CacheNamespace.DETAILS],
        "lookup_service": lookup_service,
        "upstream_name": metadata_provider.get_provider_name(),
        "upstream_available": metadata_provider.is_available(),
    }


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        components = _build_all(app_settings)

        for key, value in components.items():
            setattr(application.state, key, value)

        _logger.info(
            "app_startup",
            version=__version__,
            environment=app_settings.app_env,
            cache_dir=app_settings.cache_dir,
            caches=components["lookup_service"].cache_sizes(),
        )

        yield

        http_client: httpx.AsyncClient = components["http_client"]
        await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")

    application = FastAPI(
        title="showtracker API",
        version=__version__,
        description=(
            "Caching proxy for TMDB TV search and detail lookups. Results are "
            "persisted to local JSON files so repeated queries skip the upstream call."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(application)

    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "showtracker.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
