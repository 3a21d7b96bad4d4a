"""Cached TV search and detail lookups.

Every lookup walks the same path:

    Received → KeyDerived ─┬─ hit  → respond with cached body
                           └─ miss → fetch ─┬─ ok    → store, respond
                                            └─ error → raise, nothing stored

The body returned on a hit is the exact byte sequence stored on the
earlier miss.  Storing happens before the caller gets its response, so a
second identical request issued after the first returns is always a hit.

Two concurrent misses for the same key both go upstream; each insert is
atomic with its save, and the later one wins.
"""

from __future__ import annotations

from urllib.parse import quote_plus

import structlog

from showtracker.interfaces.cache_provider import ICacheProvider
from showtracker.interfaces.metadata_provider import IMetadataProvider
from showtracker.models.cache import LookupResult
from showtracker.utils.logging import get_logger
from showtracker.utils.text_normalizer import details_cache_key, search_cache_key

_DEFAULT_BASE_URL = "https://api.themoviedb.org/3"

_logger: structlog.BoundLogger = get_logger(__name__)


class LookupService:
    """Composes key derivation, the two caches and the upstream fetcher.

    Parameters
    ----------
    metadata_provider:
        Performs the authenticated GET on a cache miss.
    search_cache:
        Owner of the search namespace.
    details_cache:
        Owner of the details namespace.
    base_url:
        Upstream API root, without a trailing slash.
    language:
        Locale sent with every upstream request.
    include_adult:
        Value of the ``include_adult`` search parameter.
    page:
        Result page requested from the search endpoint.
    """

    def __init__(
        self,
        *,
        metadata_provider: IMetadataProvider,
        search_cache: ICacheProvider,
        details_cache: ICacheProvider,
        base_url: str = _DEFAULT_BASE_URL,
        language: str = "en-US",
        include_adult: bool = False,
        page: int = 1,
    ) -> None:
        self._provider = metadata_provider
        self._search_cache = search_cache
        self._details_cache = details_cache
        self._base_url = base_url.rstrip("/")
        self._language = language
        self._include_adult = include_adult
        self._page = page

    # -- URL construction ------------------------------------------------------

    def search_url(self, query: str) -> str:
        """Return the upstream TV search URL for *query*."""
        return (
            f"{self._base_url}/search/tv"
            f"?include_adult={str(self._include_adult).lower()}"
            f"&language={self._language}"
            f"&page={self._page}"
            f"&query={quote_plus(query)}"
        )

    def details_url(self, show_id: int) -> str:
        """Return the upstream TV detail URL for *show_id*."""
        return f"{self._base_url}/tv/{show_id}?language={self._language}"

    # -- Lookups ---------------------------------------------------------------

    async def search(self, query: str) -> LookupResult:
        """Return search results for *query*, from cache when possible."""
        return await self._lookup(
            self._search_cache,
            search_cache_key(query),
            self.search_url(query),
        )

    async def details(self, show_id: int) -> LookupResult:
        """Return the detail record for *show_id*, from cache when possible."""
        return await self._lookup(
            self._details_cache,
            details_cache_key(show_id),
            self.details_url(show_id),
        )

    async def _lookup(self, cache: ICacheProvider, key: str, url: str) -> LookupResult:
        cached = cache.get(key)
        if cached is not None:
            _logger.info("lookup_served_from_cache", namespace=cache.namespace.value, key=key)
            return LookupResult(body=cached, cache_hit=True)

        # UpstreamError / TransportError propagate; nothing is stored.
        body = await self._provider.fetch(url)

        # A failed save is logged by the cache and does not fail the lookup.
        await cache.set(key, body)
        _logger.info(
            "lookup_fetched_upstream",
            namespace=cache.namespace.value,
            key=key,
            bytes=len(body),
        )
        return LookupResult(body=body, cache_hit=False)

    # -- Introspection ---------------------------------------------------------

    def cache_sizes(self) -> dict[str, int]:
        """Return the number of entries per namespace."""
        return {
            self._search_cache.namespace.value: self._search_cache.size(),
            self._details_cache.namespace.value: self._details_cache.size(),
        }
