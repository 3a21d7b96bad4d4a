"""Utility modules for showtracker.

- **errors** -- exception hierarchy rooted at ShowTrackerError.
- **logging** -- structlog setup with console/JSON renderers.
- **text_normalizer** -- cache key derivation for search and detail lookups.
"""

from showtracker.utils.errors import (
    CacheLoadError,
    CacheWriteError,
    ConfigurationError,
    ShowTrackerError,
    TransportError,
    UpstreamError,
)
from showtracker.utils.logging import configure_logging, get_logger
from showtracker.utils.text_normalizer import details_cache_key, search_cache_key

__all__ = [
    "CacheLoadError",
    "CacheWriteError",
    "ConfigurationError",
    "ShowTrackerError",
    "TransportError",
    "UpstreamError",
    "configure_logging",
    "details_cache_key",
    "get_logger",
    "search_cache_key",
]
