"""showtracker domain models."""

from __future__ import annotations

from showtracker.models.cache import CacheNamespace, LookupResult

__all__ = [
    "CacheNamespace",
    "LookupResult",
]
