"""Cache domain models.

A cache is split into namespaces, one per kind of upstream lookup.  Each
namespace owns its own in-memory table and its own file on disk; keys from
one namespace are never looked up in the other.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class CacheNamespace(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Independent cache domains."""

    SEARCH = "search"     # TV search results, keyed by space-stripped query
    DETAILS = "details"   # TV show detail records, keyed by decimal show id


class LookupResult(BaseModel):
    """What the lookup service hands back to a route handler."""

    model_config = ConfigDict(frozen=True)

    body: bytes
    cache_hit: bool
