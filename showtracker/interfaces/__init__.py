"""Interfaces for the pluggable parts of showtracker.

Route handlers and the lookup service only talk to these abstract bases;
concrete adapters live in ``showtracker.providers`` and are wired up in
``showtracker.main``.  Tests inject mocks built with ``MagicMock(spec=...)``.

    Interface            →  Concrete implementation
    ─────────────────────────────────────────────────────
    ICacheProvider       →  JsonFileCacheProvider
    IMetadataProvider    →  TMDBProvider
"""

from showtracker.interfaces.cache_provider import ICacheProvider
from showtracker.interfaces.metadata_provider import IMetadataProvider

__all__ = [
    "ICacheProvider",
    "IMetadataProvider",
]
