"""Abstract base class for cache table owners.

A cache provider owns the in-memory table for one namespace and is
responsible for keeping its durable copy in step.  Handlers receive the
provider for their namespace through dependency injection; nothing reaches
a cache table through module globals.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from showtracker.models.cache import CacheNamespace


class ICacheProvider(ABC):
    """Contract for namespace-scoped key/payload caches.

    Lookups are synchronous reads of process memory.  Writes are async
    because they persist the table before returning.
    """

    @property
    @abstractmethod
    def namespace(self) -> CacheNamespace:
        """The namespace this provider owns."""

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the payload stored under *key*, or ``None`` on a miss.

        Parameters
        ----------
        key:
            A cache key as produced by ``showtracker.utils.text_normalizer``.
            The empty string is a valid key.
        """

    @abstractmethod
    async def set(self, key: str, value: bytes) -> bool:
        """Insert *value* under *key* and persist the table.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The opaque payload, stored byte for byte.

        Returns
        -------
        bool
            ``True`` if the table was persisted, ``False`` if the write to
            durable storage failed.  The in-memory insert is kept either way.
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present in the table."""

    @abstractmethod
    def size(self) -> int:
        """Return the number of entries in the table."""
