"""Abstract base class for upstream metadata providers.

A metadata provider performs exactly one authenticated GET per call and
returns the response body untouched.  URL construction belongs to the
caller; the provider never inspects or rewrites query parameters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IMetadataProvider(ABC):
    """Contract for authenticated upstream fetches."""

    @abstractmethod
    async def fetch(self, url: str) -> bytes:
        """GET *url* and return the raw response body.

        Parameters
        ----------
        url:
            Fully-formed URL including every query parameter, with any
            user-supplied text already percent-encoded.

        Returns
        -------
        bytes
            The body of a 200 response, unmodified.

        Raises
        ------
        showtracker.utils.errors.UpstreamError
            The provider answered with any status other than 200.
        showtracker.utils.errors.TransportError
            The request failed before a complete response was read.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider, e.g. ``"tmdb"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credentials it needs."""
