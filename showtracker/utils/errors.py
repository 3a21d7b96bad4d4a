"""Custom exception hierarchy for showtracker.

All application exceptions inherit from :class:`ShowTrackerError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "tmdb") or local store caused the failure.

    ShowTrackerError  (base -- catch-all for any showtracker error)
    +-- UpstreamError        (metadata provider answered with a non-200 status)
    +-- TransportError       (network / DNS / timeout / body read failure)
    +-- CacheLoadError       (cache file exists but cannot be read or parsed)
    +-- CacheWriteError      (cache file could not be written)
    +-- ConfigurationError   (startup / missing config)

``UpstreamError`` and ``TransportError`` are terminal for the request that
raised them and surface to the client as HTTP 500.  The cache errors never
reach a client: load failures are handled at startup and write failures are
logged while the response still succeeds.
"""

from __future__ import annotations


class ShowTrackerError(Exception):
    """Base exception for all showtracker errors.

    ``__str__`` prefixes the provider name in brackets for log scanning,
    e.g. ``[tmdb] API returned status code 404: ...``.  The bare
    ``message`` is what clients see.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Upstream errors
# ---------------------------------------------------------------------------

class UpstreamError(ShowTrackerError):
    """Raised when the metadata provider returns any status other than 200.

    Carries the status code and the response body text so the caller can
    relay the provider's own diagnostic to the client.
    """

    def __init__(
        self,
        status_code: int,
        body: str = "",
        provider_name: str | None = None,
    ) -> None:
        self._status_code = status_code
        self._body = body
        super().__init__(
            message=f"API returned status code {status_code}: {body}",
            provider_name=provider_name,
        )

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def body(self) -> str:
        return self._body


class TransportError(ShowTrackerError):
    """Raised when the outbound request fails before a status is available."""

    def __init__(
        self,
        message: str = "error making request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Persistence errors
# ---------------------------------------------------------------------------

class CacheLoadError(ShowTrackerError):
    """Raised when an existing cache file is unreadable or not a JSON object."""

    def __init__(
        self,
        message: str = "Cache file could not be loaded",
        path: str | None = None,
    ) -> None:
        self._path = path
        super().__init__(message=message, provider_name="cache")

    @property
    def path(self) -> str | None:
        return self._path


class CacheWriteError(ShowTrackerError):
    """Raised when the cache table cannot be written to disk."""

    def __init__(
        self,
        message: str = "Cache file could not be written",
        path: str | None = None,
    ) -> None:
        self._path = path
        super().__init__(message=message, provider_name="cache")

    @property
    def path(self) -> str | None:
        return self._path


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(ShowTrackerError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
