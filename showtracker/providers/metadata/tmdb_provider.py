"""TMDB provider implementing IMetadataProvider.

Issues a single authenticated GET against The Movie Database v3 API using
a v4 read-access token as a bearer credential.  The body is returned as
raw bytes; nothing here parses or validates TMDB's JSON.

No retries and no timeout of our own: the shared ``httpx.AsyncClient``
built in ``showtracker.main`` carries httpx's default timeout.
"""

from __future__ import annotations

import httpx

from showtracker.interfaces.metadata_provider import IMetadataProvider
from showtracker.utils.errors import TransportError, UpstreamError
from showtracker.utils.logging import get_logger

_PROVIDER_NAME = "tmdb"


class TMDBProvider(IMetadataProvider):
    """Upstream fetcher for the TMDB API.

    Parameters
    ----------
    http_client:
        Shared async client; owned and closed by the application lifespan.
    bearer_token:
        TMDB read-access token sent as ``Authorization: Bearer <token>``.
    """

    def __init__(self, http_client: httpx.AsyncClient, bearer_token: str) -> None:
        self._http = http_client
        self._bearer_token = bearer_token
        self._logger = get_logger(__name__)

    def _headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "Authorization": f"Bearer {self._bearer_token}",
        }

    # -- IMetadataProvider implementation --------------------------------------

    async def fetch(self, url: str) -> bytes:
        try:
            response = await self._http.get(url, headers=self._headers(), follow_redirects=True)
        except httpx.HTTPError as exc:
            self._logger.error("upstream_request_failed", url=url, error=str(exc))
            raise TransportError(
                message=f"error making request: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if response.status_code != httpx.codes.OK:
            self._logger.warning(
                "upstream_http_error",
                url=url,
                status=response.status_code,
            )
            raise UpstreamError(
                status_code=response.status_code,
                body=response.text,
                provider_name=_PROVIDER_NAME,
            )

        self._logger.debug("upstream_fetch_complete", url=url, bytes=len(response.content))
        return response.content

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        return bool(self._bearer_token)
