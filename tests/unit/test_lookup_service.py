"""Unit tests for LookupService: key derivation, hit/miss flow, URLs."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from showtracker.interfaces.metadata_provider import IMetadataProvider
from showtracker.providers.cache.json_file_cache import JsonFileCacheProvider, load_table
from showtracker.services.lookup_service import LookupService
from showtracker.utils.errors import TransportError, UpstreamError
from tests.conftest import DETAILS_BODY, SEARCH_BODY


@pytest.fixture()
def service(
    mock_metadata_provider: IMetadataProvider,
    search_cache: JsonFileCacheProvider,
    details_cache: JsonFileCacheProvider,
) -> LookupService:
    return LookupService(
        metadata_provider=mock_metadata_provider,
        search_cache=search_cache,
        details_cache=details_cache,
    )


class TestUrls:
    def test_search_url(self, service: LookupService) -> None:
        assert service.search_url("Breaking Bad") == (
            "https://api.themoviedb.org/3/search/tv"
            "?include_adult=false&language=en-US&page=1&query=Breaking+Bad"
        )

    def test_search_url_percent_encodes_query(self, service: LookupService) -> None:
        url = service.search_url("Law & Order: SVU?")
        assert url.endswith("&query=Law+%26+Order%3A+SVU%3F")

    def test_details_url(self, service: LookupService) -> None:
        assert service.details_url(1396) == "https://api.themoviedb.org/3/tv/1396?language=en-US"

    def test_custom_base_url_and_language(
        self,
        mock_metadata_provider: IMetadataProvider,
        search_cache: JsonFileCacheProvider,
        details_cache: JsonFileCacheProvider,
    ) -> None:
        custom = LookupService(
            metadata_provider=mock_metadata_provider,
            search_cache=search_cache,
            details_cache=details_cache,
            base_url="http://tmdb.local/3/",
            language="de-DE",
            include_adult=True,
            page=2,
        )
        assert custom.details_url(7) == "http://tmdb.local/3/tv/7?language=de-DE"
        assert custom.search_url("Dark") == (
            "http://tmdb.local/3/search/tv?include_adult=true&language=de-DE&page=2&query=Dark"
        )


class TestSearch:
    @pytest.mark.asyncio
    async def test_miss_fetches_and_stores(
        self,
        service: LookupService,
        mock_metadata_provider: IMetadataProvider,
        search_cache: JsonFileCacheProvider,
    ) -> None:
        result = await service.search("Breaking Bad")

        assert result.cache_hit is False
        assert result.body == SEARCH_BODY
        mock_metadata_provider.fetch.assert_awaited_once_with(service.search_url("Breaking Bad"))
        assert search_cache.get("BreakingBad") == SEARCH_BODY
        assert load_table(search_cache.path) == {"BreakingBad": SEARCH_BODY}

    @pytest.mark.asyncio
    async def test_space_variant_is_a_hit(
        self,
        service: LookupService,
        mock_metadata_provider: IMetadataProvider,
    ) -> None:
        first = await service.search("Breaking Bad")
        second = await service.search("BreakingBad")

        assert first.cache_hit is False
        assert second.cache_hit is True
        assert second.body == first.body
        assert mock_metadata_provider.fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_repeat_search_saves_once(
        self,
        service: LookupService,
        search_cache: JsonFileCacheProvider,
    ) -> None:
        search_cache.set = AsyncMock(wraps=search_cache.set)

        await service.search("The Wire")
        await service.search("The Wire")

        search_cache.set.assert_awaited_once_with("TheWire", SEARCH_BODY)

    @pytest.mark.asyncio
    async def test_case_variant_is_a_miss(
        self,
        service: LookupService,
        mock_metadata_provider: IMetadataProvider,
    ) -> None:
        await service.search("Breaking Bad")
        result = await service.search("breaking bad")

        assert result.cache_hit is False
        assert mock_metadata_provider.fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_upstream_error_stores_nothing(
        self,
        service: LookupService,
        mock_metadata_provider: IMetadataProvider,
        search_cache: JsonFileCacheProvider,
    ) -> None:
        mock_metadata_provider.fetch.side_effect = UpstreamError(
            status_code=500, body="boom", provider_name="tmdb"
        )

        with pytest.raises(UpstreamError):
            await service.search("Dark")

        assert search_cache.size() == 0
        assert not search_cache.path.exists()

    @pytest.mark.asyncio
    async def test_error_is_not_cached_so_retry_fetches_again(
        self,
        service: LookupService,
        mock_metadata_provider: IMetadataProvider,
    ) -> None:
        mock_metadata_provider.fetch.side_effect = [
            TransportError(message="error making request: timeout", provider_name="tmdb"),
            SEARCH_BODY,
        ]

        with pytest.raises(TransportError):
            await service.search("Dark")
        result = await service.search("Dark")

        assert result.cache_hit is False
        assert result.body == SEARCH_BODY

    @pytest.mark.asyncio
    async def test_failed_save_still_returns_body(
        self,
        service: LookupService,
        search_cache: JsonFileCacheProvider,
    ) -> None:
        search_cache.set = AsyncMock(return_value=False)

        result = await service.search("Dark")

        assert result.body == SEARCH_BODY
        assert result.cache_hit is False


class TestDetails:
    @pytest.mark.asyncio
    async def test_miss_stores_under_decimal_id(
        self,
        service: LookupService,
        mock_metadata_provider: IMetadataProvider,
        details_cache: JsonFileCacheProvider,
    ) -> None:
        mock_metadata_provider.fetch.return_value = DETAILS_BODY

        result = await service.details(1396)

        mock_metadata_provider.fetch.assert_awaited_once_with(
            "https://api.themoviedb.org/3/tv/1396?language=en-US"
        )
        assert result.body == DETAILS_BODY
        assert result.cache_hit is False
        assert details_cache.get("1396") == DETAILS_BODY

    @pytest.mark.asyncio
    async def test_second_lookup_is_a_hit(
        self,
        service: LookupService,
        mock_metadata_provider: IMetadataProvider,
    ) -> None:
        mock_metadata_provider.fetch.return_value = DETAILS_BODY

        await service.details(1396)
        result = await service.details(1396)

        assert result.cache_hit is True
        assert mock_metadata_provider.fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_namespaces_are_independent(
        self,
        service: LookupService,
        mock_metadata_provider: IMetadataProvider,
        search_cache: JsonFileCacheProvider,
    ) -> None:
        await search_cache.set("1396", b'{"from":"search"}')
        mock_metadata_provider.fetch.return_value = DETAILS_BODY

        result = await service.details(1396)

        assert result.cache_hit is False
        assert result.body == DETAILS_BODY


class TestCacheSizes:
    @pytest.mark.asyncio
    async def test_counts_per_namespace(
        self,
        service: LookupService,
        mock_metadata_provider: IMetadataProvider,
    ) -> None:
        await service.search("Dark")
        await service.search("Lost")
        mock_metadata_provider.fetch.return_value = DETAILS_BODY
        await service.details(1396)

        assert service.cache_sizes() == {"search": 2, "details": 1}
