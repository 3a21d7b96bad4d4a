"""Shared pytest fixtures for the showtracker test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from showtracker.config.settings import Settings
from showtracker.interfaces.metadata_provider import IMetadataProvider
from showtracker.models.cache import CacheNamespace
from showtracker.providers.cache.json_file_cache import JsonFileCacheProvider

# A trimmed TMDB /search/tv response, as raw bytes.
SEARCH_BODY = (
    b'{"page":1,"results":[{"id":1396,"name":"Breaking Bad",'
    b'"overview":"Walter White, diagnosed with cancer, turns to crime.",'
    b'"vote_average":8.9,"poster_path":"/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",'
    b'"first_air_date":"2008-01-20"}],"total_pages":1,"total_results":1}'
)

# A trimmed TMDB /tv/{id} response, as raw bytes.
DETAILS_BODY = (
    b'{"id":1396,"name":"Breaking Bad","number_of_episodes":62,'
    b'"number_of_seasons":5,"status":"Ended","vote_average":8.9}'
)


def make_settings(**overrides) -> Settings:
    """Build a Settings instance with test defaults and optional overrides."""
    defaults = {
        "tmdb_bearer_token": "test-token",
        "tmdb_base_url": "https://api.themoviedb.org/3",
        "tmdb_language": "en-US",
        "cache_dir": "cache",
        "cache_strict_load": False,
        "app_env": "test",
    }
    defaults.update(overrides)
    return Settings(**defaults)


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Return an empty directory for cache files."""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def search_cache(cache_dir: Path) -> JsonFileCacheProvider:
    """Search-namespace cache backed by a file in ``cache_dir``."""
    return JsonFileCacheProvider(CacheNamespace.SEARCH, cache_dir / "search_cache.json")


@pytest.fixture
def details_cache(cache_dir: Path) -> JsonFileCacheProvider:
    """Details-namespace cache backed by a file in ``cache_dir``."""
    return JsonFileCacheProvider(CacheNamespace.DETAILS, cache_dir / "details_cache.json")


@pytest.fixture
def mock_metadata_provider() -> IMetadataProvider:
    """Mock IMetadataProvider whose fetch() returns SEARCH_BODY.

    Override with ``mock_metadata_provider.fetch.return_value = ...`` or
    ``.side_effect = ...`` in individual tests.
    """
    mock = MagicMock(spec=IMetadataProvider)
    mock.get_provider_name.return_value = "tmdb"
    mock.is_available.return_value = True
    mock.fetch = AsyncMock(return_value=SEARCH_BODY)
    return mock
