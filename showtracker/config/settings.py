"""Application settings loaded from environment variables via pydantic-settings.

Two sources, highest priority first:

  1. Environment variables, e.g. ``TMDB_BEARER_TOKEN=eyJ...``
  2. ``.env`` file in the working directory (local development)

Field names map to upper-cased variable names automatically.  Defaults
apply when neither source sets a value.  The ``.env`` file holds the TMDB
credential and must never be committed; ``.env.example`` lists the keys.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from showtracker.models.cache import CacheNamespace

_CACHE_FILENAMES: dict[CacheNamespace, str] = {
    CacheNamespace.SEARCH: "search_cache.json",
    CacheNamespace.DETAILS: "details_cache.json",
}


class Settings(BaseSettings):
    """showtracker application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Upstream (TMDB) ===
    # Empty string = "not configured"; create_app() refuses to start without it.
    tmdb_bearer_token: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_language: str = "en-US"

    # === Cache ===
    cache_dir: str = "cache"
    # False: a corrupt cache file is logged and replaced by an empty table.
    # True: a corrupt cache file aborts startup.
    cache_strict_load: bool = False

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"

    def cache_path(self, namespace: CacheNamespace) -> Path:
        """Return the durable file backing *namespace*."""
        return Path(self.cache_dir) / _CACHE_FILENAMES[namespace]
