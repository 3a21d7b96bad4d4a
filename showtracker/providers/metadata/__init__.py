"""Upstream metadata providers."""

from showtracker.providers.metadata.tmdb_provider import TMDBProvider

__all__ = ["TMDBProvider"]
