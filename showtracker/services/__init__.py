"""Application services."""

from showtracker.services.lookup_service import LookupService

__all__ = ["LookupService"]
