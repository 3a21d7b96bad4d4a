"""Concrete adapters for the interfaces in ``showtracker.interfaces``."""
