"""Configuration module: exports Settings and load_config."""

from showtracker.config.loader import load_config
from showtracker.config.settings import Settings

__all__ = ["Settings", "load_config"]
