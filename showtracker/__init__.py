"""showtracker: caching proxy in front of the TMDB TV metadata API."""

__version__ = "0.1.0"
