"""Server-side proxy for the IMLeagues API."""

__version__ = "1.0.0"
