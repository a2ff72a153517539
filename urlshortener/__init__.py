"""URL shortening service with API key management and JSON-file persistence."""

__version__ = '1.0.0'
