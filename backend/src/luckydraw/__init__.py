"""Lucky draw session server."""

__version__ = "1.0.0"
