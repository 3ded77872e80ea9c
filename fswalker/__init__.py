"""Flat and recursive directory iteration with cached file status."""

__version__ = "0.1.0"
__all__ = ["directory", "errors", "status"]