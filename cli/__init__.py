"""Command line interface for sqlgen."""

from sqlgen import __version__

__all__ = ["__version__"]
