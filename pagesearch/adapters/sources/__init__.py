"""Data sources usable as controller fetch functions."""

from .line_source import LineFileSource

__all__ = ["LineFileSource"]
