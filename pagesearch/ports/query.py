"""Query source port.

The query text belongs to whatever input surface the user types into. The
controller only reads it.
"""

from typing import Protocol


class QuerySource(Protocol):
    """Protocol for anything that exposes the live query text."""

    @property
    def text(self) -> str:
        """Current query text."""
        ...
