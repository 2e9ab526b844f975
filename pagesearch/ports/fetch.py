"""Fetch port interfaces.

The controller never knows where results come from. It hands itself to a
fetch function, which reads the query, filter and page it needs and returns
one page of results.
"""

from collections.abc import Sequence
from typing import Protocol, TypeVar

F_co = TypeVar("F_co", covariant=True)
T_co = TypeVar("T_co", covariant=True)


class FetchContext(Protocol[F_co]):
    """Read-only view of the controller passed to fetch functions."""

    @property
    def query(self) -> str:
        """Live query text."""
        ...

    @property
    def current_filter(self) -> F_co:
        """Filter value set on the controller."""
        ...

    @property
    def page(self) -> int:
        """1-based page to fetch."""
        ...

    @property
    def batch_size(self) -> int:
        """Items expected per page."""
        ...


class FetchFunction(Protocol[T_co]):
    """Async callable returning one page of results.

    A page holding fewer than ``context.batch_size`` items tells the
    controller that no further pages exist. Raising marks the controller
    as failed; the exception is never propagated to the event loop.
    """

    async def __call__(self, context: FetchContext) -> Sequence[T_co]:
        """Fetch the page described by context.

        Args:
            context: Controller exposing query, current_filter, page and
                batch_size.

        Returns:
            Zero or more items, in display order.
        """
        ...
