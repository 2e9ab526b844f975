"""Paginated search controller.

Drives one searchable, incrementally loaded result list. Query changes are
debounced into full searches; the presentation layer asks for more pages
with ``fetch_next_batch()``. Every fetch is tagged with the generation it
was issued under, and results from an older generation are dropped, so a
slow response can never land in a newer search's list.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Coroutine
from typing import Any, Generic, TypeVar

from pagesearch.core.cooldown import Cooldown
from pagesearch.core.fetch_errors import log_controller_error
from pagesearch.core.notifier import StateNotifier
from pagesearch.core.query import TextQuery
from pagesearch.domain.config import ControllerConfig
from pagesearch.domain.state import (
    ControllerState,
    Data,
    Failed,
    Loading,
    OngoingLoading,
)
from pagesearch.domain.value_objects import PaginationCursor
from pagesearch.ports.fetch import FetchFunction
from pagesearch.ports.query import QuerySource

logger = logging.getLogger(__name__)

T = TypeVar("T")
F = TypeVar("F")


class PaginatedSearchController(StateNotifier[ControllerState[T]], Generic[T, F]):
    """Debounced search with page-by-page loading over a fetch function.

    The fetch function receives the controller itself and reads ``query``,
    ``current_filter``, ``page`` and ``batch_size`` from it.

    Attributes:
        fetch: Async function returning one page of results.
        config: Validated timing and batch size.
        current_filter: Opaque filter value handed to the fetch function.
        query_source: Where the live query text is read from.
    """

    def __init__(
        self,
        fetch: FetchFunction[T],
        batch_size: int,
        initial_filter: F,
        *,
        query_source: QuerySource | None = None,
        debounce_ms: int = 500,
        cooldown_ms: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the controller in state ``Data(())``.

        Args:
            fetch: Async function returning one page of results.
            batch_size: Items expected per page; a shorter page ends paging.
            initial_filter: Starting filter value.
            query_source: Live query text. Defaults to an empty TextQuery.
            debounce_ms: Quiet period before a query change is searched.
            cooldown_ms: Minimum interval between load-more requests.
            clock: Monotonic clock in seconds, used by the cooldown.

        Raises:
            ValueError: If batch_size is not positive or a timing is negative.
        """
        self.config = ControllerConfig(
            debounce_ms=debounce_ms,
            cooldown_ms=cooldown_ms,
            batch_size=batch_size,
        )
        super().__init__(Data())
        self.fetch = fetch
        self.current_filter = initial_filter
        self.query_source: QuerySource = (
            query_source if query_source is not None else TextQuery()
        )

        self._items: tuple[T, ...] = ()
        self._cursor = PaginationCursor()
        self._cooldown = Cooldown(self.config.cooldown_seconds, clock=clock)
        # Bumped by every search() call and by close(); fetches issued under
        # an older value are stale.
        self._generation = 0
        # Generation of the load-more in flight, if any
        self._loading_more_generation: int | None = None
        self._failed_load_more = False
        # Bumped whenever search() resets the list and cursor
        self._resets = 0
        self._tasks: set[asyncio.Task[None]] = set()

    @classmethod
    def from_config(
        cls,
        fetch: FetchFunction[T],
        config: ControllerConfig,
        initial_filter: F,
        *,
        query_source: QuerySource | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "PaginatedSearchController[T, F]":
        """Create a controller from a loaded ControllerConfig."""
        return cls(
            fetch,
            config.batch_size,
            initial_filter,
            query_source=query_source,
            debounce_ms=config.debounce_ms,
            cooldown_ms=config.cooldown_ms,
            clock=clock,
        )

    # Read access for fetch functions and the presentation layer

    @property
    def query(self) -> str:
        return self.query_source.text

    @property
    def batch_size(self) -> int:
        return self.config.batch_size

    @property
    def cursor(self) -> PaginationCursor:
        return self._cursor

    @property
    def page(self) -> int:
        return self._cursor.page

    @property
    def has_no_more_items(self) -> bool:
        return self._cursor.has_no_more_items

    @property
    def items(self) -> tuple[T, ...]:
        """Accumulated results of the current search."""
        return self._items

    @property
    def failed_operation(self) -> str | None:
        """Name of the operation behind the current ``Failed`` state.

        ``"load more"`` for a failed page fetch, ``"search"`` for a failed
        full search, None when the controller is not in ``Failed``.
        """
        if not isinstance(self.state, Failed):
            return None
        return "load more" if self._failed_load_more else "search"

    # Operations

    async def search(self) -> None:
        """Search for the live query after the debounce interval.

        An empty query shows the accumulated items as ``Data`` without
        fetching. Listeners only hear about it if the state changes: when the
        state already is ``Data`` of the same items, nothing is published.

        A non-empty query publishes ``Loading`` and waits; if another
        ``search()`` call or a query change happens meanwhile, this call
        does nothing more. Otherwise the list and cursor are reset and
        page 1 is fetched.
        """
        self._generation += 1
        generation = self._generation

        if not self.query:
            self.state = Data(self._items)
            return

        self.state = Loading()
        saved_query = self.query
        await asyncio.sleep(self.config.debounce_seconds)

        if generation != self._generation or saved_query != self.query:
            logger.debug("Debounced search %r", saved_query)
            return

        self._items = ()
        self._cursor = PaginationCursor()
        self._resets += 1
        await self._perform_search(generation, load_more=False)

    async def set_filter(self, new_filter: F, perform_search: bool = True) -> None:
        """Replace the filter and, by default, search again.

        Args:
            new_filter: New filter value.
            perform_search: Run ``search()`` with the new filter.
        """
        self.current_filter = new_filter
        if perform_search:
            await self.search()

    async def fetch_next_batch(self) -> None:
        """Fetch the next page of the current search.

        Ignored while the cooldown from a previous call is running, once
        the last page has been reached, while another page is loading, and
        while a search is pending.
        """
        if self._cooldown.active:
            logger.debug("fetch_next_batch ignored: cooldown active")
            return

        self._cooldown.arm()

        if self._cursor.has_no_more_items:
            return
        if self._loading_more_generation == self._generation or isinstance(
            self.state, (Loading, OngoingLoading)
        ):
            return
        if isinstance(self.state, Failed) and not self._failed_load_more:
            # A failed search is retried with search(), not by paging past it
            return

        logger.debug("fetch_next_batch %r page %d", self.query, self._cursor.page + 1)
        self.state = OngoingLoading(self._items)
        self._cursor = self._cursor.advance()
        self._loading_more_generation = self._generation
        await self._perform_search(self._generation, load_more=True)

    async def retry(self) -> None:
        """Repeat the operation that produced the current ``Failed`` state.

        Does nothing unless the controller is in ``Failed``.
        """
        if not isinstance(self.state, Failed):
            return
        if self._failed_load_more:
            await self.fetch_next_batch()
        else:
            await self.search()

    # Scheduling for synchronous callers (input bindings, key handlers)

    def schedule_search(self) -> "asyncio.Task[None]":
        """Run ``search()`` as a task on the running event loop."""
        return self._schedule(self.search)

    def schedule_fetch_next_batch(self) -> "asyncio.Task[None]":
        """Run ``fetch_next_batch()`` as a task on the running event loop."""
        return self._schedule(self.fetch_next_batch)

    def close(self) -> None:
        """Cancel scheduled work and detach all listeners.

        Fetches already in flight finish, but their results are dropped.
        """
        self._generation += 1
        for task in list(self._tasks):
            task.cancel()
        self._cooldown.cancel()
        self.dispose()

    # Internals

    def _schedule(
        self, operation: Callable[[], Coroutine[Any, Any, None]]
    ) -> "asyncio.Task[None]":
        loop = asyncio.get_running_loop()
        task = loop.create_task(operation())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _perform_search(self, generation: int, load_more: bool) -> None:
        """Call the fetch function and apply its result if still current."""
        operation = "load more" if load_more else "search"
        requested_page = self._cursor.page
        resets = self._resets
        try:
            results = tuple(await self.fetch(self))
        except Exception as e:
            if self._is_stale(generation):
                logger.debug("Dropping stale %s failure: %s", operation, e)
                self._rewind_unreset_page(load_more, requested_page, resets)
                return
            log_controller_error(e, operation)
            self._rewind_unreset_page(load_more, requested_page, resets)
            self._cooldown.cancel()
            self._failed_load_more = load_more
            self.state = Failed(e, self._items)
            return
        finally:
            if load_more and self._loading_more_generation == generation:
                self._loading_more_generation = None

        if self._is_stale(generation):
            logger.debug(
                "Dropping stale %s results for %r page %d",
                operation,
                self.query,
                requested_page,
            )
            self._rewind_unreset_page(load_more, requested_page, resets)
            return

        self._update_items(results)

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation or not self.mounted

    def _rewind_unreset_page(
        self, load_more: bool, requested_page: int, resets: int
    ) -> None:
        # A load-more that never landed must not leave a gap in the paging,
        # unless a search has since reset the cursor.
        if (
            load_more
            and resets == self._resets
            and self._cursor.page == requested_page
        ):
            self._cursor = self._cursor.rewind()

    def _update_items(self, results: tuple[T, ...]) -> None:
        """Append a page of results and publish ``Data``."""
        self._cursor = self._cursor.with_batch(len(results), self.batch_size)
        if results:
            self._items = self._items + results
        self.state = Data(self._items)
