"""In-memory query source."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pagesearch.core.controller import PaginatedSearchController


class TextQuery:
    """Query source holding plain text, for headless use and tests.

    Change callbacks run synchronously whenever ``text`` is assigned a
    different value.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._callbacks: list[Callable[[str], Any]] = []

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        if value == self._text:
            return
        self._text = value
        for callback in list(self._callbacks):
            callback(value)

    def on_change(self, callback: Callable[[str], Any]) -> Callable[[], None]:
        """Register a callback for text changes.

        Returns:
            Callable that unregisters the callback.
        """
        self._callbacks.append(callback)

        def remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return remove

    def bind(self, controller: PaginatedSearchController) -> Callable[[], None]:
        """Schedule ``controller.search()`` on every text change.

        Text must be changed from inside a running event loop once bound.

        Returns:
            Callable that unbinds the controller.
        """
        return self.on_change(lambda _text: controller.schedule_search())

    def __repr__(self) -> str:
        return f"TextQuery({self._text!r})"
