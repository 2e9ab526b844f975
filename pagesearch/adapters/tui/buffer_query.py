"""prompt_toolkit query source.

Lets a prompt_toolkit ``Buffer`` (the query line of a TUI) act as the
controller's query source, searching as the user types.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from prompt_toolkit.buffer import Buffer

if TYPE_CHECKING:
    from pagesearch.core.controller import PaginatedSearchController

logger = logging.getLogger(__name__)


class BufferQuerySource:
    """Query source reading the text of a prompt_toolkit Buffer."""

    def __init__(self, buffer: Buffer | None = None) -> None:
        """Initialize with an existing buffer or a new single-line one.

        Args:
            buffer: Buffer holding the query text.
        """
        self.buffer = buffer if buffer is not None else Buffer(multiline=False)
        self._controller: PaginatedSearchController | None = None

    @property
    def text(self) -> str:
        return self.buffer.text

    def bind(self, controller: PaginatedSearchController) -> Callable[[], None]:
        """Search with controller whenever the buffer text changes.

        The buffer must be edited from inside a running event loop (as it
        is within a prompt_toolkit Application).

        Args:
            controller: Controller whose query source is this object.

        Returns:
            Callable that unbinds the controller, same as ``unbind``.
        """
        self.unbind()
        self._controller = controller
        self.buffer.on_text_changed += self._on_text_changed
        return self.unbind

    def unbind(self) -> None:
        """Stop searching on text changes."""
        if self._controller is None:
            return
        self.buffer.on_text_changed -= self._on_text_changed
        self._controller = None

    def _on_text_changed(self, buffer: Buffer) -> None:
        """Handle query text changes.

        Args:
            buffer: The query buffer.
        """
        if self._controller is None:
            return
        logger.debug("Query changed to %r", buffer.text)
        self._controller.schedule_search()
