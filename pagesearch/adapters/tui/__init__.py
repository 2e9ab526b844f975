"""prompt_toolkit bindings for the paginated search controller."""

from .buffer_query import BufferQuerySource

__all__ = ["BufferQuerySource"]
