"""Observable state holder.

A presentation layer attaches listeners to receive the current state and
every change after it, in order.
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")

Listener = Callable[[S], None]


class StateNotifier(Generic[S]):
    """Holds a single state value and notifies listeners when it changes.

    Setting a state equal to the current one is not a change and notifies
    nobody. A listener that raises is logged and the remaining listeners
    still run.
    """

    def __init__(self, initial_state: S) -> None:
        self._state = initial_state
        self._listeners: list[Listener[S]] = []
        self._mounted = True

    @property
    def mounted(self) -> bool:
        """False once dispose() has been called."""
        return self._mounted

    @property
    def state(self) -> S:
        return self._state

    @state.setter
    def state(self, value: S) -> None:
        if not self._mounted:
            raise RuntimeError(
                f"Tried to set state on {type(self).__name__} after dispose()"
            )
        if value == self._state:
            return
        self._state = value
        # Copy so listeners may detach themselves while being notified
        for listener in list(self._listeners):
            self._notify(listener, value)

    def add_listener(
        self, listener: Listener[S], fire_immediately: bool = True
    ) -> Callable[[], None]:
        """Attach a listener.

        Args:
            listener: Called with each new state.
            fire_immediately: Also call listener with the current state now.

        Returns:
            Callable that detaches the listener. Calling it twice is harmless.
        """
        self._listeners.append(listener)
        if fire_immediately:
            self._notify(listener, self._state)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def dispose(self) -> None:
        """Detach all listeners. The state can no longer be changed."""
        self._listeners.clear()
        self._mounted = False

    def _notify(self, listener: Listener[S], value: S) -> None:
        try:
            listener(value)
        except Exception:
            logger.exception("State listener %r raised", listener)
