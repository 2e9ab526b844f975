"""Cooldown timer for rate-limiting repeated triggers."""

import time
from collections.abc import Callable


class Cooldown:
    """Minimum-interval guard measured on a monotonic clock.

    ``arm()`` starts a new interval; ``active`` stays True until it has
    elapsed or ``cancel()`` is called. Nothing is scheduled on the event
    loop, so there is nothing to release.

    Usage:
        cooldown = Cooldown(1.0)

        def on_scroll_end():
            if cooldown.active:
                return
            cooldown.arm()
            ...
    """

    def __init__(
        self,
        duration: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize an inactive cooldown.

        Args:
            duration: Interval length in seconds.
            clock: Monotonic time source in seconds.
        """
        if duration < 0:
            raise ValueError(f"duration cannot be negative, got {duration}")
        self.duration = duration
        self._clock = clock
        self._expires_at: float | None = None

    @property
    def active(self) -> bool:
        if self._expires_at is None:
            return False
        if self._clock() >= self._expires_at:
            self._expires_at = None
            return False
        return True

    def arm(self) -> None:
        """Start (or restart) the interval from now."""
        self._expires_at = self._clock() + self.duration

    def cancel(self) -> None:
        """End the current interval immediately."""
        self._expires_at = None
