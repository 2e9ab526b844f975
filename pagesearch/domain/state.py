"""Observable controller states.

The controller publishes exactly one of these at any time. States are frozen
and compare structurally, so a presentation layer can match on the type and
read ``items`` without worrying about the list changing underneath it.

Transitions:
    Data -> Loading             search started with a non-empty query
    Loading -> Data             search results arrived (or query emptied)
    Data -> OngoingLoading      load-more started
    OngoingLoading -> Data      load-more results arrived
    Loading/OngoingLoading -> Failed   fetch raised
    Failed -> Loading/OngoingLoading/Data   retry
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Data(Generic[T]):
    """Stable state: no fetch in flight.

    Attributes:
        items: Accumulated results in fetch order.
    """

    items: tuple[T, ...] = ()

    @property
    def is_loading(self) -> bool:
        return False


@dataclass(frozen=True)
class Loading(Generic[T]):
    """A full search is pending or in flight. No partial items to show."""

    @property
    def items(self) -> tuple[T, ...]:
        return ()

    @property
    def is_loading(self) -> bool:
        return True


@dataclass(frozen=True)
class OngoingLoading(Generic[T]):
    """A load-more fetch is in flight; previously loaded items stay visible.

    Attributes:
        items: Items loaded before the in-flight batch.
    """

    items: tuple[T, ...] = ()

    @property
    def is_loading(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed(Generic[T]):
    """The most recent fetch raised.

    Attributes:
        cause: Exception raised by the fetch function.
        items: Items that were visible when the fetch failed.
    """

    cause: BaseException
    items: tuple[T, ...] = ()

    @property
    def is_loading(self) -> bool:
        return False


ControllerState = Data[T] | Loading[T] | OngoingLoading[T] | Failed[T]
