from typing import TYPE_CHECKING, Protocol, runtime_checkable

from async_waiters.debug_info import DebugInfo

if TYPE_CHECKING:
    from async_waiters.registry import WaiterRegistry


@runtime_checkable
class WaiterProtocol(Protocol):
    """The part of a waiter the registry relies on for registration and aggregation."""

    name: str
    """The waiter's name. Names are not required to be unique."""

    is_registered: bool
    """Whether the waiter is currently held by its own registry. Maintained by that registry."""

    @property
    def registry(self) -> "WaiterRegistry":
        """The registry the waiter registers itself with."""
        ...

    def wait_until(self) -> bool:
        """Return True when the waiter has nothing left pending."""
        ...

    def debug_info(self) -> list[DebugInfo]:
        """Return a snapshot of the debug info of every pending item, in insertion order."""
        ...
