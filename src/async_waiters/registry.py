import logging
import threading

from async_waiters.debug_info import PendingWaiterState
from async_waiters.protocols import WaiterProtocol
from async_waiters.type_checking.bear_spray import bear_enforce

logger = logging.getLogger(__name__)


class WaiterRegistry:
    """An ordered collection of waiters that can be queried for their combined pending state.

    Waiters are held by reference in registration order. Membership is by identity, so two
    waiters with the same name are both kept, and registering the same waiter twice keeps a
    single entry. A waiter can be held by several registries, but only the registry it is bound to
    (`waiter.registry`) sets or clears its `is_registered` flag.

    Queries copy the waiter list under the registry lock and then ask each waiter for its own
    state, so a query never holds the registry lock while waiting on a waiter.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._waiters: list[WaiterProtocol] = []

    def _contains(self, waiter: WaiterProtocol) -> bool:
        return any(registered is waiter for registered in self._waiters)

    def _owns(self, waiter: WaiterProtocol) -> bool:
        return waiter.registry is self

    def _snapshot(self) -> list[WaiterProtocol]:
        with self._lock:
            return list(self._waiters)

    @bear_enforce
    def register(self, waiter: WaiterProtocol) -> None:
        """Register a waiter. Registering an already registered waiter does nothing.

        Args:
            waiter: The waiter to register.
        """
        with self._lock:
            if not self._contains(waiter):
                self._waiters.append(waiter)
                logger.debug("Registered waiter %r", waiter.name)
            if self._owns(waiter):
                waiter.is_registered = True

    @bear_enforce
    def unregister(self, waiter: WaiterProtocol) -> None:
        """Remove a waiter. Removing a waiter that is not registered does nothing.

        Args:
            waiter: The waiter to remove.
        """
        with self._lock:
            if not self._contains(waiter):
                return
            self._waiters = [registered for registered in self._waiters if registered is not waiter]
            if self._owns(waiter):
                waiter.is_registered = False
            logger.debug("Unregistered waiter %r", waiter.name)

    def get_waiters(self) -> list[WaiterProtocol]:
        """Return the registered waiters in registration order."""
        return self._snapshot()

    def has_pending_waiters(self) -> bool:
        """Return True if any registered waiter still has pending items."""
        return any(not waiter.wait_until() for waiter in self._snapshot())

    def get_pending_waiter_state(self) -> PendingWaiterState:
        """Return the pending items of every registered waiter.

        Waiters sharing a name are merged under that name, in registration order.
        """
        state = PendingWaiterState()
        for waiter in self._snapshot():
            state.add(name=waiter.name, debug_info=waiter.debug_info())
        return state

    def reset(self) -> None:
        """Remove every registered waiter."""
        with self._lock:
            waiters, self._waiters = self._waiters, []
            for waiter in waiters:
                if self._owns(waiter):
                    waiter.is_registered = False
        logger.debug("Reset waiter registry, removed %d waiter(s)", len(waiters))


_REGISTRY = WaiterRegistry()


def get_registry() -> WaiterRegistry:
    """Return the process-wide waiter registry."""
    return _REGISTRY


def register(waiter: WaiterProtocol) -> None:
    get_registry().register(waiter)


def unregister(waiter: WaiterProtocol) -> None:
    get_registry().unregister(waiter)


def get_waiters() -> list[WaiterProtocol]:
    return get_registry().get_waiters()


def has_pending_waiters() -> bool:
    return get_registry().has_pending_waiters()


def get_pending_waiter_state() -> PendingWaiterState:
    return get_registry().get_pending_waiter_state()


def reset() -> None:
    get_registry().reset()
