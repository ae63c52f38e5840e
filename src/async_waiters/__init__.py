"""Track in-flight async operations in tests and ask whether any are still pending."""

from async_waiters.debug_info import DebugInfo, PendingWaiterState
from async_waiters.errors import BaseWaiterError, UnmatchedEndError, WaiterOperationError
from async_waiters.helpers import wait_for_awaitable, waits_for
from async_waiters.protocols import WaiterProtocol
from async_waiters.registry import (
    WaiterRegistry,
    get_pending_waiter_state,
    get_registry,
    get_waiters,
    has_pending_waiters,
    register,
    reset,
    unregister,
)
from async_waiters.waiter import Waiter

__all__ = [
    "BaseWaiterError",
    "DebugInfo",
    "PendingWaiterState",
    "UnmatchedEndError",
    "Waiter",
    "WaiterOperationError",
    "WaiterProtocol",
    "WaiterRegistry",
    "get_pending_waiter_state",
    "get_registry",
    "get_waiters",
    "has_pending_waiters",
    "register",
    "reset",
    "unregister",
    "wait_for_awaitable",
    "waits_for",
]
