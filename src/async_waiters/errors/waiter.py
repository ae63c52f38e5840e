from typing import Any

from async_waiters.errors.base import BaseWaiterError


class WaiterOperationError(BaseWaiterError):
    """Base exception for all waiter operation errors."""


class UnmatchedEndError(WaiterOperationError):
    """Raised when `end_async` is called for an item that is not currently pending."""

    def __init__(self, item: Any, waiter_name: str | None = None):
        super().__init__(
            message=f"end_async called for {item!r} but item is not currently pending.",
            extra_info={"waiter": waiter_name, "item": repr(item)},
        )
