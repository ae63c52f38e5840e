"""Error classes for async waiters.

Exception Hierarchy:
    BaseWaiterError (base for all waiter errors)
    └── WaiterOperationError (operation-level errors)
        └── UnmatchedEndError
"""

from .base import BaseWaiterError, ExtraInfoType
from .waiter import UnmatchedEndError, WaiterOperationError

__all__ = [
    "BaseWaiterError",
    "ExtraInfoType",
    "UnmatchedEndError",
    "WaiterOperationError",
]
