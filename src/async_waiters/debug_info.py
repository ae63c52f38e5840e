"""Debug information recorded for pending items and the aggregate pending state."""

import sys
import traceback
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Final

DEFAULT_STACK_LIMIT: Final[int] = 25


def capture_trace(*, skip: int = 1, limit: int | None = DEFAULT_STACK_LIMIT) -> traceback.StackSummary:
    """Capture the current call stack without formatting it.

    Source lines are not looked up here; that happens when the summary is formatted.

    Args:
        skip: The number of innermost frames to drop (1 drops the caller of this function).
        limit: The maximum number of frames to keep, innermost first. None keeps every frame.

    Returns:
        The captured frames, outermost first.
    """
    frame = sys._getframe(skip + 1)  # noqa: SLF001
    summary = traceback.StackSummary.extract(traceback.walk_stack(frame), limit=limit, lookup_lines=False)
    summary.reverse()
    return summary


def format_trace(trace: traceback.StackSummary) -> str:
    return "".join(trace.format())


@dataclass(eq=False)
class DebugInfo:
    """Debug information for a single pending item."""

    label: str | None = field(default=None)
    """The optional label passed to `begin_async`."""

    trace: traceback.StackSummary = field(default_factory=traceback.StackSummary, repr=False)
    """The raw call stack captured when the item began."""

    @cached_property
    def stack(self) -> str:
        """The formatted call stack of the `begin_async` call site, built on first access."""
        return format_trace(self.trace)

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "stack": self.stack}


@dataclass
class PendingWaiterState:
    """A snapshot of every pending item across the registered waiters."""

    pending: int = field(default=0)
    """The total number of pending items."""

    waiters: dict[str, list[DebugInfo]] = field(default_factory=dict)
    """Pending debug info keyed by waiter name. Only waiters with pending items appear."""

    def add(self, name: str, debug_info: list[DebugInfo]) -> None:
        """Add a waiter's pending items, concatenating onto any waiter already seen with the same name."""
        if not debug_info:
            return

        self.pending += len(debug_info)
        self.waiters.setdefault(name, []).extend(debug_info)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pending": self.pending,
            "waiters": {name: [info.to_dict() for info in infos] for name, infos in self.waiters.items()},
        }
