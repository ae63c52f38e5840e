import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from typing_extensions import override

from async_waiters.debug_info import DEFAULT_STACK_LIMIT, DebugInfo, capture_trace
from async_waiters.errors import UnmatchedEndError
from async_waiters.registry import WaiterRegistry, get_registry
from async_waiters.type_checking.bear_spray import bear_enforce

T = TypeVar("T")


class Waiter(Generic[T]):
    """Tracks in-flight async operations so a test harness can wait for them to settle.

    Each call to `begin_async` should be paired with a later `end_async` for the same item. Items
    are matched by identity, so any object can be used, including unhashable ones.

    The waiter registers itself with its registry on the first `begin_async`. It can also be
    registered explicitly with `register`.

    Example:
        waiter = Waiter[object]("image-loader")

        token = object()
        waiter.begin_async(token, label="load thumbnail")
        ...
        waiter.end_async(token)
    """

    name: str

    is_registered: bool

    @bear_enforce
    def __init__(
        self,
        name: str,
        *,
        registry: WaiterRegistry | None = None,
        stack_limit: int | None = DEFAULT_STACK_LIMIT,
    ) -> None:
        """Initialize the waiter. The waiter is not registered until first used.

        Args:
            name: The name of the waiter. Names do not have to be unique.
            registry: The registry to register with. Defaults to the process-wide registry.
            stack_limit: The maximum number of frames kept for each item's stack. None keeps all frames.
        """
        self.name = name
        self.is_registered = False
        self.stack_limit = stack_limit

        self._registry: WaiterRegistry = registry if registry is not None else get_registry()
        self._lock = threading.RLock()
        # id(item) -> (item, debug info); holding the item keeps its id from being reused while pending
        self._items: dict[int, tuple[T, DebugInfo]] = {}

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, pending={len(self._items)})"

    @property
    def registry(self) -> WaiterRegistry:
        return self._registry

    @property
    def items(self) -> list[T]:
        """The pending items, in the order they began."""
        with self._lock:
            return [item for item, _ in self._items.values()]

    def register(self) -> None:
        """Register the waiter with its registry if it is not registered already."""
        if not self.is_registered:
            self._registry.register(self)

    def unregister(self) -> None:
        """Remove the waiter from its registry. Pending items are kept."""
        self._registry.unregister(self)

    def begin_async(self, item: T, label: str | None = None) -> None:
        """Signal the beginning of an async operation that should be waited for.

        Beginning an item that is already pending replaces its debug info.

        Args:
            item: The item that identifies the operation.
            label: An optional label to identify the operation in debug output.
        """
        self.register()

        debug_info = DebugInfo(label=label, trace=capture_trace(skip=1, limit=self.stack_limit))

        with self._lock:
            self._items[id(item)] = (item, debug_info)

    def end_async(self, item: T) -> None:
        """Signal the end of an async operation started with `begin_async`.

        Args:
            item: The item that was passed to `begin_async`.

        Raises:
            UnmatchedEndError: If the item is not currently pending.
        """
        with self._lock:
            entry = self._items.get(id(item))
            if entry is None or entry[0] is not item:
                raise UnmatchedEndError(item=item, waiter_name=self.name)

            del self._items[id(item)]

    @contextmanager
    def pending(self, item: T, label: str | None = None) -> Iterator[T]:
        """Keep an item pending for the duration of a `with` block.

        Args:
            item: The item that identifies the operation.
            label: An optional label to identify the operation in debug output.
        """
        self.begin_async(item, label=label)
        try:
            yield item
        finally:
            self.end_async(item)

    def wait_until(self) -> bool:
        """Return True when nothing is pending on this waiter."""
        with self._lock:
            return not self._items

    def debug_info(self) -> list[DebugInfo]:
        """Return the debug info of every pending item, in the order the items began."""
        with self._lock:
            return [debug_info for _, debug_info in self._items.values()]
