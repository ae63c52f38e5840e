import functools
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, Final, TypeVar

from async_waiters.type_checking.bear_spray import bear_spray
from async_waiters.waiter import Waiter

T = TypeVar("T")

DEFAULT_AWAITABLE_WAITER_NAME: Final[str] = "async_waiters.awaitables"

_default_waiter: Waiter[Any] | None = None


def get_default_waiter() -> Waiter[Any]:
    """Return the shared waiter used by the helpers when no waiter is given."""
    global _default_waiter  # noqa: PLW0603

    if _default_waiter is None:
        _default_waiter = Waiter(DEFAULT_AWAITABLE_WAITER_NAME)
    return _default_waiter


@bear_spray
async def wait_for_awaitable(awaitable: Awaitable[T], *, waiter: Waiter[Any] | None = None, label: str | None = None) -> T:
    """Await an awaitable while keeping it pending on a waiter.

    Each call is pending from the moment it starts awaiting until the awaitable returns or raises.
    Every call is tracked separately, so awaiting the same future from several tasks counts once
    per task.

    The recorded stack starts where this coroutine first runs. Inside a task that is the task's
    own frame, not the code that created the task.

    Args:
        awaitable: The awaitable to wait for.
        waiter: The waiter to track the awaitable on. Defaults to the shared helper waiter.
        label: An optional label to identify the awaitable in debug output. Defaults to the awaitable's repr.

    Returns:
        The result of the awaitable.
    """
    waiter = waiter if waiter is not None else get_default_waiter()
    token = object()

    waiter.begin_async(token, label=label if label is not None else repr(awaitable))
    try:
        return await awaitable
    finally:
        waiter.end_async(token)


def waits_for(
    waiter: Waiter[Any] | None = None, *, label: str | None = None
) -> Callable[[Callable[..., Coroutine[Any, Any, T]]], Callable[..., Coroutine[Any, Any, T]]]:
    """Decorate a coroutine function so every call stays pending on a waiter until it finishes.

    As with `wait_for_awaitable`, the recorded stack starts inside the running call, not at the
    code that scheduled it.

    Example:
        loader = Waiter[object]("loader")

        @waits_for(loader)
        async def load() -> bytes:
            ...

    Args:
        waiter: The waiter to track calls on. Defaults to the shared helper waiter.
        label: The label for each call. Defaults to the function's qualified name.
    """

    def decorator(func: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., Coroutine[Any, Any, T]]:
        call_label = label if label is not None else func.__qualname__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await wait_for_awaitable(func(*args, **kwargs), waiter=waiter, label=call_label)

        return wrapper

    return decorator
