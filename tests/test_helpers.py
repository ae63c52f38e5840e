import asyncio

import pytest

from async_waiters import Waiter, get_pending_waiter_state, get_waiters, has_pending_waiters, wait_for_awaitable, waits_for
from async_waiters.helpers import DEFAULT_AWAITABLE_WAITER_NAME, get_default_waiter


class TestWaitForAwaitable:
    """Tests for wait_for_awaitable."""

    async def test_pending_while_awaited(self) -> None:
        waiter = Waiter[object]("first")
        release = asyncio.Event()

        async def work() -> str:
            await release.wait()
            return "done"

        task = asyncio.create_task(wait_for_awaitable(work(), waiter=waiter, label="work"))
        await asyncio.sleep(0)

        assert has_pending_waiters() is True
        assert [info.label for info in waiter.debug_info()] == ["work"]

        release.set()
        assert await task == "done"
        assert has_pending_waiters() is False

    async def test_ends_when_awaitable_raises(self) -> None:
        waiter = Waiter[object]("first")

        async def fail() -> None:
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await wait_for_awaitable(fail(), waiter=waiter)

        assert waiter.wait_until() is True

    async def test_uses_default_waiter(self) -> None:
        release = asyncio.Event()

        async def work() -> int:
            await release.wait()
            return 1

        task = asyncio.create_task(wait_for_awaitable(work()))
        await asyncio.sleep(0)

        assert list(get_pending_waiter_state().waiters) == [DEFAULT_AWAITABLE_WAITER_NAME]
        assert get_waiters() == [get_default_waiter()]

        release.set()
        assert await task == 1
        assert has_pending_waiters() is False

    async def test_accepts_futures(self) -> None:
        waiter = Waiter[object]("first")
        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        asyncio.get_running_loop().call_soon(future.set_result, "resolved")

        assert await wait_for_awaitable(future, waiter=waiter) == "resolved"
        assert waiter.wait_until() is True

    async def test_shared_future_tracked_once_per_task(self) -> None:
        waiter = Waiter[object]("first")
        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()

        tasks = [asyncio.create_task(wait_for_awaitable(future, waiter=waiter)) for _ in range(2)]
        await asyncio.sleep(0)

        assert get_pending_waiter_state().pending == 2

        future.set_result("ok")
        assert await asyncio.gather(*tasks) == ["ok", "ok"]
        assert waiter.wait_until() is True

    async def test_label_defaults_to_awaitable_repr(self) -> None:
        waiter = Waiter[object]("first")
        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()

        label = repr(future)
        task = asyncio.create_task(wait_for_awaitable(future, waiter=waiter))
        await asyncio.sleep(0)

        assert [info.label for info in waiter.debug_info()] == [label]

        future.set_result("ok")
        await task

    async def test_stack_starts_inside_running_task(self) -> None:
        waiter = Waiter[object]("first")
        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()

        task = asyncio.create_task(wait_for_awaitable(future, waiter=waiter))
        await asyncio.sleep(0)

        stack = waiter.debug_info()[0].stack
        assert "wait_for_awaitable" in stack
        assert "test_stack_starts_inside_running_task" not in stack

        future.set_result("ok")
        await task


class TestWaitsFor:
    """Tests for the waits_for decorator."""

    async def test_each_call_is_tracked(self) -> None:
        waiter = Waiter[object]("loader")
        release = asyncio.Event()

        @waits_for(waiter)
        async def load(value: int) -> int:
            await release.wait()
            return value * 2

        tasks = [asyncio.create_task(load(1)), asyncio.create_task(load(2))]
        await asyncio.sleep(0)

        assert [info.label for info in waiter.debug_info()] == [load.__qualname__, load.__qualname__]

        release.set()
        assert await asyncio.gather(*tasks) == [2, 4]
        assert waiter.wait_until() is True

    async def test_custom_label(self) -> None:
        waiter = Waiter[object]("loader")
        release = asyncio.Event()

        @waits_for(waiter, label="loading")
        async def load() -> None:
            await release.wait()

        task = asyncio.create_task(load())
        await asyncio.sleep(0)

        assert [info.label for info in waiter.debug_info()] == ["loading"]

        release.set()
        await task

    async def test_preserves_function_metadata(self) -> None:
        @waits_for()
        async def fetch_profile() -> None:
            """Fetch a profile."""

        assert fetch_profile.__name__ == "fetch_profile"
        assert fetch_profile.__doc__ == "Fetch a profile."

        await fetch_profile()
        assert has_pending_waiters() is False
