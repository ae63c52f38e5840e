import logging
from collections.abc import Iterator

import pytest

from async_waiters import WaiterRegistry, reset

logging.basicConfig(level=logging.INFO)


@pytest.fixture(autouse=True)
def reset_registry() -> Iterator[None]:
    yield
    reset()


@pytest.fixture
def registry() -> WaiterRegistry:
    """A registry separate from the process-wide one."""
    return WaiterRegistry()


@pytest.fixture
def stable_stack(monkeypatch: pytest.MonkeyPatch) -> str:
    """Make every formatted stack read as a fixed string."""
    monkeypatch.setattr("async_waiters.debug_info.format_trace", lambda trace: "STACK")  # noqa: ARG005
    return "STACK"
