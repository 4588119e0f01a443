import pytest

from tidings import EventEmitter


@pytest.fixture
def anyio_backend():
    """pull() is built on asyncio futures."""
    return "asyncio"


@pytest.fixture
def emitter():
    return EventEmitter(listener_errors="raise")
