"""Shared pytest fixtures for the full watchlater test suite."""

from __future__ import annotations

from io import StringIO
import sys
from typing import Callable, Iterator

import pytest

from watchlater.config import WatchLaterConfig
from watchlater.core import WatchLaterCore
from watchlater.io.storage import InMemoryBackend
from watchlater.telemetry.logger import configure_logging
from tests.state_fixtures import FIXED_NOW_MS


@pytest.fixture
def fixed_clock() -> Callable[[], int]:
    """Provide a clock frozen at a known epoch-millisecond value."""

    return lambda: FIXED_NOW_MS


@pytest.fixture
def sequential_ids() -> Callable[[int], str]:
    """Provide a deterministic hex id generator: `...01`, `...02`, ..."""

    counter = {"value": 0}

    def _generate(length: int) -> str:
        counter["value"] += 1
        return f"{counter['value']:0{length}x}"[-length:]

    return _generate


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    """Provide an empty in-memory persistence backend."""

    return InMemoryBackend()


@pytest.fixture
def core(
    memory_backend: InMemoryBackend,
    sequential_ids: Callable[[int], str],
    fixed_clock: Callable[[], int],
) -> WatchLaterCore:
    """Provide a core over the in-memory backend with deterministic ids and time."""

    return WatchLaterCore.from_config(
        WatchLaterConfig(),
        backend=memory_backend,
        id_generator=sequential_ids,
        clock=fixed_clock,
    )


@pytest.fixture
def log_output() -> Iterator[StringIO]:
    """Capture operation log lines emitted during a test."""

    buffer = StringIO()
    configure_logging(buffer, "DEBUG")
    yield buffer
    configure_logging(sys.stderr, "WARNING")
