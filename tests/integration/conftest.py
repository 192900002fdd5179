"""Integration-test fixtures isolating the CLI from the user's environment."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _clear_watchlater_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop `WATCHLATER_*` variables so CLI runs only see explicit options."""

    for name in (
        "WATCHLATER_STORAGE_DIR",
        "WATCHLATER_STORAGE_KEY",
        "WATCHLATER_MAX_TITLE_LENGTH",
        "WATCHLATER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    """Return a fresh storage directory for one CLI session."""

    return tmp_path / "store"
