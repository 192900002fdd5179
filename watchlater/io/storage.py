"""Key-value persistence backends for the state blob.

Responsibilities:
- Provide one JSON slot per storage key on the filesystem or in memory.
- Report read/write failures as `PersistenceError` for the state store to absorb.
- Replace files atomically so an interrupted write never leaves a torn blob.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
import time
from typing import Any, Mapping, Protocol

from ..errors import PersistenceError


class StateBackend(Protocol):
    """Protocol for a single-slot-per-key persistence boundary."""

    def read(self, key: str) -> Any:
        """Return the stored JSON value for `key`, or `None` when absent."""

    def write(self, key: str, value: Mapping[str, Any]) -> None:
        """Replace the stored value for `key` as a whole."""


class JsonFileBackend:
    """Filesystem-backed store keeping each key in `<root>/<key>.json`."""

    def __init__(self, root: Path) -> None:
        """Initialize the backend with a root storage directory."""

        self.root = root

    def path_for(self, key: str) -> Path:
        """Return the JSON file path backing `key`."""

        return self.root / f"{key}.json"

    def read(self, key: str) -> Any:
        """Load the JSON value for `key`.

        Content that is not UTF-8 JSON, or nests too deeply to decode, is moved
        aside to a `.corrupt-<ms>.json` sibling and reported as absent so the
        caller can re-seed the slot.
        """

        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise PersistenceError(key=key, detail=f"Failed to read `{path}`: {exc}") from exc
        try:
            return json.loads(content.decode("utf-8"))
        except (ValueError, RecursionError):
            self._quarantine(key, path)
            return None

    def write(self, key: str, value: Mapping[str, Any]) -> None:
        """Serialize `value` and atomically replace the file for `key`."""

        path = self.path_for(key)
        temporary_path = path.with_name(f"{path.name}.tmp")
        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2, sort_keys=True)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(
                key=key, detail=f"State for `{key}` is not JSON-serializable: {exc}"
            ) from exc
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            temporary_path.write_text(payload, encoding="utf-8")
            os.replace(temporary_path, path)
        except OSError as exc:
            if temporary_path.exists():
                temporary_path.unlink()
            raise PersistenceError(key=key, detail=f"Failed to write `{path}`: {exc}") from exc

    def _quarantine(self, key: str, path: Path) -> Path:
        """Move an undecodable file aside and return its new location."""

        quarantined = path.with_name(f"{key}.corrupt-{time.time_ns() // 1_000_000}.json")
        try:
            os.replace(path, quarantined)
        except OSError as exc:
            raise PersistenceError(
                key=key, detail=f"Failed to move corrupt `{path}` aside: {exc}"
            ) from exc
        return quarantined


class InMemoryBackend:
    """Process-local backend storing JSON text per key."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        """Initialize with optional pre-populated raw values."""

        self._entries: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._entries[key] = json.dumps(value)

    def read(self, key: str) -> Any:
        """Return a fresh decoded copy of the value for `key`."""

        encoded = self._entries.get(key)
        if encoded is None:
            return None
        return json.loads(encoded)

    def write(self, key: str, value: Mapping[str, Any]) -> None:
        """Store a serialized snapshot of `value`."""

        try:
            self._entries[key] = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(
                key=key, detail=f"State for `{key}` is not JSON-serializable: {exc}"
            ) from exc
