"""Self-healing state store over a single persistence slot.

Responsibilities:
- Read the raw blob lazily and repair it through `StateNormalizer`.
- Write repaired state back immediately when the stored blob was absent or invalid.
- Normalize every write so callers cannot persist invariant-violating state.

The store keeps no in-process copy of state; every `get` reads the backend.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..errors import PersistenceError
from ..io.storage import StateBackend
from ..models.datatypes import State
from ..telemetry.logger import OperationLogger
from .normalization import StateNormalizer


DEFAULT_STORAGE_KEY = "rw_lists_v3"


class StateStore:
    """Persistence wrapper returning canonical, independent `State` copies."""

    def __init__(
        self,
        backend: StateBackend,
        key: str = DEFAULT_STORAGE_KEY,
        normalizer: StateNormalizer | None = None,
        logger: OperationLogger | None = None,
    ) -> None:
        self.backend = backend
        self.key = key
        self.normalizer = normalizer or StateNormalizer()
        self.logger = logger or OperationLogger()

    def get(self) -> State:
        """Return the repaired stored state, writing repairs back first.

        A failing backend read yields normalized defaults without a write-back,
        so a transient read error never overwrites stored data.
        """

        try:
            raw = self.backend.read(self.key)
        except PersistenceError as exc:
            self.logger.error("get", "read_failed", key=self.key, detail=exc.detail)
            return self.normalizer.normalize(None).state

        result = self.normalizer.normalize(raw)
        if raw is None or result.changed:
            self.logger.info(
                "get",
                "repaired",
                key=self.key,
                reason="absent" if raw is None else "invalid",
            )
            self._write(result.state, operation="get")
        return result.state.copy()

    def set(self, state: State | Mapping[str, object]) -> bool:
        """Normalize and persist `state`, returning whether the write succeeded."""

        if isinstance(state, State):
            raw: object = state.to_payload()
        elif isinstance(state, Mapping):
            raw = state
        else:
            self.logger.warning(
                "set", "rejected", key=self.key, payload_type=type(state).__name__
            )
            return False
        normalized = self.normalizer.normalize(raw).state
        return self._write(normalized, operation="set")

    def _write(self, state: State, *, operation: str) -> bool:
        """Persist canonical state and log failures instead of raising."""

        try:
            self.backend.write(self.key, state.to_payload())
        except PersistenceError as exc:
            self.logger.error(operation, "write_failed", key=self.key, detail=exc.detail)
            return False
        return True
