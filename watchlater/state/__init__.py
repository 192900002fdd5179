"""State normalization and persistence."""

from .normalization import (
    CURRENT_SCHEMA_VERSION,
    DEFAULT_LISTS,
    DefaultList,
    StateNormalizer,
)
from .store import DEFAULT_STORAGE_KEY, StateStore

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "DEFAULT_LISTS",
    "DEFAULT_STORAGE_KEY",
    "DefaultList",
    "StateNormalizer",
    "StateStore",
]
