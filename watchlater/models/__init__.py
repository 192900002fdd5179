"""Typed datatypes for persisted watch-later state."""

from .datatypes import DeleteListResult, Item, NormalizationResult, SavedList, State

__all__ = [
    "SavedList",
    "Item",
    "State",
    "NormalizationResult",
    "DeleteListResult",
]
