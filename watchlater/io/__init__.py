"""Persistence backends for the watch-later state slot."""

from .storage import InMemoryBackend, JsonFileBackend, StateBackend

__all__ = ["StateBackend", "JsonFileBackend", "InMemoryBackend"]
