"""Logging helpers for state operations."""

from .logger import OperationLogger, configure_logging

__all__ = ["OperationLogger", "configure_logging"]
