"""Structured operation logging utilities.

Responsibilities:
- Emit concise, deterministic single-line records for state repairs and
  persistence failures.
- Route every record through `loguru` so the CLI can choose sink and level.
"""

from __future__ import annotations

from typing import Callable, TextIO

from loguru import logger as _loguru_logger


_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def configure_logging(
    sink: TextIO | Callable[[str], None], level: str = "WARNING"
) -> None:
    """Replace loguru handlers with one plain-message handler on `sink`."""

    normalized_level = level.strip().upper()
    if normalized_level not in _LEVELS:
        raise ValueError(f"Unsupported log level `{level}`.")
    _loguru_logger.remove()
    _loguru_logger.add(sink, format="{message}", level=normalized_level, colorize=False)


class OperationLogger:
    """Emit deterministic operation logs for state store and service activity."""

    def __init__(self, component: str = "state") -> None:
        """Initialize a logger that tags every line with `component`."""

        self._component = component

    def _emit(self, level: str, operation: str, event: str, **context: object) -> None:
        """Emit one structured log line."""

        line = (
            f"[{self._component}] level={level} op={operation} event={event}"
            f"{_format_context(context)}"
        )
        _loguru_logger.log(level, line)

    def debug(self, operation: str, event: str, **context: object) -> None:
        self._emit("DEBUG", operation, event, **context)

    def info(self, operation: str, event: str, **context: object) -> None:
        self._emit("INFO", operation, event, **context)

    def warning(self, operation: str, event: str, **context: object) -> None:
        self._emit("WARNING", operation, event, **context)

    def error(self, operation: str, event: str, **context: object) -> None:
        self._emit("ERROR", operation, event, **context)
