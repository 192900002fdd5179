"""Shared parsing helpers for untrusted state values and runtime configuration."""

from __future__ import annotations

import math


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def coerce_identifier(value: object) -> str:
    """Coerce an identifier-like value to a string, mapping `None` to `""`."""

    if value is None:
        return ""
    return str(value)


def is_finite_number(value: object) -> bool:
    """Return whether a value is a finite, non-boolean real number."""

    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def is_non_negative_integer(value: object) -> bool:
    """Return whether a value is a non-boolean integer greater than or equal to zero."""

    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def parse_positive_int(value: object, field_name: str) -> int:
    """Parse a strictly positive integer from an int or a numeric text token.

    Raises:
        ValueError: If the value is not a positive integer.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a positive integer.")
    if isinstance(value, int):
        parsed = value
    else:
        normalized = normalize_optional_string(value)
        if normalized is None or not normalized.isdigit():
            raise ValueError(f"`{field_name}` must be a positive integer.")
        parsed = int(normalized)
    if parsed <= 0:
        raise ValueError(f"`{field_name}` must be a positive integer.")
    return parsed
