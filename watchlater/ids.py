"""Identifier and timestamp helpers.

Responsibilities:
- Generate lowercase hexadecimal identifiers for lists and items.
- Provide the epoch-millisecond clock used for `createdAt` fields.

Uniqueness against already stored ids is resolved by callers; generated ids
are only collision-resistant.
"""

from __future__ import annotations

import random
import secrets
import time
from typing import Callable


DEFAULT_ID_LENGTH = 16

Clock = Callable[[], int]
IdGenerator = Callable[[int], str]


def current_timestamp_ms() -> int:
    """Return the current wall-clock time in epoch milliseconds."""

    return time.time_ns() // 1_000_000


def generate_id(length: int = DEFAULT_ID_LENGTH) -> str:
    """Return a lowercase hexadecimal identifier with exactly `length` characters."""

    if length <= 0:
        raise ValueError("`length` must be a positive integer.")
    try:
        return secrets.token_hex((length + 1) // 2)[:length]
    except NotImplementedError:
        return _fallback_id(length)


def _fallback_id(length: int) -> str:
    """Build a timestamp-plus-pseudorandom identifier when no OS entropy source exists."""

    generator = random.Random(time.time_ns())
    digits = f"{time.time_ns():x}"[-8:]
    while len(digits) < length:
        digits += f"{generator.getrandbits(32):08x}"
    return digits[:length]
