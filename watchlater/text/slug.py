"""Deterministic list id derivation from list names.

Responsibilities:
- Turn a free-form list name into a stable lowercase id base.
- Resolve collisions against existing ids with numeric suffixes.
"""

from __future__ import annotations

import re
from typing import Collection


DEFAULT_LIST_ID_BASE = "list"


def slugify_list_name(value: str) -> str:
    """Return a lowercase hyphenated id base for a list name."""

    lowered = value.lower().strip()
    collapsed = re.sub(r"[^a-z0-9]+", "-", lowered)
    slug = collapsed.strip("-")
    return slug or DEFAULT_LIST_ID_BASE


def unique_suffixed_id(base: str, existing: Collection[str]) -> str:
    """Return `base`, or `base-1`, `base-2`, ... whichever is first absent from `existing`."""

    candidate = base
    counter = 1
    while candidate in existing:
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate
