"""Insert-time duplicate detection for saved items."""

from __future__ import annotations

from typing import Protocol

from ..parsing import coerce_identifier
from .titles import TitleNormalizer


class TitledEntry(Protocol):
    """Anything carrying a list id and a title."""

    list_id: str
    title: str


class Deduplicator:
    """Decide whether two items are duplicates within the same list.

    Two items are duplicates when their string-coerced list ids match and
    their title comparison keys are equal.
    """

    def __init__(self, normalizer: TitleNormalizer | None = None) -> None:
        self.normalizer = normalizer or TitleNormalizer()

    def is_duplicate(self, a: TitledEntry | None, b: TitledEntry | None) -> bool:
        """Return whether `a` and `b` are the same saved title in the same list."""

        if a is None or b is None:
            return False
        if coerce_identifier(a.list_id) != coerce_identifier(b.list_id):
            return False
        return self.normalizer.comparison_key(a.title) == self.normalizer.comparison_key(
            b.title
        )
