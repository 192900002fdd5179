"""Title sanitization rules and comparison keys.

Responsibilities:
- Provide composable cleanup rules for user-selected title text.
- Bound stored titles by Unicode codepoint count with an ellipsis marker.
- Derive the lowercase comparison key used for duplicate detection.

Every rule is idempotent and the default rule order keeps `sanitize`
idempotent as a whole.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Protocol


DEFAULT_MAX_TITLE_LENGTH = 120
ELLIPSIS = "…"

_SPACE_VARIANTS_RE = re.compile(r"[   -   　]")
_INVISIBLE_RE = re.compile(r"[​-‍﻿]")
_QUOTES = "'\"“”‘’«»"
_LEADING_ENCLOSERS_RE = re.compile(r"^[" + re.escape(_QUOTES + "[({") + r"\s]+")
_TRAILING_ENCLOSERS_RE = re.compile(r"[" + re.escape(_QUOTES + "])}") + r"\s]+$")
_WHITESPACE_RUN_RE = re.compile(r"\s+")


class TitleRule(Protocol):
    """Protocol for title cleaning rules."""

    def apply(self, text: str) -> str:
        """Apply a single cleaning transformation."""


class CanonicalizeUnicode:
    """Compose text into Unicode NFC form."""

    def apply(self, text: str) -> str:
        """Return the NFC-normalized text."""

        return unicodedata.normalize("NFC", text)


class NormalizeSpaceVariants:
    """Map no-break, typographic and ideographic spaces to an ASCII space."""

    def apply(self, text: str) -> str:
        """Replace every Unicode space variant with `" "`."""

        return _SPACE_VARIANTS_RE.sub(" ", text)


class RemoveInvisibleCharacters:
    """Drop zero-width characters and byte-order marks."""

    def apply(self, text: str) -> str:
        """Remove invisible characters, re-composing text they used to separate."""

        stripped = _INVISIBLE_RE.sub("", text)
        if stripped == text:
            return text
        return unicodedata.normalize("NFC", stripped)


class TrimWhitespace:
    """Trim leading and trailing whitespace."""

    def apply(self, text: str) -> str:
        """Strip outer whitespace."""

        return text.strip()


class StripEnclosingQuotes:
    """Strip runs of quote and bracket glyphs from both ends independently."""

    def apply(self, text: str) -> str:
        """Remove leading openers/quotes and trailing closers/quotes."""

        text = _LEADING_ENCLOSERS_RE.sub("", text)
        return _TRAILING_ENCLOSERS_RE.sub("", text)


class CollapseWhitespace:
    """Collapse internal whitespace runs to a single space."""

    def apply(self, text: str) -> str:
        """Replace any whitespace run with one ASCII space."""

        return _WHITESPACE_RUN_RE.sub(" ", text)


class TruncateCodepoints:
    """Bound text length by codepoint count, marking truncation with an ellipsis."""

    def __init__(self, max_length: int = DEFAULT_MAX_TITLE_LENGTH) -> None:
        """Initialize with a positive maximum codepoint count."""

        if max_length <= 0:
            raise ValueError("`max_length` must be a positive integer.")
        self.max_length = max_length

    def apply(self, text: str) -> str:
        """Keep `max_length - 1` codepoints plus `…` when text is too long."""

        if len(text) <= self.max_length:
            return text
        return text[: self.max_length - 1] + ELLIPSIS


class TitleNormalizer:
    """Apply the ordered title rules and build comparison keys."""

    def __init__(
        self,
        max_length: int = DEFAULT_MAX_TITLE_LENGTH,
        rules: list[TitleRule] | None = None,
    ) -> None:
        """Initialize with custom rules or the default rule sequence."""

        self.max_length = max_length
        self.rules = rules or [
            CanonicalizeUnicode(),
            NormalizeSpaceVariants(),
            RemoveInvisibleCharacters(),
            TrimWhitespace(),
            StripEnclosingQuotes(),
            CollapseWhitespace(),
            TruncateCodepoints(max_length),
        ]

    def sanitize(self, text: object) -> str:
        """Return the canonical stored form of a title; `None` becomes `""`."""

        if text is None:
            return ""
        current = str(text)
        for rule in self.rules:
            current = rule.apply(current)
        return current

    def comparison_key(self, text: object) -> str:
        """Return the lowercase sanitized title used only for equality checks."""

        return self.sanitize(text).lower()


_DEFAULT_NORMALIZER = TitleNormalizer()


def sanitize_title(text: object) -> str:
    """Sanitize a title with the default maximum length."""

    return _DEFAULT_NORMALIZER.sanitize(text)


def title_comparison_key(text: object) -> str:
    """Build a comparison key with the default maximum length."""

    return _DEFAULT_NORMALIZER.comparison_key(text)
