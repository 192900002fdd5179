"""Title and identifier text helpers.

This package provides deterministic title cleanup, comparison keys, duplicate
detection, and list id derivation used by the state services.
"""

from .dedupe import Deduplicator
from .slug import slugify_list_name, unique_suffixed_id
from .titles import (
    CanonicalizeUnicode,
    CollapseWhitespace,
    NormalizeSpaceVariants,
    RemoveInvisibleCharacters,
    StripEnclosingQuotes,
    TitleNormalizer,
    TrimWhitespace,
    TruncateCodepoints,
    sanitize_title,
    title_comparison_key,
)

__all__ = [
    "TitleNormalizer",
    "Deduplicator",
    "CanonicalizeUnicode",
    "NormalizeSpaceVariants",
    "RemoveInvisibleCharacters",
    "TrimWhitespace",
    "StripEnclosingQuotes",
    "CollapseWhitespace",
    "TruncateCodepoints",
    "sanitize_title",
    "title_comparison_key",
    "slugify_list_name",
    "unique_suffixed_id",
]
