"""Unit tests for title sanitization rules and comparison keys."""

from __future__ import annotations

import pytest

from watchlater.text.titles import (
    ELLIPSIS,
    RemoveInvisibleCharacters,
    StripEnclosingQuotes,
    TitleNormalizer,
    TruncateCodepoints,
    sanitize_title,
    title_comparison_key,
)


def test_sanitize_trims_and_collapses_whitespace() -> None:
    """Outer whitespace is trimmed and inner runs become single spaces."""

    assert sanitize_title("  The   Matrix  ") == "The Matrix"
    assert sanitize_title("a\t\n b") == "a b"


def test_sanitize_maps_unicode_spaces_and_drops_invisible_characters() -> None:
    """No-break and typographic spaces map to ASCII; zero-width characters vanish."""

    assert sanitize_title("Blade\u00a0Runner") == "Blade Runner"
    assert sanitize_title("Dune\u2003Part\u3000Two") == "Dune Part Two"
    assert sanitize_title("\ufeffSpi\u200brited Away\u200d") == "Spirited Away"


def test_sanitize_canonicalizes_to_nfc() -> None:
    """Decomposed accents are composed so equal titles compare equal."""

    assert sanitize_title("Ame\u0301lie") == "Am\u00e9lie"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('"Quoted"', "Quoted"),
        ("“Smart quotes”", "Smart quotes"),
        ("«Guillemets»", "Guillemets"),
        ("[(Bracketed)]", "Bracketed"),
        ("' \"Mixed\" '", "Mixed"),
        ("(Left only", "Left only"),
        ("Right only)", "Right only"),
        ("It's inside", "It's inside"),
    ],
)
def test_sanitize_strips_enclosing_quotes_and_brackets(raw: str, expected: str) -> None:
    """Quote/bracket runs are stripped at each end independently."""

    assert sanitize_title(raw) == expected


def test_sanitize_handles_none_and_non_strings() -> None:
    """`None` becomes empty; other values are string-coerced."""

    assert sanitize_title(None) == ""
    assert sanitize_title(1984) == "1984"
    assert sanitize_title("   ") == ""
    assert sanitize_title('""') == ""


def test_truncation_counts_codepoints_and_appends_ellipsis() -> None:
    """Overlong titles keep `max - 1` codepoints followed by one ellipsis."""

    normalizer = TitleNormalizer(max_length=5)

    assert normalizer.sanitize("abcde") == "abcde"
    assert normalizer.sanitize("abcdef") == "abcd" + ELLIPSIS
    assert normalizer.sanitize("😀😀😀😀😀😀") == "😀😀😀😀" + ELLIPSIS
    assert len(normalizer.sanitize("x" * 500)) == 5


def test_default_maximum_length_is_120_codepoints() -> None:
    """Default normalizer bounds titles to 120 codepoints."""

    title = sanitize_title("y" * 121)

    assert len(title) == 120
    assert title.endswith(ELLIPSIS)


@pytest.mark.parametrize(
    "raw",
    [
        "  The   Matrix  ",
        '"  [nested]  "',
        "e\u200b\u0301clair",
        "z" * 300,
        "a " * 100,
        "«" + "word " * 40 + "»",
        "\u3000\u00a0",
        "(" * 130 + "x",
        "x" + " " * 118 + "y" * 5,
    ],
)
def test_sanitize_is_idempotent(raw: str) -> None:
    """Sanitizing an already sanitized title leaves it unchanged."""

    once = sanitize_title(raw)

    assert sanitize_title(once) == once


def test_remove_invisible_recomposes_separated_sequences() -> None:
    """Removing a zero-width space between base and accent yields composed text."""

    assert RemoveInvisibleCharacters().apply("e\u200b\u0301") == "\u00e9"


def test_strip_enclosing_quotes_leaves_inner_quotes() -> None:
    """Only leading and trailing runs are affected."""

    assert StripEnclosingQuotes().apply('"a "b" c"') == 'a "b" c'


def test_truncate_rejects_non_positive_length() -> None:
    """A maximum length must be positive."""

    with pytest.raises(ValueError, match="positive integer"):
        TruncateCodepoints(0)


def test_comparison_key_is_lowercase_sanitized_title() -> None:
    """Comparison keys ignore case, spacing, and enclosing quotes."""

    assert title_comparison_key('  "The  MATRIX" ') == "the matrix"
    assert title_comparison_key("The Matrix") == title_comparison_key("the matrix")
