"""Name-request capability for CLI flows that need a list name.

The inline terminal prompt is tried first; when it yields nothing the editor
prompt acts as the secondary surface. Both implement `NameRequester` and are
interchangeable.
"""

from __future__ import annotations

from typing import Protocol, Sequence

import typer

from .text.titles import (
    CanonicalizeUnicode,
    CollapseWhitespace,
    RemoveInvisibleCharacters,
    TitleNormalizer,
    TrimWhitespace,
)


_EDITOR_COMMENT_PREFIX = "#"

_INPUT_CLEANER = TitleNormalizer(
    rules=[
        CanonicalizeUnicode(),
        RemoveInvisibleCharacters(),
        CollapseWhitespace(),
        TrimWhitespace(),
    ]
)


def clean_user_input(text: object) -> str:
    """Canonicalize typed input: NFC, no invisible characters, single spaces, trimmed."""

    return _INPUT_CLEANER.sanitize(text)


class NameRequester(Protocol):
    """Capability for asking the user for a name."""

    def request_name(self, default_value: str = "") -> str | None:
        """Return a cleaned non-empty name, or `None` when none was given."""


class TerminalNameRequester:
    """Ask for a name inline on the terminal."""

    def __init__(self, message: str = "New list name") -> None:
        self.message = message

    def request_name(self, default_value: str = "") -> str | None:
        try:
            answer = typer.prompt(
                self.message, default=default_value, show_default=bool(default_value)
            )
        except typer.Abort:
            return None
        return clean_user_input(answer) or None


class EditorNameRequester:
    """Ask for a name by opening the user's editor on a small template."""

    def __init__(self, instructions: str = "Enter the new list name on the first line.") -> None:
        self.instructions = instructions

    def request_name(self, default_value: str = "") -> str | None:
        template = f"{default_value}\n{_EDITOR_COMMENT_PREFIX} {self.instructions}\n"
        edited = typer.edit(template)
        if edited is None:
            return None
        for line in edited.splitlines():
            if line.lstrip().startswith(_EDITOR_COMMENT_PREFIX):
                continue
            name = clean_user_input(line)
            if name:
                return name
        return None


def request_name_with_fallback(
    requesters: Sequence[NameRequester],
    default_value: str = "",
) -> str | None:
    """Return the first non-empty name produced by `requesters`, in order."""

    for requester in requesters:
        name = requester.request_name(default_value)
        if name:
            return name
    return None
