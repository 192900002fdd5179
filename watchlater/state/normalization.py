"""Repair untrusted persisted blobs into canonical state.

Responsibilities:
- Accept any raw value (absent, wrong type, partial, malformed entries).
- Produce a `State` satisfying the list, item, title and version invariants.
- Report whether the canonical form differs from the raw input so the store
  can write repairs back.

Items are never dropped for pointing at an unknown list; they are reassigned
to the first list instead.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..ids import Clock, IdGenerator, current_timestamp_ms, generate_id
from ..models.datatypes import Item, NormalizationResult, SavedList, State
from ..parsing import coerce_identifier, is_finite_number, is_non_negative_integer
from ..text.slug import unique_suffixed_id
from ..text.titles import TitleNormalizer


CURRENT_SCHEMA_VERSION = 3
UNNAMED_LIST_NAME = "(unnamed)"
UNTITLED_ITEM_TITLE = "Untitled"
LIST_ID_LENGTH = 12
ITEM_ID_LENGTH = 16


@dataclass(frozen=True, slots=True)
class DefaultList:
    """Seed list written when no valid list survives normalization."""

    id: str
    name: str


DEFAULT_LISTS: tuple[DefaultList, ...] = (
    DefaultList(id="movies", name="Movies"),
    DefaultList(id="books", name="Books"),
    DefaultList(id="anime", name="Anime"),
)


class StateNormalizer:
    """Repair raw state payloads into invariant-satisfying `State` values."""

    def __init__(
        self,
        title_normalizer: TitleNormalizer | None = None,
        default_lists: tuple[DefaultList, ...] = DEFAULT_LISTS,
        id_generator: IdGenerator = generate_id,
        clock: Clock = current_timestamp_ms,
        list_id_length: int = LIST_ID_LENGTH,
        item_id_length: int = ITEM_ID_LENGTH,
    ) -> None:
        if not default_lists:
            raise ValueError("`default_lists` must contain at least one list.")
        self.title_normalizer = title_normalizer or TitleNormalizer()
        self.default_lists = default_lists
        self.id_generator = id_generator
        self.clock = clock
        self.list_id_length = list_id_length
        self.item_id_length = item_id_length

    def normalize(self, raw: object) -> NormalizationResult:
        """Return the canonical state for `raw` and whether repairs were needed."""

        payload: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        now = self.clock()

        lists = self._clean_lists(payload.get("lists"), now)
        seeded = not lists
        if seeded:
            lists = self._seed_default_lists(now)
        lists = self._ensure_unique_list_ids(lists)

        items, reassigned = self._clean_items(payload.get("items"), lists, now)

        raw_settings = payload.get("settings")
        settings = copy.deepcopy(dict(raw_settings)) if isinstance(raw_settings, Mapping) else {}

        raw_version = payload.get("version")
        version = raw_version if is_non_negative_integer(raw_version) else CURRENT_SCHEMA_VERSION

        state = State(version=version, lists=lists, items=items, settings=settings)
        changed = seeded or reassigned or state.to_payload() != raw
        return NormalizationResult(state=state, changed=changed)

    def _clean_lists(self, raw_lists: object, now: int) -> list[SavedList]:
        """Keep list entries carrying an id or a name, filling missing fields."""

        if not isinstance(raw_lists, list):
            return []
        cleaned: list[SavedList] = []
        for entry in raw_lists:
            if not isinstance(entry, Mapping):
                continue
            if entry.get("id") is None and entry.get("name") is None:
                continue
            list_id = coerce_identifier(entry.get("id")) or self.id_generator(self.list_id_length)
            name = coerce_identifier(entry.get("name")).strip() or UNNAMED_LIST_NAME
            created_at = entry.get("createdAt")
            cleaned.append(
                SavedList(
                    id=list_id,
                    name=name,
                    created_at=created_at if is_finite_number(created_at) else now,
                )
            )
        return cleaned

    def _seed_default_lists(self, now: int) -> list[SavedList]:
        """Build the configured default lists stamped with `now`."""

        return [
            SavedList(
                id=default.id or self.id_generator(self.list_id_length),
                name=default.name.strip() or UNNAMED_LIST_NAME,
                created_at=now,
            )
            for default in self.default_lists
        ]

    @staticmethod
    def _ensure_unique_list_ids(lists: list[SavedList]) -> list[SavedList]:
        """Suffix later duplicate ids with `-1`, `-2`, ... until every id is unique."""

        seen: set[str] = set()
        unique: list[SavedList] = []
        for saved_list in lists:
            list_id = unique_suffixed_id(saved_list.id, seen)
            seen.add(list_id)
            if list_id != saved_list.id:
                saved_list = SavedList(
                    id=list_id, name=saved_list.name, created_at=saved_list.created_at
                )
            unique.append(saved_list)
        return unique

    def _clean_items(
        self,
        raw_items: object,
        lists: list[SavedList],
        now: int,
    ) -> tuple[list[Item], bool]:
        """Keep item entries carrying an id or a title and bind each to a known list.

        Returns:
            Cleaned items and whether any item had to be reassigned to the
            first list.
        """

        if not isinstance(raw_items, list):
            return [], False
        known_list_ids = {saved_list.id for saved_list in lists}
        fallback_list_id = lists[0].id
        reassigned = False
        items: list[Item] = []
        for entry in raw_items:
            if not isinstance(entry, Mapping):
                continue
            if entry.get("id") is None and entry.get("title") is None:
                continue
            list_id = coerce_identifier(entry.get("listId"))
            if list_id not in known_list_ids:
                list_id = fallback_list_id
                reassigned = True
            created_at = entry.get("createdAt")
            items.append(
                Item(
                    id=coerce_identifier(entry.get("id")) or self.id_generator(self.item_id_length),
                    list_id=list_id,
                    title=self._clean_title(entry.get("title")),
                    created_at=created_at if is_finite_number(created_at) else now,
                )
            )
        return items, reassigned

    def _clean_title(self, raw_title: object) -> str:
        """Sanitize a stored title, substituting a placeholder when nothing remains."""

        title = self.title_normalizer.sanitize(raw_title)
        if title:
            return title
        return self.title_normalizer.sanitize(UNTITLED_ITEM_TITLE)
