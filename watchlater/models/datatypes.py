"""Core datatypes for persisted watch-later state.

Responsibilities:
- Represent lists, items and the full state snapshot with explicit typing.
- Convert records to the camelCase JSON payload stored in the key-value slot.

Key types:
- `SavedList`, `Item`, `State`, `NormalizationResult`, and `DeleteListResult`.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from ..errors import DeleteListError


@dataclass(frozen=True, slots=True)
class SavedList:
    """A named collection that items belong to.

    Attributes:
        id: Unique list identifier.
        name: Non-empty display name.
        created_at: Creation time in epoch milliseconds.
    """

    id: str
    name: str
    created_at: int | float

    def to_payload(self) -> dict[str, Any]:
        """Return the persisted JSON representation."""

        return {"id": self.id, "name": self.name, "createdAt": self.created_at}


@dataclass(frozen=True, slots=True)
class Item:
    """One saved title bound to exactly one list.

    Attributes:
        id: Item identifier.
        list_id: Identifier of the owning list.
        title: Sanitized, length-bounded title.
        created_at: Creation time in epoch milliseconds.
    """

    id: str
    list_id: str
    title: str
    created_at: int | float

    def to_payload(self) -> dict[str, Any]:
        """Return the persisted JSON representation."""

        return {
            "id": self.id,
            "listId": self.list_id,
            "title": self.title,
            "createdAt": self.created_at,
        }


@dataclass(slots=True)
class State:
    """Complete persisted snapshot.

    Instances handed out by the state store are independent working copies;
    mutating one never affects stored data until it is passed back to `set`.

    Attributes:
        version: Schema version.
        lists: Ordered lists.
        items: Items ordered newest first.
        settings: Opaque settings mapping passed through untouched.
    """

    version: int
    lists: list[SavedList] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Return the persisted JSON representation."""

        return {
            "version": self.version,
            "lists": [saved_list.to_payload() for saved_list in self.lists],
            "items": [item.to_payload() for item in self.items],
            "settings": copy.deepcopy(self.settings),
        }

    def copy(self) -> State:
        """Return a deep, independent copy of this state."""

        return State(
            version=self.version,
            lists=list(self.lists),
            items=list(self.items),
            settings=copy.deepcopy(self.settings),
        )

    def list_ids(self) -> list[str]:
        """Return list ids in order."""

        return [saved_list.id for saved_list in self.lists]

    def find_list(self, list_id: str) -> SavedList | None:
        """Return the list with `list_id`, if present."""

        return next((saved_list for saved_list in self.lists if saved_list.id == list_id), None)

    def items_in_list(self, list_id: str) -> list[Item]:
        """Return items belonging to `list_id`, newest first."""

        return [item for item in self.items if item.list_id == list_id]


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    """Output of repairing a raw persisted blob."""

    state: State
    changed: bool


@dataclass(frozen=True, slots=True)
class DeleteListResult:
    """Outcome of a list deletion.

    Attributes:
        ok: Whether the list was deleted and the state persisted.
        moved: Number of items reassigned to `dest_id`.
        deleted: Number of items removed together with the list.
        dest_id: Destination list id for moved items; `None` when cascading.
        error: Failure code when `ok` is false.
        destination_fallback: True when a requested destination was ignored
            and items moved to the first remaining list instead.
    """

    ok: bool
    moved: int = 0
    deleted: int = 0
    dest_id: str | None = None
    error: DeleteListError | None = None
    destination_fallback: bool = False

    @classmethod
    def failure(cls, error: DeleteListError) -> DeleteListResult:
        """Build a failed result carrying `error`."""

        return cls(ok=False, error=error)

    def to_payload(self) -> dict[str, Any]:
        """Return the structured result relayed to callers."""

        if not self.ok:
            error = self.error or DeleteListError.NOT_FOUND
            return {"ok": False, "error": error.message}
        return {
            "ok": True,
            "moved": self.moved,
            "deleted": self.deleted,
            "destId": self.dest_id,
        }
