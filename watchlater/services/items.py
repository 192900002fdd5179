"""Item insertion and bulk deletion on top of the state store.

Responsibilities:
- Insert sanitized items newest-first, returning existing duplicates unchanged.
- Delete items by id in bulk without ever raising.
"""

from __future__ import annotations

from ..ids import Clock, IdGenerator, current_timestamp_ms, generate_id
from ..models.datatypes import Item
from ..parsing import coerce_identifier, is_finite_number
from ..state.normalization import ITEM_ID_LENGTH
from ..state.store import StateStore
from ..telemetry.logger import OperationLogger
from ..text.dedupe import Deduplicator


class ItemService:
    """Add and remove items while keeping stored state consistent."""

    def __init__(
        self,
        store: StateStore,
        deduplicator: Deduplicator | None = None,
        id_generator: IdGenerator = generate_id,
        clock: Clock = current_timestamp_ms,
        item_id_length: int = ITEM_ID_LENGTH,
        logger: OperationLogger | None = None,
    ) -> None:
        self.store = store
        self.deduplicator = deduplicator or Deduplicator(store.normalizer.title_normalizer)
        self.id_generator = id_generator
        self.clock = clock
        self.item_id_length = item_id_length
        self.logger = logger or OperationLogger(component="items")

    def add_item(
        self,
        list_id: object,
        title: object,
        created_at: object = None,
    ) -> Item | None:
        """Insert a titled item at the front of the item sequence.

        Returns:
            The created item; the already stored item when the title duplicates
            one in the same list; `None` when the list id is blank or unknown,
            the sanitized title is empty, or the write failed.
        """

        target_list_id = coerce_identifier(list_id)
        if not target_list_id:
            return None

        state = self.store.get()
        if state.find_list(target_list_id) is None:
            self.logger.warning("add_item", "unknown_list", list_id=target_list_id)
            return None

        clean_title = self.deduplicator.normalizer.sanitize(title)
        if not clean_title:
            return None

        candidate = Item(
            id=self.id_generator(self.item_id_length),
            list_id=target_list_id,
            title=clean_title,
            created_at=created_at if is_finite_number(created_at) else self.clock(),
        )
        duplicate = next(
            (item for item in state.items if self.deduplicator.is_duplicate(item, candidate)),
            None,
        )
        if duplicate is not None:
            return duplicate

        state.items.insert(0, candidate)
        if not self.store.set(state):
            self.logger.error("add_item", "persist_failed", list_id=target_list_id)
            return None
        return candidate

    def delete_many(self, ids: object) -> int:
        """Remove every item whose id is in `ids` and return how many were removed."""

        if not isinstance(ids, list | tuple | set | frozenset):
            return 0
        wanted = {
            coerce_identifier(value)
            for value in ids
            if value is not None and coerce_identifier(value).strip()
        }
        if not wanted:
            return 0

        state = self.store.get()
        kept_items = [item for item in state.items if item.id not in wanted]
        removed = len(state.items) - len(kept_items)
        if removed == 0:
            return 0

        state.items = kept_items
        if not self.store.set(state):
            self.logger.error("delete_many", "persist_failed", requested=len(wanted))
            return 0
        return removed
