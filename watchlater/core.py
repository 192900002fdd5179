"""Core facade wiring the state store and services from configuration.

Responsibilities:
- Build the title normalizer, state normalizer, store and services for one
  storage slot.
- Expose the operations consumed by request handling and the CLI.

State is never cached here; every call reads through the store and callers
thread the returned `State` values explicitly.
"""

from __future__ import annotations

from collections.abc import Mapping

from .config import WatchLaterConfig
from .ids import Clock, IdGenerator, current_timestamp_ms, generate_id
from .io.storage import JsonFileBackend, StateBackend
from .models.datatypes import DeleteListResult, Item, SavedList, State
from .services.items import ItemService
from .services.lists import ListService
from .state.normalization import StateNormalizer
from .state.store import StateStore
from .text.dedupe import Deduplicator
from .text.titles import TitleNormalizer


class WatchLaterCore:
    """Entry point for reading and mutating persisted lists and items."""

    def __init__(self, store: StateStore, lists: ListService, items: ItemService) -> None:
        self.store = store
        self.lists = lists
        self.items = items

    @classmethod
    def from_config(
        cls,
        config: WatchLaterConfig,
        backend: StateBackend | None = None,
        id_generator: IdGenerator = generate_id,
        clock: Clock = current_timestamp_ms,
    ) -> WatchLaterCore:
        """Build a core for `config`, defaulting to the JSON file backend."""

        config.validate()
        title_normalizer = TitleNormalizer(max_length=config.max_title_length)
        normalizer = StateNormalizer(
            title_normalizer=title_normalizer,
            default_lists=config.default_lists,
            id_generator=id_generator,
            clock=clock,
            list_id_length=config.list_id_length,
            item_id_length=config.item_id_length,
        )
        store = StateStore(
            backend=backend if backend is not None else JsonFileBackend(config.storage_dir),
            key=config.storage_key,
            normalizer=normalizer,
        )
        return cls(
            store=store,
            lists=ListService(store, clock=clock),
            items=ItemService(
                store,
                deduplicator=Deduplicator(title_normalizer),
                id_generator=id_generator,
                clock=clock,
                item_id_length=config.item_id_length,
            ),
        )

    def get_state(self) -> State:
        """Return an independent copy of the repaired stored state."""

        return self.store.get()

    def set_state(self, state: State | Mapping[str, object]) -> bool:
        """Replace stored state with the normalized form of `state`."""

        return self.store.set(state)

    def create_list(self, name: object) -> SavedList | None:
        """Create a list named `name`."""

        return self.lists.create_list(name)

    def add_item(self, list_id: object, title: object, created_at: object = None) -> Item | None:
        """Add a titled item to `list_id`, deduplicating within the list."""

        return self.items.add_item(list_id, title, created_at)

    def delete_many(self, ids: object) -> int:
        """Delete items by id and return the removed count."""

        return self.items.delete_many(ids)

    def delete_list(
        self,
        list_id: object,
        cascade: bool = True,
        move_to_id: object = None,
    ) -> DeleteListResult:
        """Delete a list, cascading to or moving its items."""

        return self.lists.delete_list(list_id, cascade=cascade, move_to_id=move_to_id)

    def create_list_and_maybe_add(
        self, name: object, title: object = None
    ) -> tuple[SavedList | None, Item | None]:
        """Create a list and, when `title` sanitizes to text, add it to the new list."""

        saved_list = self.create_list(name)
        if saved_list is None or title is None:
            return saved_list, None
        return saved_list, self.add_item(saved_list.id, title)
