"""List creation and deletion on top of the state store.

Responsibilities:
- Create lists with ids derived from their names.
- Delete lists while either cascading to their items or reassigning them.
- Refuse to delete the last remaining list.
"""

from __future__ import annotations

from ..errors import DeleteListError
from ..ids import Clock, current_timestamp_ms
from ..models.datatypes import DeleteListResult, Item, SavedList
from ..parsing import coerce_identifier
from ..state.store import StateStore
from ..telemetry.logger import OperationLogger
from ..text.slug import slugify_list_name, unique_suffixed_id


class ListService:
    """Create and delete lists while keeping stored state consistent."""

    def __init__(
        self,
        store: StateStore,
        clock: Clock = current_timestamp_ms,
        logger: OperationLogger | None = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.logger = logger or OperationLogger(component="lists")

    def create_list(self, name: object) -> SavedList | None:
        """Create and persist a list named `name`.

        Returns:
            The created list, or `None` when the trimmed name is empty or the
            write failed.
        """

        clean_name = coerce_identifier(name).strip()
        if not clean_name:
            return None

        state = self.store.get()
        list_id = unique_suffixed_id(slugify_list_name(clean_name), set(state.list_ids()))
        saved_list = SavedList(id=list_id, name=clean_name, created_at=self.clock())
        state.lists.append(saved_list)
        if not self.store.set(state):
            self.logger.error("create_list", "persist_failed", list_id=list_id)
            return None
        return saved_list

    def delete_list(
        self,
        list_id: object,
        *,
        cascade: bool = True,
        move_to_id: object = None,
    ) -> DeleteListResult:
        """Delete a list, cascading to or reassigning its items.

        Args:
            list_id: Identifier of the list to delete.
            cascade: Delete the list's items when true; otherwise move them.
            move_to_id: Preferred destination for moved items. Ignored when it
                is unknown or equals `list_id`, in which case the first
                remaining list receives the items.
        """

        target_id = coerce_identifier(list_id)
        if not target_id:
            return DeleteListResult.failure(DeleteListError.NOT_FOUND)

        state = self.store.get()
        target_index = next(
            (index for index, saved_list in enumerate(state.lists) if saved_list.id == target_id),
            None,
        )
        if target_index is None:
            return DeleteListResult.failure(DeleteListError.NOT_FOUND)
        if len(state.lists) <= 1:
            return DeleteListResult.failure(DeleteListError.LAST_LIST_PROTECTED)

        remaining = [
            saved_list for index, saved_list in enumerate(state.lists) if index != target_index
        ]
        dest_id: str | None = None
        fallback = False
        if not cascade:
            requested = coerce_identifier(move_to_id)
            if requested and any(saved_list.id == requested for saved_list in remaining):
                dest_id = requested
            else:
                dest_id = remaining[0].id
                fallback = bool(requested)

        moved = 0
        deleted = 0
        kept_items: list[Item] = []
        for item in state.items:
            if item.list_id != target_id:
                kept_items.append(item)
            elif dest_id is None:
                deleted += 1
            else:
                kept_items.append(
                    Item(
                        id=item.id,
                        list_id=dest_id,
                        title=item.title,
                        created_at=item.created_at,
                    )
                )
                moved += 1

        state.lists = remaining
        state.items = kept_items
        if not self.store.set(state):
            self.logger.error("delete_list", "persist_failed", list_id=target_id)
            return DeleteListResult.failure(DeleteListError.PERSISTENCE_FAILED)
        if fallback:
            self.logger.warning(
                "delete_list",
                "destination_fallback",
                requested=coerce_identifier(move_to_id),
                dest_id=dest_id,
            )
        return DeleteListResult(
            ok=True,
            moved=moved,
            deleted=deleted,
            dest_id=dest_id,
            destination_fallback=fallback,
        )
