"""Domain exceptions and structured failure codes for the state core and CLI."""

from __future__ import annotations

from enum import Enum


class PersistenceError(RuntimeError):
    """Raised by storage backends when a read or write cannot complete.

    The state store converts this into a `False` result; it never escapes the
    public core operations.
    """

    def __init__(self, *, key: str, detail: str) -> None:
        """Initialize a backend failure scoped to one storage key."""

        super().__init__(detail)
        self.key = key
        self.detail = detail


class DeleteListError(str, Enum):
    """Structured failure codes reported by list deletion."""

    NOT_FOUND = "not_found"
    LAST_LIST_PROTECTED = "last_list_protected"
    PERSISTENCE_FAILED = "persistence_failed"

    @property
    def message(self) -> str:
        """Human-readable description of the failure."""

        return _DELETE_LIST_ERROR_MESSAGES[self]


_DELETE_LIST_ERROR_MESSAGES = {
    DeleteListError.NOT_FOUND: "Unknown list id.",
    DeleteListError.LAST_LIST_PROTECTED: "Cannot delete the last list.",
    DeleteListError.PERSISTENCE_FAILED: "Failed to persist state.",
}


class CommandError(RuntimeError):
    """Raised when a CLI command cannot complete a requested operation."""

    def __init__(
        self,
        *,
        operation: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize an operation-scoped command error."""

        super().__init__(detail)
        self.operation = operation
        self.detail = detail
        self.hint = hint
