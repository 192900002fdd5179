"""Strict validation and execution of inbound request messages.

Responsibilities:
- Validate a JSON-like message against exactly one schema per request kind.
- Return a tagged result: `ParsedRequest` on success, `RequestRejected` otherwise.
- Execute a validated request with one core call and relay its result payload.

Unknown kinds, missing required fields, wrong field types and unexpected
fields are all rejected; no alternative field names are probed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .core import WatchLaterCore
from .parsing import is_finite_number


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Schema entry for one request field."""

    name: str
    kind: str
    required: bool = True
    nullable: bool = False


@dataclass(frozen=True, slots=True)
class ParsedRequest:
    """A request that passed schema validation."""

    kind: str
    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RequestRejected:
    """A request that failed schema validation."""

    error: str

    def to_payload(self) -> dict[str, Any]:
        """Return the failure payload relayed to the sender."""

        return {"ok": False, "error": self.error}


RequestParseResult = ParsedRequest | RequestRejected


_REQUEST_SCHEMAS: dict[str, tuple[FieldSpec, ...]] = {
    "getState": (),
    "export": (),
    "importState": (FieldSpec("payload", "object"),),
    "createList": (FieldSpec("name", "string"),),
    "createListAndMaybeAdd": (
        FieldSpec("name", "string"),
        FieldSpec("title", "string", required=False, nullable=True),
    ),
    "addItem": (
        FieldSpec("listId", "string"),
        FieldSpec("title", "string"),
        FieldSpec("createdAt", "number", required=False, nullable=True),
    ),
    "deleteMany": (FieldSpec("ids", "string_list"),),
    "deleteList": (
        FieldSpec("id", "string"),
        FieldSpec("cascade", "boolean", required=False),
        FieldSpec("moveToId", "string", required=False, nullable=True),
    ),
}

SUPPORTED_REQUEST_KINDS = frozenset(_REQUEST_SCHEMAS)


def _matches_kind(value: object, kind: str) -> bool:
    """Return whether `value` has the JSON type named by `kind`."""

    if kind == "string":
        return isinstance(value, str)
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "number":
        return is_finite_number(value)
    if kind == "object":
        return isinstance(value, Mapping)
    if kind == "string_list":
        return isinstance(value, list) and all(isinstance(entry, str) for entry in value)
    raise ValueError(f"Unknown field kind `{kind}`.")


def parse_request(payload: object) -> RequestParseResult:
    """Validate `payload` against the schema of its `type` field."""

    if not isinstance(payload, Mapping):
        return RequestRejected("Request must be an object.")
    kind = payload.get("type")
    if not isinstance(kind, str) or not kind:
        return RequestRejected("Request is missing a string `type`.")
    schema = _REQUEST_SCHEMAS.get(kind)
    if schema is None:
        return RequestRejected(f"Unsupported request type `{kind}`.")

    allowed = {spec.name for spec in schema} | {"type"}
    unexpected = sorted(str(key) for key in payload if key not in allowed)
    if unexpected:
        return RequestRejected(
            f"`{kind}` request has unexpected field(s): {', '.join(unexpected)}."
        )

    fields: dict[str, Any] = {}
    for spec in schema:
        if spec.name not in payload:
            if spec.required:
                return RequestRejected(f"`{kind}` request is missing `{spec.name}`.")
            continue
        value = payload[spec.name]
        if value is None and spec.nullable:
            fields[spec.name] = None
            continue
        if not _matches_kind(value, spec.kind):
            return RequestRejected(f"`{kind}` field `{spec.name}` must be a {spec.kind}.")
        fields[spec.name] = value
    return ParsedRequest(kind=kind, fields=fields)


def execute_request(core: WatchLaterCore, request: ParsedRequest) -> dict[str, Any]:
    """Perform the core call matching `request` and return its result payload."""

    fields = request.fields
    if request.kind in {"getState", "export"}:
        return {"ok": True, "state": core.get_state().to_payload()}

    if request.kind == "importState":
        if core.set_state(fields["payload"]):
            return {"ok": True}
        return {"ok": False, "error": "Failed to persist state."}

    if request.kind == "createList":
        saved_list = core.create_list(fields["name"])
        if saved_list is None:
            return {"ok": False, "error": "Empty name"}
        return {"ok": True, "id": saved_list.id}

    if request.kind == "createListAndMaybeAdd":
        saved_list, _ = core.create_list_and_maybe_add(fields["name"], fields.get("title"))
        if saved_list is None:
            return {"ok": False, "error": "Empty name"}
        return {"ok": True, "id": saved_list.id}

    if request.kind == "addItem":
        item = core.add_item(fields["listId"], fields["title"], fields.get("createdAt"))
        if item is None:
            return {"ok": False, "error": "Item rejected"}
        return {"ok": True, "item": item.to_payload()}

    if request.kind == "deleteMany":
        return {"ok": True, "deletedCount": core.delete_many(fields["ids"])}

    if request.kind == "deleteList":
        result = core.delete_list(
            fields["id"],
            cascade=fields.get("cascade", True),
            move_to_id=fields.get("moveToId"),
        )
        return result.to_payload()

    raise ValueError(f"Unsupported request type `{request.kind}`.")


def handle_request(core: WatchLaterCore, payload: object) -> dict[str, Any]:
    """Validate and execute one request message, relaying failures as payloads."""

    parsed = parse_request(payload)
    if isinstance(parsed, RequestRejected):
        return parsed.to_payload()
    return execute_request(core, parsed)
