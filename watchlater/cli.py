"""Command-line interface for watchlater.

Responsibilities:
- Expose user-facing commands for list and item operations.
- Relay JSON request messages to the core and print JSON responses.
- Resolve configuration from `--config`, environment and CLI overrides.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
import sys
from typing import Annotated

import typer

from .cli_prompts import (
    EditorNameRequester,
    TerminalNameRequester,
    clean_user_input,
    request_name_with_fallback,
)
from .cli_rendering import (
    echo_delete_list_result,
    echo_lists,
    echo_state,
    exit_with_command_error,
)
from .config import ConfigLoader, WatchLaterConfig
from .core import WatchLaterCore
from .errors import CommandError, DeleteListError
from .messages import handle_request
from .telemetry.logger import configure_logging

app = typer.Typer(
    name="watchlater",
    no_args_is_help=True,
    help="Save text snippets into named lists.",
)

_APP_DIR_NAME = "watchlater"
_DELETE_LIST_HINTS = {
    DeleteListError.NOT_FOUND: "Run `watchlater show --lists-only` to see list ids.",
    DeleteListError.LAST_LIST_PROTECTED: "A collection always keeps at least one list.",
    DeleteListError.PERSISTENCE_FAILED: "Check that the storage directory is writable.",
}


def _stderr_sink(message: str) -> None:
    """Write one log record to the current stderr stream."""

    typer.echo(message, err=True, nl=False)


def _load_config(config_path: Path | None, storage_dir: Path | None) -> WatchLaterConfig:
    """Load configuration and map failures to command errors."""

    if config_path is not None:
        try:
            config = ConfigLoader.from_yaml(config_path)
        except FileNotFoundError as exc:
            raise CommandError(
                operation="config",
                detail=f"Config file not found: `{config_path}`.",
                hint="Provide an existing path via `--config <path.yaml>`.",
            ) from exc
        except ValueError as exc:
            raise CommandError(
                operation="config",
                detail=f"Invalid config file `{config_path}`: {exc}",
                hint="Fix config schema/values and rerun.",
            ) from exc
    else:
        try:
            config = ConfigLoader.from_env()
        except ValueError as exc:
            raise CommandError(
                operation="config",
                detail=f"Invalid environment configuration: {exc}",
                hint="Fix or unset the `WATCHLATER_*` variables and rerun.",
            ) from exc
        if storage_dir is None and os.environ.get("WATCHLATER_STORAGE_DIR") is None:
            config.storage_dir = Path(typer.get_app_dir(_APP_DIR_NAME))

    if storage_dir is not None:
        config.storage_dir = storage_dir
    return config


def _core(ctx: typer.Context) -> WatchLaterCore:
    """Return the core built by the application callback."""

    return ctx.obj


@app.callback()
def configure(
    ctx: typer.Context,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file."),
    ] = None,
    storage_dir: Annotated[
        Path | None,
        typer.Option("--storage-dir", help="Directory holding the state file."),
    ] = None,
) -> None:
    """Save text snippets into named lists."""

    try:
        config = _load_config(config_file, storage_dir)
        configure_logging(_stderr_sink, config.log_level)
        ctx.obj = WatchLaterCore.from_config(config)
    except Exception as exc:
        exit_with_command_error("watchlater", exc)


@app.command("show")
def show_command(
    ctx: typer.Context,
    list_id: Annotated[
        str | None,
        typer.Option("--list", help="Only show the list with this id."),
    ] = None,
    lists_only: Annotated[
        bool,
        typer.Option("--lists-only", help="Print list summaries without items."),
    ] = False,
) -> None:
    """Show lists and their items, newest first."""

    state = _core(ctx).get_state()
    if list_id is not None and state.find_list(list_id) is None:
        exit_with_command_error(
            "show",
            CommandError(
                operation="show",
                detail=f"Unknown list id `{list_id}`.",
                hint="Run `watchlater show --lists-only` to see list ids.",
            ),
        )
    if lists_only:
        echo_lists(state)
        return
    echo_state(state, list_id=list_id)


@app.command("create-list")
def create_list_command(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(help="List name. Prompted for when omitted."),
    ] = None,
    item: Annotated[
        str | None,
        typer.Option("--item", help="Also save this title into the new list."),
    ] = None,
) -> None:
    """Create a list, optionally saving a first item into it."""

    if name is None:
        name = request_name_with_fallback(
            [TerminalNameRequester(), EditorNameRequester()],
        )
    clean_name = clean_user_input(name)
    if not clean_name:
        exit_with_command_error(
            "create-list",
            CommandError(
                operation="create_list",
                detail="List name is empty.",
                hint="Pass a name argument or type one when prompted.",
            ),
        )

    saved_list, saved_item = _core(ctx).create_list_and_maybe_add(clean_name, item)
    if saved_list is None:
        exit_with_command_error(
            "create-list",
            CommandError(
                operation="create_list",
                detail="Failed to persist the new list.",
                hint="Check that the storage directory is writable.",
            ),
        )
    typer.echo(f"Created list `{saved_list.id}` ({saved_list.name}).")
    if saved_item is not None:
        typer.echo(f"Saved item {saved_item.id}: {saved_item.title}")


@app.command("add")
def add_command(
    ctx: typer.Context,
    list_id: Annotated[str, typer.Argument(help="Target list id.")],
    title: Annotated[str, typer.Argument(help="Title text to save.")],
    created_at: Annotated[
        int | None,
        typer.Option("--created-at", help="Creation time in epoch milliseconds."),
    ] = None,
) -> None:
    """Save a title into a list; duplicates in the same list are not re-added."""

    core = _core(ctx)
    known_ids = {existing.id for existing in core.get_state().items}
    saved_item = core.add_item(list_id, title, created_at)
    if saved_item is None:
        exit_with_command_error(
            "add",
            CommandError(
                operation="add_item",
                detail=f"Could not save title into list `{list_id}`.",
                hint=(
                    "Check the list id with `watchlater show --lists-only` and use a "
                    "non-empty title."
                ),
            ),
        )
    if saved_item.id in known_ids:
        typer.echo(f"Already saved as {saved_item.id}: {saved_item.title}")
        return
    typer.echo(f"Saved item {saved_item.id}: {saved_item.title}")


@app.command("delete-items")
def delete_items_command(
    ctx: typer.Context,
    item_ids: Annotated[list[str], typer.Argument(help="Ids of items to delete.")],
) -> None:
    """Delete items by id."""

    deleted_count = _core(ctx).delete_many(item_ids)
    typer.echo(f"Deleted items: {deleted_count}")


@app.command("delete-list")
def delete_list_command(
    ctx: typer.Context,
    list_id: Annotated[str, typer.Argument(help="Id of the list to delete.")],
    cascade: Annotated[
        bool,
        typer.Option(
            "--cascade/--keep-items",
            help="Delete the list's items, or keep them by moving to another list.",
        ),
    ] = True,
    move_to: Annotated[
        str | None,
        typer.Option(
            "--move-to",
            help="Destination list id for kept items (implies `--keep-items`).",
        ),
    ] = None,
) -> None:
    """Delete a list, removing or moving its items."""

    result = _core(ctx).delete_list(
        list_id,
        cascade=cascade and move_to is None,
        move_to_id=move_to,
    )
    if not result.ok:
        hint = _DELETE_LIST_HINTS.get(result.error)
        exit_with_command_error(
            "delete-list",
            CommandError(
                operation="delete_list",
                detail=result.to_payload()["error"],
                hint=hint,
            ),
        )
    echo_delete_list_result(list_id, result)


@app.command("import")
def import_command(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="JSON file holding a state snapshot.")],
) -> None:
    """Replace stored state with a JSON snapshot (repaired before saving)."""

    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        exit_with_command_error(
            "import",
            CommandError(
                operation="import",
                detail=f"Failed to read JSON snapshot `{source}`: {exc}",
                hint="Provide a file produced by `watchlater export`.",
            ),
        )
    if not _core(ctx).set_state(payload):
        exit_with_command_error(
            "import",
            CommandError(
                operation="import",
                detail=f"Snapshot `{source}` could not be stored.",
                hint="The snapshot must be a JSON object and storage must be writable.",
            ),
        )
    typer.echo(f"Imported state from `{source}`.")


@app.command("export")
def export_command(
    ctx: typer.Context,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Write the snapshot to this file instead of stdout."),
    ] = None,
) -> None:
    """Print or write the current state as JSON."""

    payload = json.dumps(
        _core(ctx).get_state().to_payload(),
        ensure_ascii=False,
        indent=2,
        sort_keys=True,
    )
    if out is None:
        typer.echo(payload)
        return
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload + "\n", encoding="utf-8")
    except OSError as exc:
        exit_with_command_error(
            "export",
            CommandError(operation="export", detail=f"Failed to write `{out}`: {exc}"),
        )
    typer.echo(f"Exported state to `{out}`.")


@app.command("handle")
def handle_command(
    ctx: typer.Context,
    request: Annotated[
        str | None,
        typer.Argument(help="JSON request message. Read from stdin when omitted."),
    ] = None,
) -> None:
    """Execute one JSON request message and print the JSON response."""

    raw_request = request if request is not None else sys.stdin.read()
    try:
        payload = json.loads(raw_request)
    except json.JSONDecodeError as exc:
        response: dict[str, object] = {"ok": False, "error": f"Invalid JSON: {exc.msg}"}
    else:
        response = handle_request(_core(ctx), payload)
    typer.echo(json.dumps(response, ensure_ascii=False, sort_keys=True))
    if not response.get("ok"):
        raise typer.Exit(code=1)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
