"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
list summaries, item rows, and list deletion outcomes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import NoReturn

import typer

from .errors import CommandError
from .models.datatypes import DeleteListResult, Item, SavedList, State


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, CommandError):
        typer.secho(
            f"{command_name} failed during `{exc.operation}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def format_timestamp(created_at: int | float) -> str:
    """Render epoch milliseconds as a UTC ISO-8601 timestamp."""

    try:
        moment = datetime.fromtimestamp(created_at / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return str(created_at)
    return moment.isoformat(timespec="seconds")


def _format_list_row(state: State, saved_list: SavedList) -> str:
    """Return the `name [id] (n items)` summary row for a list."""

    count = len(state.items_in_list(saved_list.id))
    noun = "item" if count == 1 else "items"
    return f"{saved_list.name} [{saved_list.id}] ({count} {noun})"


def echo_lists(state: State) -> None:
    """Print one row per list with its id and item count."""

    for saved_list in state.lists:
        typer.echo(_format_list_row(state, saved_list))


def echo_items(items: list[Item]) -> None:
    """Print item rows newest first."""

    if not items:
        typer.echo("  (no items)")
        return
    for item in items:
        typer.echo(f"  {item.id}  {format_timestamp(item.created_at)}  {item.title}")


def echo_state(state: State, list_id: str | None = None) -> None:
    """Print lists followed by their items, optionally restricted to one list."""

    for saved_list in state.lists:
        if list_id is not None and saved_list.id != list_id:
            continue
        typer.echo(_format_list_row(state, saved_list))
        echo_items(state.items_in_list(saved_list.id))


def echo_delete_list_result(list_id: str, result: DeleteListResult) -> None:
    """Print the outcome of a successful list deletion."""

    typer.echo(f"Deleted list `{list_id}`.")
    if result.dest_id is None:
        typer.echo(f"Deleted items: {result.deleted}")
        return
    if result.destination_fallback:
        typer.secho(
            f"Requested destination was not usable; moved items to `{result.dest_id}`.",
            fg=typer.colors.YELLOW,
            err=True,
        )
    typer.echo(f"Moved items: {result.moved} -> `{result.dest_id}`")
