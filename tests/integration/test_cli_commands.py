"""Integration tests for list and item commands against a JSON file store."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from watchlater.cli import app


def _invoke(storage_dir: Path, *args: str, input_text: str | None = None):
    runner = CliRunner()
    return runner.invoke(app, ["--storage-dir", str(storage_dir), *args], input=input_text)


def _stored_payload(storage_dir: Path) -> dict:
    return json.loads((storage_dir / "rw_lists_v3.json").read_text(encoding="utf-8"))


def test_show_seeds_default_lists_on_first_run(storage_dir: Path) -> None:
    """First `show` should seed and persist the default lists."""

    result = _invoke(storage_dir, "show")

    assert result.exit_code == 0, result.output
    assert "Movies [movies] (0 items)" in result.output
    assert "Books [books] (0 items)" in result.output
    assert "Anime [anime] (0 items)" in result.output
    assert "  (no items)" in result.output
    assert [entry["id"] for entry in _stored_payload(storage_dir)["lists"]] == [
        "movies",
        "books",
        "anime",
    ]


def test_create_list_with_first_item(storage_dir: Path) -> None:
    """`create-list --item` should create the list and save the sanitized title."""

    result = _invoke(storage_dir, "create-list", "  Road   Trips ", "--item", '"Into the Wild"')

    assert result.exit_code == 0, result.output
    assert "Created list `road-trips` (Road Trips)." in result.output
    assert ": Into the Wild" in result.output
    payload = _stored_payload(storage_dir)
    assert payload["items"][0]["listId"] == "road-trips"
    assert payload["items"][0]["title"] == "Into the Wild"


def test_create_list_prompts_for_missing_name(storage_dir: Path) -> None:
    """`create-list` without a name should ask on the terminal."""

    result = _invoke(storage_dir, "create-list", input_text="Podcasts\n")

    assert result.exit_code == 0, result.output
    assert "Created list `podcasts` (Podcasts)." in result.output


def test_add_reports_new_and_duplicate_items(storage_dir: Path) -> None:
    """`add` should save once and report the existing item on repeats."""

    first = _invoke(storage_dir, "add", "movies", "  The   Matrix  ")
    second = _invoke(storage_dir, "add", "movies", "the matrix")

    assert first.exit_code == 0, first.output
    assert first.output.startswith("Saved item ")
    assert first.output.rstrip().endswith(": The Matrix")
    assert second.exit_code == 0, second.output
    assert second.output.startswith("Already saved as ")
    assert len(_stored_payload(storage_dir)["items"]) == 1


def test_show_single_list_renders_items(storage_dir: Path) -> None:
    """`show --list` should print only the selected list with its items."""

    _invoke(storage_dir, "add", "books", "Dune", "--created-at", "0")

    result = _invoke(storage_dir, "show", "--list", "books")

    assert result.exit_code == 0, result.output
    assert "Books [books] (1 item)" in result.output
    assert "1970-01-01T00:00:00+00:00  Dune" in result.output
    assert "Movies" not in result.output


def test_delete_items_reports_removed_count(storage_dir: Path) -> None:
    """`delete-items` should report how many ids matched."""

    _invoke(storage_dir, "add", "movies", "Alien")
    item_id = _stored_payload(storage_dir)["items"][0]["id"]

    result = _invoke(storage_dir, "delete-items", item_id, "missing-id")

    assert result.exit_code == 0, result.output
    assert "Deleted items: 1" in result.output
    assert _stored_payload(storage_dir)["items"] == []


def test_delete_list_cascades_by_default(storage_dir: Path) -> None:
    """`delete-list` should remove the list and its items."""

    _invoke(storage_dir, "add", "anime", "Mushishi")

    result = _invoke(storage_dir, "delete-list", "anime")

    assert result.exit_code == 0, result.output
    assert "Deleted list `anime`." in result.output
    assert "Deleted items: 1" in result.output
    payload = _stored_payload(storage_dir)
    assert [entry["id"] for entry in payload["lists"]] == ["movies", "books"]
    assert payload["items"] == []


def test_delete_list_moves_items_to_destination(storage_dir: Path) -> None:
    """`delete-list --move-to` should reassign items to the chosen list."""

    _invoke(storage_dir, "add", "anime", "Mushishi")

    result = _invoke(storage_dir, "delete-list", "anime", "--move-to", "books")

    assert result.exit_code == 0, result.output
    assert "Moved items: 1 -> `books`" in result.output
    assert _stored_payload(storage_dir)["items"][0]["listId"] == "books"


def test_delete_list_reports_destination_fallback(storage_dir: Path) -> None:
    """An unusable `--move-to` should fall back to the first remaining list."""

    _invoke(storage_dir, "add", "anime", "Mushishi")

    result = _invoke(storage_dir, "delete-list", "anime", "--move-to", "ghost")

    assert result.exit_code == 0, result.output
    assert "Requested destination was not usable; moved items to `movies`." in result.output
    assert "Moved items: 1 -> `movies`" in result.output


def test_export_and_import_roundtrip_through_files(storage_dir: Path, tmp_path: Path) -> None:
    """`export --out` and `import` should move a repaired snapshot between stores."""

    _invoke(storage_dir, "add", "movies", "Heat")
    snapshot = tmp_path / "snapshot.json"

    exported = _invoke(storage_dir, "export", "--out", str(snapshot))
    other_store = tmp_path / "other"
    imported = _invoke(other_store, "import", str(snapshot))

    assert exported.exit_code == 0, exported.output
    assert f"Exported state to `{snapshot}`." in exported.output
    assert imported.exit_code == 0, imported.output
    assert _stored_payload(other_store) == _stored_payload(storage_dir)


def test_import_repairs_partial_snapshot(storage_dir: Path, tmp_path: Path) -> None:
    """`import` should normalize a snapshot before it is stored."""

    snapshot = tmp_path / "partial.json"
    snapshot.write_text(
        json.dumps({"items": [{"id": "x", "listId": "nowhere", "title": " Solaris "}]}),
        encoding="utf-8",
    )

    result = _invoke(storage_dir, "import", str(snapshot))

    assert result.exit_code == 0, result.output
    payload = _stored_payload(storage_dir)
    assert payload["version"] == 3
    assert payload["items"][0]["listId"] == "movies"
    assert payload["items"][0]["title"] == "Solaris"


def test_export_prints_json_to_stdout(storage_dir: Path) -> None:
    """`export` without `--out` should print the state JSON."""

    result = _invoke(storage_dir, "export")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["version"] == 3
    assert len(payload["lists"]) == 3
