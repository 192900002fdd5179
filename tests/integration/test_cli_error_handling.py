"""CLI error-handling tests for concise diagnostics."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from watchlater.cli import app


def _invoke(storage_dir: Path, *args: str):
    return CliRunner().invoke(app, ["--storage-dir", str(storage_dir), *args])


def test_missing_config_file_is_reported() -> None:
    """A missing `--config` path should fail during the `config` operation."""

    result = CliRunner().invoke(app, ["--config", "missing-watchlater.yaml", "show"])

    assert result.exit_code == 1
    assert "watchlater failed during `config`" in result.output
    assert "Config file not found: `missing-watchlater.yaml`." in result.output


def test_invalid_config_payload_is_reported(tmp_path: Path) -> None:
    """Unsupported YAML keys should fail fast with a hint."""

    config_path = tmp_path / "invalid.yaml"
    config_path.write_text("theme: dark\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["--config", str(config_path), "show"])

    assert result.exit_code == 1
    assert "unsupported key(s): theme" in result.output
    assert "Hint: Fix config schema/values and rerun." in result.output


def test_invalid_environment_is_reported(
    monkeypatch: pytest.MonkeyPatch, storage_dir: Path
) -> None:
    """Invalid `WATCHLATER_*` values should fail during configuration."""

    monkeypatch.setenv("WATCHLATER_MAX_TITLE_LENGTH", "zero")

    result = _invoke(storage_dir, "show")

    assert result.exit_code == 1
    assert "Invalid environment configuration" in result.output


def test_config_file_supplies_default_lists(tmp_path: Path) -> None:
    """YAML `default_lists` should seed a fresh store."""

    config_path = tmp_path / "watchlater.yaml"
    config_path.write_text(
        f"storage_dir: {tmp_path / 'store'}\ndefault_lists:\n  - {{id: queue, name: Queue}}\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, ["--config", str(config_path), "show", "--lists-only"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "Queue [queue] (0 items)"


def test_show_unknown_list_fails(storage_dir: Path) -> None:
    """`show --list` with an unknown id should fail with a hint."""

    result = _invoke(storage_dir, "show", "--list", "ghost")

    assert result.exit_code == 1
    assert "show failed during `show`: Unknown list id `ghost`." in result.output


def test_add_to_unknown_list_fails(storage_dir: Path) -> None:
    """`add` into a missing list should fail without writing an item."""

    result = _invoke(storage_dir, "add", "ghost", "Title")

    assert result.exit_code == 1
    assert "add failed during `add_item`: Could not save title into list `ghost`." in result.output


def test_create_list_with_blank_name_fails(storage_dir: Path) -> None:
    """`create-list` should reject names that are blank after cleaning."""

    result = _invoke(storage_dir, "create-list", "   ")

    assert result.exit_code == 1
    assert "create-list failed during `create_list`: List name is empty." in result.output


def test_delete_unknown_list_fails(storage_dir: Path) -> None:
    """`delete-list` should map the not-found outcome to a diagnostic."""

    result = _invoke(storage_dir, "delete-list", "ghost")

    assert result.exit_code == 1
    assert "delete-list failed during `delete_list`: Unknown list id." in result.output
    assert "Hint: Run `watchlater show --lists-only` to see list ids." in result.output


def test_delete_last_list_fails(storage_dir: Path, tmp_path: Path) -> None:
    """The last remaining list should never be deleted."""

    snapshot = tmp_path / "single.json"
    snapshot.write_text(json.dumps({"lists": [{"id": "solo", "name": "Solo"}]}), encoding="utf-8")
    _invoke(storage_dir, "import", str(snapshot))

    result = _invoke(storage_dir, "delete-list", "solo")

    assert result.exit_code == 1
    assert "Cannot delete the last list." in result.output


def test_import_rejects_unreadable_snapshot(storage_dir: Path, tmp_path: Path) -> None:
    """`import` should report invalid JSON snapshots."""

    snapshot = tmp_path / "broken.json"
    snapshot.write_text("{not json", encoding="utf-8")

    result = _invoke(storage_dir, "import", str(snapshot))

    assert result.exit_code == 1
    assert "import failed during `import`: Failed to read JSON snapshot" in result.output


def test_import_rejects_non_object_snapshot(storage_dir: Path, tmp_path: Path) -> None:
    """`import` should refuse snapshots that are not JSON objects."""

    snapshot = tmp_path / "list.json"
    snapshot.write_text("[1, 2]", encoding="utf-8")

    result = _invoke(storage_dir, "import", str(snapshot))

    assert result.exit_code == 1
    assert "could not be stored" in result.output


def test_corrupt_state_file_is_quarantined(storage_dir: Path) -> None:
    """An undecodable state file should be moved aside and the store re-seeded."""

    storage_dir.mkdir(parents=True)
    (storage_dir / "rw_lists_v3.json").write_text("{oops", encoding="utf-8")

    result = _invoke(storage_dir, "show", "--lists-only")

    assert result.exit_code == 0, result.output
    assert "Movies [movies] (0 items)" in result.output
    assert len(list(storage_dir.glob("rw_lists_v3.corrupt-*.json"))) == 1
