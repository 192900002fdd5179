"""Configuration model and loaders for watchlater.

Responsibilities:
- Define storage and normalization settings as a typed dataclass.
- Provide loader entry points for YAML- and environment-based configuration.

Key types:
- `WatchLaterConfig`: normalized settings for one core instance.
- `ConfigLoader`: static construction helpers for `WatchLaterConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import re
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string, parse_positive_int
from .state.normalization import (
    DEFAULT_LISTS,
    ITEM_ID_LENGTH,
    LIST_ID_LENGTH,
    DefaultList,
)
from .state.store import DEFAULT_STORAGE_KEY
from .text.titles import DEFAULT_MAX_TITLE_LENGTH


_DEFAULT_STORAGE_DIR = Path(".watchlater")
_DEFAULT_LOG_LEVEL = "WARNING"
_STORAGE_KEY_RE = re.compile(r"[A-Za-z0-9_.-]+")
_SUPPORTED_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})


@dataclass(slots=True)
class WatchLaterConfig:
    """Settings for one state core instance.

    Attributes:
        storage_dir: Directory holding the JSON state slot.
        storage_key: Key naming the state slot.
        max_title_length: Maximum stored title length in codepoints.
        default_lists: Lists seeded into an empty or list-less store.
        item_id_length: Length of generated item ids.
        list_id_length: Length of generated list ids.
        log_level: Minimum level for operation logs.
    """

    storage_dir: Path = _DEFAULT_STORAGE_DIR
    storage_key: str = DEFAULT_STORAGE_KEY
    max_title_length: int = DEFAULT_MAX_TITLE_LENGTH
    default_lists: tuple[DefaultList, ...] = DEFAULT_LISTS
    item_id_length: int = ITEM_ID_LENGTH
    list_id_length: int = LIST_ID_LENGTH
    log_level: str = _DEFAULT_LOG_LEVEL

    def validate(self) -> None:
        """Validate configuration values before building a core."""

        if not _STORAGE_KEY_RE.fullmatch(self.storage_key):
            raise ValueError(
                "`storage_key` must contain only letters, digits, `_`, `.` or `-`."
            )
        for field_name in ("max_title_length", "item_id_length", "list_id_length"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"`{field_name}` must be a positive integer.")
        if not self.default_lists:
            raise ValueError("`default_lists` must contain at least one list.")
        for default in self.default_lists:
            if not default.id.strip() or not default.name.strip():
                raise ValueError("`default_lists` entries need a non-empty `id` and `name`.")
        if self.log_level not in _SUPPORTED_LOG_LEVELS:
            supported = ", ".join(sorted(_SUPPORTED_LOG_LEVELS))
            raise ValueError(
                f"Unsupported `log_level` value `{self.log_level}`; supported: {supported}."
            )


class ConfigLoader:
    """Factory methods for creating `WatchLaterConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "storage_dir",
            "storage_key",
            "max_title_length",
            "default_lists",
            "item_id_length",
            "list_id_length",
            "log_level",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> WatchLaterConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> WatchLaterConfig:
        """Create a validated config from `WATCHLATER_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        storage_dir = normalize_optional_string(env_map.get("WATCHLATER_STORAGE_DIR"))
        storage_key = normalize_optional_string(env_map.get("WATCHLATER_STORAGE_KEY"))
        max_title_length = normalize_optional_string(env_map.get("WATCHLATER_MAX_TITLE_LENGTH"))
        log_level = normalize_optional_string(env_map.get("WATCHLATER_LOG_LEVEL"))

        config = WatchLaterConfig(
            storage_dir=Path(storage_dir) if storage_dir is not None else _DEFAULT_STORAGE_DIR,
            storage_key=storage_key or DEFAULT_STORAGE_KEY,
            max_title_length=(
                parse_positive_int(max_title_length, "WATCHLATER_MAX_TITLE_LENGTH")
                if max_title_length is not None
                else DEFAULT_MAX_TITLE_LENGTH
            ),
            log_level=log_level.upper() if log_level is not None else _DEFAULT_LOG_LEVEL,
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> WatchLaterConfig:
        """Build a validated config from a parsed mapping payload."""

        unknown_keys = sorted(
            str(key) for key in payload if key not in ConfigLoader._SUPPORTED_YAML_KEYS
        )
        if unknown_keys:
            raise ValueError(
                f"{source_label} contains unsupported key(s): {', '.join(unknown_keys)}."
            )

        storage_dir = normalize_optional_string(payload.get("storage_dir"))
        storage_key = normalize_optional_string(payload.get("storage_key"))
        log_level = normalize_optional_string(payload.get("log_level"))

        config = WatchLaterConfig(
            storage_dir=Path(storage_dir) if storage_dir is not None else _DEFAULT_STORAGE_DIR,
            storage_key=storage_key or DEFAULT_STORAGE_KEY,
            max_title_length=ConfigLoader._optional_positive_int(
                payload, "max_title_length", DEFAULT_MAX_TITLE_LENGTH
            ),
            default_lists=ConfigLoader._optional_default_lists(payload, source_label),
            item_id_length=ConfigLoader._optional_positive_int(
                payload, "item_id_length", ITEM_ID_LENGTH
            ),
            list_id_length=ConfigLoader._optional_positive_int(
                payload, "list_id_length", LIST_ID_LENGTH
            ),
            log_level=log_level.upper() if log_level is not None else _DEFAULT_LOG_LEVEL,
        )
        config.validate()
        return config

    @staticmethod
    def _optional_positive_int(payload: Mapping[str, Any], key: str, default: int) -> int:
        """Parse an optional positive integer field, falling back to `default`."""

        value = payload.get(key)
        if value is None:
            return default
        return parse_positive_int(value, key)

    @staticmethod
    def _optional_default_lists(
        payload: Mapping[str, Any], source_label: str
    ) -> tuple[DefaultList, ...]:
        """Parse `default_lists` as a sequence of `{id, name}` mappings."""

        value = payload.get("default_lists")
        if value is None:
            return DEFAULT_LISTS
        if not isinstance(value, list) or not value:
            raise ValueError(
                f"{source_label}: `default_lists` must be a non-empty list of `{{id, name}}` mappings."
            )
        parsed: list[DefaultList] = []
        for entry in value:
            if not isinstance(entry, Mapping):
                raise ValueError(
                    f"{source_label}: `default_lists` entries must be mappings with `id` and `name`."
                )
            list_id = normalize_optional_string(entry.get("id"))
            name = normalize_optional_string(entry.get("name"))
            if list_id is None or name is None:
                raise ValueError(
                    f"{source_label}: `default_lists` entries need a non-empty `id` and `name`."
                )
            parsed.append(DefaultList(id=list_id, name=name))
        return tuple(parsed)
