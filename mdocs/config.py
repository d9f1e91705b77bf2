"""Configuration loading for mdocs (.mdocs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import UsageError

CONFIG_FILENAME = ".mdocs.yml"


class ConfigError(UsageError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class InlineConfig:
    """Settings for `!INLINE` expansion."""

    comment_prefix: str = "// "
    default_extension: str = ".md"


@dataclass
class MenuConfig:
    """Settings for generated navigation menus."""

    link_suffix: str = "#readme"


@dataclass
class EditNoteConfig:
    """Settings for the generated-file banner."""

    repeat: int = 5


@dataclass
class MdocsConfig:
    """Represents the settings defined in .mdocs.yml."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    inline: InlineConfig = field(default_factory=InlineConfig)
    menu: MenuConfig = field(default_factory=MenuConfig)
    edit_note: EditNoteConfig = field(default_factory=EditNoteConfig)


def load_config(config_path: Path) -> MdocsConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return MdocsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = MdocsConfig(root=root)
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    inline_data = _as_dict(data.get("inline"))
    comment_prefix = _as_str(inline_data.get("comment_prefix"))
    if comment_prefix is not None:
        config.inline.comment_prefix = comment_prefix
    default_extension = _as_str(inline_data.get("default_extension"))
    if default_extension:
        if not default_extension.startswith("."):
            default_extension = f".{default_extension}"
        config.inline.default_extension = default_extension

    menu_data = _as_dict(data.get("menu"))
    link_suffix = _as_str(menu_data.get("link_suffix"))
    if link_suffix is not None:
        config.menu.link_suffix = link_suffix

    note_data = _as_dict(data.get("edit_note"))
    repeat = _as_int(note_data.get("repeat"))
    if repeat is not None:
        if repeat < 1:
            raise ConfigError("edit_note.repeat must be a positive integer")
        config.edit_note.repeat = repeat

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
