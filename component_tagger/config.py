"""Configuration loading for the component tagger (.component-tagger.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

CONFIG_FILENAME = ".component-tagger.yml"

DEFAULT_ROOT_MARKER = "src/"
DEFAULT_ATTRIBUTE_NAME = "__file-path"

_ALIASES = {
    "rootMarker": "root_marker",
    "attributeName": "attribute_name",
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class TaggerConfig:
    """Options recognised by the tagger.

    ``enabled`` is expected to be switched off for production builds by the
    host; the tagger itself only honours the flag.
    """

    root_marker: str = DEFAULT_ROOT_MARKER
    attribute_name: str = DEFAULT_ATTRIBUTE_NAME
    enabled: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TaggerConfig":
        """Build a config from a plain mapping, accepting camelCase keys."""
        normalised: Dict[str, Any] = {}
        for key, value in data.items():
            normalised[_ALIASES.get(key, key)] = value

        config = cls()
        root_marker = _as_str(normalised.get("root_marker"))
        if root_marker is not None:
            config.root_marker = root_marker
        if "attribute_name" in normalised:
            attribute_name = _as_str(normalised.get("attribute_name"))
            if not attribute_name or not attribute_name.strip():
                raise ConfigError("attribute_name must be a non-empty string")
            config.attribute_name = attribute_name.strip()
        enabled = _as_bool(normalised.get("enabled"))
        if enabled is not None:
            config.enabled = enabled
        return config


def load_config(config_path: Path) -> TaggerConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return TaggerConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    section = data.get("tagger", data)
    if not isinstance(section, dict):
        raise ConfigError("The 'tagger' section must be a mapping")
    return TaggerConfig.from_mapping(section)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_ATTRIBUTE_NAME",
    "DEFAULT_ROOT_MARKER",
    "TaggerConfig",
    "load_config",
]
