"""Tests for component_tagger.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from component_tagger.config import CONFIG_FILENAME, ConfigError, TaggerConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, TaggerConfig)
    assert config.root_marker == "src/"
    assert config.attribute_name == "__file-path"
    assert config.enabled is True


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(
        """
root_marker: "app/"
attribute_name: "data-file"
enabled: false
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.root_marker == "app/"
    assert config.attribute_name == "data-file"
    assert config.enabled is False


def test_load_config_accepts_nested_section_and_camel_case(tmp_path: Path) -> None:
    config_file = tmp_path / "tagger.yml"
    config_file.write_text(
        """
tagger:
  rootMarker: "web/"
  attributeName: "__source"
  enabled: "no"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.root_marker == "web/"
    assert config.attribute_name == "__source"
    assert config.enabled is False


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("\n", encoding="utf-8")

    assert load_config(tmp_path) == TaggerConfig()


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("- src/\n- lib/\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("root_marker: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_from_mapping_rejects_blank_attribute_name() -> None:
    with pytest.raises(ConfigError):
        TaggerConfig.from_mapping({"attribute_name": "  "})


def test_from_mapping_ignores_unrecognised_values() -> None:
    config = TaggerConfig.from_mapping({"enabled": "sometimes", "root_marker": None, "extra": 1})

    assert config == TaggerConfig()
