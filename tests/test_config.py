"""Tests for configuration loading, discovery and environment overrides."""

from __future__ import annotations

import pytest
import tomlkit
from tomlkit.exceptions import ParseError

from jsonflow.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    _apply_env_overrides,
    _try_parse_env_value,
    default_config_document,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep JSONFLOW_* variables from the outer environment out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("JSONFLOW_"):
            monkeypatch.delenv(name)


class TestParseToml:
    """Tests for the tomlkit-backed parser."""

    def test_returns_plain_dicts(self):
        data = parse_toml('[layout]\nspacing = 100.0\n[drag]\noverlap_policy = "reject"\n')
        assert data == {"layout": {"spacing": 100.0}, "drag": {"overlap_policy": "reject"}}
        assert type(data["layout"]) is dict

    def test_invalid_toml(self):
        with pytest.raises(ParseError):
            parse_toml("[layout\n")


class TestMergeConfigs:
    def test_deep_merge(self):
        merged = merge_configs(DEFAULT_CONFIG, {"layout": {"spacing": 1.0}})
        assert merged["layout"]["spacing"] == 1.0
        assert merged["layout"]["row_height"] == 80.0
        assert merged["server"] == DEFAULT_CONFIG["server"]

    def test_base_is_not_modified(self):
        merge_configs(DEFAULT_CONFIG, {"format": {"indent": 8}})
        assert DEFAULT_CONFIG["format"]["indent"] == 2

    def test_new_sections_are_kept(self):
        assert merge_configs({}, {"extra": {"a": 1}}) == {"extra": {"a": 1}}


class TestDiscovery:
    """Tests for find_config_file and load_config."""

    def test_finds_file_in_parent(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("[format]\nindent = 4\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_nearest_file_wins(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("")
        inner = tmp_path / "inner"
        inner.mkdir()
        (inner / CONFIG_FILENAME).write_text("")
        assert find_config_file(inner) == (inner / CONFIG_FILENAME).resolve()

    def test_load_merges_over_defaults(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text('[drag]\noverlap_policy = "last-writer-wins"\n')
        config = load_config(path)
        assert config["drag"]["overlap_policy"] == "last-writer-wins"
        assert config["drag"]["missing_node_offset"] == 10.0
        assert config["layout"] == DEFAULT_CONFIG["layout"]

    def test_load_invalid_toml(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[layout\n")
        with pytest.raises(ValueError, match="Invalid TOML"):
            load_config(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_get_config_uses_discovery(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("[server]\nport = 9000\n")
        assert get_config(start_path=tmp_path)["server"]["port"] == 9000

    def test_explicit_path_skips_discovery(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("[server]\nport = 9000\n")
        other = tmp_path / "other.toml"
        other.write_text("[server]\nport = 9100\n")
        assert get_config(other, start_path=tmp_path)["server"]["port"] == 9100

    def test_get_config_returns_a_copy_of_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr("jsonflow.config.find_config_file", lambda start=None: None)
        config = get_config(start_path=tmp_path)
        config["layout"]["spacing"] = 1
        assert DEFAULT_CONFIG["layout"]["spacing"] == 250.0


class TestEnvOverrides:
    """Tests for JSONFLOW_<SECTION>_<KEY> variables."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("true", True),
            ("FALSE", False),
            ("42", 42),
            ("2.5", 2.5),
            ("last-writer-wins", "last-writer-wins"),
            ("[1, 2]", [1, 2]),
            ('{"a": 1}', {"a": 1}),
            ("[not json", "[not json"),
        ],
    )
    def test_try_parse_env_value(self, raw, expected):
        assert _try_parse_env_value(raw) == expected

    def test_override_applies_to_section_key(self, monkeypatch):
        monkeypatch.setenv("JSONFLOW_DRAG_OVERLAP_POLICY", "last-writer-wins")
        monkeypatch.setenv("JSONFLOW_LAYOUT_SPACING", "300")
        config = _apply_env_overrides(merge_configs(DEFAULT_CONFIG, {}))
        assert config["drag"]["overlap_policy"] == "last-writer-wins"
        assert config["layout"]["spacing"] == 300

    def test_variables_without_key_are_ignored(self, monkeypatch):
        monkeypatch.setenv("JSONFLOW_LAYOUT", "x")
        config = _apply_env_overrides({})
        assert config == {}

    def test_env_wins_over_file(self, tmp_path, monkeypatch):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[server]\nport = 9000\n")
        monkeypatch.setenv("JSONFLOW_SERVER_PORT", "9200")
        assert get_config(path)["server"]["port"] == 9200


class TestDefaultDocument:
    """Tests for the document written by `jsonflow init`."""

    def test_round_trips_to_defaults(self):
        text = tomlkit.dumps(default_config_document())
        assert parse_toml(text) == DEFAULT_CONFIG

    def test_has_comments(self):
        text = tomlkit.dumps(default_config_document())
        assert text.startswith("# jsonflow configuration")
        assert "last-writer-wins" in text
