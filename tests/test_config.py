"""
Tests for unitychangeset.config.loader module.

Tests configuration loading including:
- Built-in defaults
- Deep merging of a YAML file over the defaults
- Error handling for missing, malformed and invalid files
- Pattern table selection
"""

from __future__ import annotations

from pathlib import Path

import pytest

from unitychangeset.config import DEFAULTS, Config, HttpSettings, load_config
from unitychangeset.config.loader import _deep_merge_dicts
from unitychangeset.exceptions import ConfigError
from unitychangeset.io.fetch import DEFAULT_USER_AGENT
from unitychangeset.registry import VersionRegistry


class TestDefaults:
    """Tests for loading without a file."""

    def test_no_path_returns_defaults(self):
        cfg = load_config()

        assert cfg == Config()
        assert cfg.http.timeout == 10.0
        assert cfg.http.deadline == 10.0
        assert cfg.http.retries == 3
        assert cfg.http.user_agent == DEFAULT_USER_AGENT
        assert cfg.patterns == "unity-web"
        assert cfg.source is None


class TestDeepMerge:
    """Tests for _deep_merge_dicts."""

    def test_nested_dicts_merge(self):
        base = {"http": {"timeout": 10, "retries": 3}, "patterns": "a"}
        overlay = {"http": {"timeout": 5}}

        merged = _deep_merge_dicts(base, overlay)

        assert merged == {"http": {"timeout": 5, "retries": 3}, "patterns": "a"}

    def test_lists_replaced(self):
        assert _deep_merge_dicts({"x": [1, 2]}, {"x": [3]}) == {"x": [3]}

    def test_inputs_not_mutated(self):
        base = {"http": {"timeout": 10}}
        _deep_merge_dicts(base, {"http": {"timeout": 1}})
        assert base == {"http": {"timeout": 10}}


class TestLoadFile:
    """Tests for loading a YAML file."""

    def test_file_overrides_defaults(self, create_yaml_file):
        path = create_yaml_file("uvc.yaml", {"http": {"timeout": 5, "retries": 0}})

        cfg = load_config(path)

        assert cfg.http.timeout == 5.0
        assert isinstance(cfg.http.timeout, float)
        assert cfg.http.retries == 0
        assert cfg.http.deadline == DEFAULTS["http"]["deadline"]
        assert cfg.source == path.resolve()

    def test_pattern_table_name(self, create_yaml_file):
        path = create_yaml_file("uvc.yaml", {"patterns": "unity-web"})
        assert load_config(path).patterns == "unity-web"

    def test_unknown_keys_ignored(self, create_yaml_file):
        path = create_yaml_file("uvc.yaml", {"extra": {"anything": True}})
        assert load_config(path).http == HttpSettings()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("http: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Error parsing YAML") as exc_info:
            load_config(path)
        assert exc_info.value.__cause__ is not None

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ConfigError, match="empty"):
            load_config(path)

    def test_top_level_must_be_mapping(self, create_yaml_file):
        path = create_yaml_file("list.yaml", ["http", "timeout"])

        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)


class TestValidation:
    """Tests for value validation."""

    @pytest.mark.parametrize(
        "http",
        [
            {"timeout": "fast"},
            {"timeout": True},
            {"deadline": -1},
            {"retries": 1.5},
            {"backoff_factor": None},
            {"user_agent": ""},
            {"user_agent": 42},
        ],
    )
    def test_invalid_http_values(self, create_yaml_file, http):
        path = create_yaml_file("uvc.yaml", {"http": http})

        with pytest.raises(ConfigError):
            load_config(path)

    def test_http_must_be_mapping(self, create_yaml_file):
        path = create_yaml_file("uvc.yaml", {"http": "fast"})

        with pytest.raises(ConfigError, match="'http' must be a mapping"):
            load_config(path)

    def test_patterns_must_be_string(self, create_yaml_file):
        path = create_yaml_file("uvc.yaml", {"patterns": ["unity-web"]})

        with pytest.raises(ConfigError):
            load_config(path)

    def test_unknown_pattern_table_rejected_by_registry(self, create_yaml_file):
        path = create_yaml_file("uvc.yaml", {"patterns": "unity-web-2031"})
        cfg = load_config(path)

        with pytest.raises(ConfigError, match="Unknown pattern table"):
            VersionRegistry(config=cfg)
