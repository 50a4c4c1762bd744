"""
Tests for unitychangeset.models module.
"""

from __future__ import annotations

from datetime import date

import pytest

from unitychangeset.exceptions import ConfigError
from unitychangeset.models import BuildData, ModuleData, Platform
from unitychangeset.versioning import UnityVersion


class TestPlatform:
    """Tests for Platform lookup."""

    @pytest.mark.parametrize(
        "key,platform",
        [
            ("win", Platform.WINDOWS),
            ("linux", Platform.LINUX),
            ("osx", Platform.OSX),
            (" OSX ", Platform.OSX),
        ],
    )
    def test_from_string(self, key, platform):
        assert Platform.from_string(key) is platform

    @pytest.mark.parametrize(
        "key,suggestion",
        [("windows", "win"), ("win64", "win"), ("mac", "osx"), ("darwin", "osx")],
    )
    def test_alias_suggestion(self, key, suggestion):
        with pytest.raises(ConfigError, match=f'Maybe you meant "{suggestion}"'):
            Platform.from_string(key)

    def test_unknown_lists_available(self):
        with pytest.raises(ConfigError, match="Available: win, linux, osx"):
            Platform.from_string("beos")

    def test_code(self):
        assert [p.code for p in Platform] == ["win", "linux", "osx"]


class TestModuleData:
    """Tests for ModuleData.from_header."""

    def test_from_header(self):
        assert ModuleData.from_header("[Mac-Mono]") == ModuleData("mac-mono", "Mac Mono")

    def test_from_header_without_dash(self):
        assert ModuleData.from_header(" [WebGL] ") == ModuleData("webgl", "WebGL")


class TestBuildData:
    """Tests for BuildData defaults."""

    def test_defaults(self):
        build = BuildData(UnityVersion(2022, 1, 0), date(2022, 5, 9))
        assert build.changeset is None
        assert build.modules == {}

    def test_modules_not_shared(self):
        a = BuildData(UnityVersion(2022, 1, 0), date(2022, 5, 9))
        b = BuildData(UnityVersion(2022, 1, 1), date(2022, 5, 20))
        a.modules[Platform.OSX] = ()
        assert b.modules == {}
