"""
Pytest configuration and shared fixtures for unitychangeset tests.

This module provides a mocked unity.com site (see samples.py for the
pages it serves) and helpers used across the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import requests_mock
import yaml

from samples import (
    ALPHA_HTML,
    BETA_HTML,
    CHANGESETS,
    DETAIL_URLS,
    OSX_MANIFEST,
    RELEASE_ARCHIVE_HTML,
    WIN_MANIFEST,
    changeset_page,
    manifest_url_for,
)
from unitychangeset.logging import SilentLogger, set_global_logger
from unitychangeset.registry import set_default_registry
from unitychangeset.scraping.unity_web import ALPHA_URL, BETA_URL, RELEASE_ARCHIVE_URL


@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset global logger and default registry around every test."""
    set_global_logger(SilentLogger())
    set_default_registry(None)
    yield
    set_global_logger(SilentLogger())
    set_default_registry(None)


@pytest.fixture
def unity_site():
    """
    Mock the unity.com pages and download manifests.

    Yields a dict of requests_mock matchers keyed by route name:
    "release", "alpha", "beta", "detail:<version>" and
    "manifest:<version>:<code>". Matchers expose call_count.
    """
    with requests_mock.Mocker() as m:
        routes: dict[str, Any] = {
            "release": m.get(RELEASE_ARCHIVE_URL, text=RELEASE_ARCHIVE_HTML),
            "alpha": m.get(ALPHA_URL, text=ALPHA_HTML),
            "beta": m.get(BETA_URL, text=BETA_HTML),
        }
        for version, url in DETAIL_URLS.items():
            routes[f"detail:{version}"] = m.get(
                url, text=changeset_page(CHANGESETS[version])
            )
        routes["manifest:2022.1.0:osx"] = m.get(
            manifest_url_for("2022.1.0", "osx"), text=OSX_MANIFEST
        )
        routes["manifest:2022.1.0:win"] = m.get(
            manifest_url_for("2022.1.0", "win"), text=WIN_MANIFEST
        )
        routes["manifest:2022.1.0:linux"] = m.get(
            manifest_url_for("2022.1.0", "linux"), status_code=404
        )
        routes["mocker"] = m
        yield routes


@pytest.fixture
def create_yaml_file(tmp_path: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("uvc.yaml", {"http": {"timeout": 5}})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
