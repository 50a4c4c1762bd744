"""Built-in pattern table for the unity.com release pages.

Registered as ``unity-web`` when the module is imported. The layout it
expects:

- Release archive (https://unity.com/releases/editor/archive): each
  release has ``<div class="release-title">Unity 2022.1.0</div>`` and
  ``<div class="release-date">May 9, 2022</div>``.
- Alpha/beta lists: table cells ``<td headers="view-title-table-column">``
  with the version (``2023.1.0a5`` or ``2023.1.0 Alpha 5``) and
  ``<td headers="view-release-date-table-column">`` wrapping a ``<time>``.
- Detail pages (``{channel base}/{version}``):
  ``<div class="changeset"><div>Changeset:</div><div>abc123</div></div>``.
- Manifests: https://download.unity3d.com/download_unity/{changeset}/unity-{win|linux|osx}.ini
"""

from __future__ import annotations

import re

from unitychangeset.exceptions import VersionFormatError
from unitychangeset.versioning import Channel

from .base import (
    ChangesetPatterns,
    ListingPatterns,
    ModulePatterns,
    PatternTable,
    register_pattern_table,
)

RELEASE_ARCHIVE_URL = "https://unity.com/releases/editor/archive"
RELEASE_URL = "https://unity.com/releases/editor/whats-new"
ALPHA_URL = "https://unity.com/releases/editor/alpha"
BETA_URL = "https://unity.com/releases/editor/beta"
MANIFEST_BASE_URL = "https://download.unity3d.com/download_unity"

_SPELLED_PRERELEASE = re.compile(
    r"^(\d+\.\d+\.\d+)\s+(alpha|beta)\s+(\d+)$", re.IGNORECASE
)


def release_title(title: str) -> str:
    """Take the version from an archive title: "Unity 2022.1.0" -> "2022.1.0"."""
    tokens = title.split()
    if len(tokens) < 2:
        raise VersionFormatError(f"Release title has no version: {title!r}")
    return tokens[1]


def prerelease_title(title: str) -> str:
    """Normalize an alpha/beta title: "2023.1.0 Beta 5" -> "2023.1.0b5".

    Titles already in canonical form are returned unchanged.
    """
    match = _SPELLED_PRERELEASE.match(title.strip())
    if not match:
        return title.strip()
    core, kind, revision = match.groups()
    return f"{core}{kind[0].lower()}{revision}"


_TITLE_CELL = r'<td headers="view-title-table-column"[^>]*>(.*?)</td>'
_DATE_CELL = r'<td headers="view-release-date-table-column"[^>]*>(.*?)</td>'

UNITY_WEB = PatternTable(
    listings={
        Channel.ALPHA: ListingPatterns(
            url=ALPHA_URL,
            title_pattern=_TITLE_CELL,
            date_pattern=_DATE_CELL,
            title_transform=prerelease_title,
        ),
        Channel.BETA: ListingPatterns(
            url=BETA_URL,
            title_pattern=_TITLE_CELL,
            date_pattern=_DATE_CELL,
            title_transform=prerelease_title,
        ),
        Channel.RELEASE: ListingPatterns(
            url=RELEASE_ARCHIVE_URL,
            title_pattern=r'<div class="release-title">(.*?)</div>',
            date_pattern=r'<div class="release-date">(.*?)</div>',
            title_transform=release_title,
        ),
    },
    changeset=ChangesetPatterns(
        urls={
            Channel.ALPHA: ALPHA_URL,
            Channel.BETA: BETA_URL,
            Channel.RELEASE: RELEASE_URL,
        },
        pattern=r'<div class="changeset">\s*<div>.*?</div>\s*<div>(.*?)\s*</div>',
    ),
    modules=ModulePatterns(
        base_url=MANIFEST_BASE_URL,
        installer_keys=(
            "TargetSupportInstaller",
            "LinuxEditorTargetInstaller",
            "MacEditorTargetInstaller",
        ),
    ),
    description="unity.com release pages and download.unity3d.com manifests",
)

# Register this table when the module is imported
register_pattern_table("unity-web", UNITY_WEB)
