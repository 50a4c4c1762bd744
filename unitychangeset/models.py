# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Domain records for unitychangeset.

BuildData is the one mutable type in the project: the VersionRegistry fills
its changeset and modules fields lazily, under the registry lock. All other
types here are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from unitychangeset.exceptions import ConfigError
from unitychangeset.versioning import UnityVersion

_PLATFORM_ALIASES: dict[str, str] = {
    "windows": "win",
    "win32": "win",
    "win64": "win",
    "mac": "osx",
    "macos": "osx",
    "darwin": "osx",
}


class Platform(Enum):
    """Operating system the editor runs on; value is the manifest code."""

    WINDOWS = "win"
    LINUX = "linux"
    OSX = "osx"

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, key: str) -> Platform:
        """Look up a platform by its manifest code ("win", "linux", "osx").

        Raises:
            ConfigError: If the key is unknown. Common aliases such as
                "windows" or "macos" get a suggestion in the message.
        """
        normalized = (key or "").strip().lower()
        for platform in cls:
            if platform.value == normalized:
                return platform

        message = f'There is no platform with key "{key}".'
        suggestion = _PLATFORM_ALIASES.get(normalized)
        if suggestion:
            message += f' Maybe you meant "{suggestion}"?'
        else:
            available = ", ".join(p.value for p in cls)
            message += f" Available: {available}"
        raise ConfigError(message)


@dataclass(frozen=True)
class ModuleData:
    """Installable optional component of an editor build.

    Attributes:
        id: Lower-case machine key (e.g., "mac-mono").
        name: Human-readable name (e.g., "Mac Mono").
    """

    id: str
    name: str

    @classmethod
    def from_header(cls, header: str) -> ModuleData:
        """Build a module from a manifest section header like "[Mac-Mono]"."""
        title = header.strip().replace("[", "").replace("]", "")
        return cls(id=title.lower(), name=title.replace("-", " "))


@dataclass
class BuildData:
    """Release record for one editor version.

    Attributes:
        version: The editor version.
        release_date: Calendar date of the release.
        changeset: Build changeset; None until fetched.
        modules: Installable modules per platform; a platform is absent
            until its manifest has been fetched.
    """

    version: UnityVersion
    release_date: date
    changeset: str | None = None
    modules: dict[Platform, tuple[ModuleData, ...]] = field(default_factory=dict)
