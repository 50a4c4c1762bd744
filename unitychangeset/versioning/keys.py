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

"""Unity editor version identifiers.

This module is format-agnostic: it does NOT download anything. It only
parses, formats and orders version strings such as ``2020.3.34``,
``2022.2.0b9`` and ``2023.1.0a5``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
import re

from unitychangeset.exceptions import VersionFormatError, VersionRangeError

# ----------------------------
# Channel
# ----------------------------


class Channel(IntEnum):
    """Release channel of a version.

    The integer values are the comparison rank: for the same
    major.minor.patch, ALPHA < BETA < RELEASE.
    """

    ALPHA = 0
    BETA = 1
    RELEASE = 2

    @property
    def letter(self) -> str:
        """Letter used between patch and revision ("a", "b" or "f")."""
        return _CHANNEL_LETTERS[self]


_CHANNEL_LETTERS: dict[Channel, str] = {
    Channel.ALPHA: "a",
    Channel.BETA: "b",
    Channel.RELEASE: "f",
}
_LETTER_CHANNELS: dict[str, Channel] = {v: k for k, v in _CHANNEL_LETTERS.items()}

_INT_TEXT = re.compile(r"^-?\d+$")


def _parse_number(text: str, label: str) -> int:
    """Parse one numeric version component.

    Raises VersionFormatError for non-integers and VersionRangeError for
    negative values.
    """
    text = text.strip()
    if not _INT_TEXT.match(text):
        raise VersionFormatError(f"{label} part is not an integer: {text!r}")
    value = int(text)
    if value < 0:
        raise VersionRangeError(f"{label} part is less than zero: {value}")
    return value


# ----------------------------
# Version identifier
# ----------------------------


@dataclass(frozen=True, order=True)
class UnityVersion:
    """Immutable ``major.minor.patch[a|b revision]`` version.

    Field order defines the total order: major, minor, patch, channel
    rank, revision.

    Attributes:
        major: Major version (e.g., 2022).
        minor: Minor version.
        patch: Patch number.
        channel: Release channel.
        revision: Alpha/beta build number; always 1 for releases ("f2" folds to 1).

    Example:
        ```python
        v = UnityVersion.parse("2022.2.0b9")
        assert v.channel is Channel.BETA and v.revision == 9
        assert str(v) == "2022.2.0b9"
        ```
    """

    major: int
    minor: int
    patch: int
    channel: Channel = Channel.RELEASE
    revision: int = 1

    def __post_init__(self) -> None:
        for label in ("major", "minor", "patch"):
            if getattr(self, label) < 0:
                raise VersionRangeError(
                    f"{label.capitalize()} part is less than zero: {getattr(self, label)}"
                )
        if self.revision < 1:
            raise VersionRangeError(f"Revision must be positive: {self.revision}")
        # Accept plain ints so UnityVersion(1, 2, 3, 1) == UnityVersion(1, 2, 3, Channel.BETA)
        object.__setattr__(self, "channel", Channel(self.channel))
        # Releases always carry revision 1
        if self.channel is Channel.RELEASE:
            object.__setattr__(self, "revision", 1)

    @classmethod
    def parse(cls, text: str) -> UnityVersion:
        """Parse canonical version text.

        The third dot-separated segment may carry one channel letter
        (``a``, ``b`` or ``f``) followed by the revision. Without a letter
        the segment is the patch number and the version is a release with
        revision 1. Extra segments after the third are ignored.

        Args:
            text: Version text, e.g. "2021.3.5f1" or "2020.3.34".

        Returns:
            The parsed version.

        Raises:
            VersionFormatError: If the text is empty, has fewer than three
                segments, or a segment is not numeric where required.
            VersionRangeError: If a number is negative or the revision is 0.
        """
        if not text or not text.strip():
            raise VersionFormatError("Version can't be empty")

        parts = text.strip().split(".")
        if len(parts) < 3:
            raise VersionFormatError(
                f"Version must contain major, minor and patch parts: {text!r}"
            )

        major = _parse_number(parts[0], "Major")
        minor = _parse_number(parts[1], "Minor")

        patch_text = parts[2]
        letters = [letter for letter in _LETTER_CHANNELS if letter in patch_text]

        if not letters:
            if any(ch.isalpha() for ch in patch_text):
                raise VersionFormatError(
                    f"Patch part is wrong: {patch_text!r}. Expected letter values: a, b, f"
                )
            return cls(major, minor, _parse_number(patch_text, "Patch"))

        if len(letters) > 1:
            raise VersionFormatError(
                f"Patch part is wrong: {patch_text!r}. Expected exactly one of: a, b, f"
            )

        letter = letters[0]
        patch_str, _, revision_str = patch_text.partition(letter)
        patch = _parse_number(patch_str, "Patch")
        revision = _parse_number(revision_str, "Revision")
        if revision == 0:
            raise VersionRangeError(f"Revision must be positive: {text!r}")
        return cls(major, minor, patch, _LETTER_CHANNELS[letter], revision)

    def format(self) -> str:
        """Return the canonical text form (no suffix for releases)."""
        if self.channel is Channel.RELEASE:
            return f"{self.major}.{self.minor}.{self.patch}"
        return f"{self.major}.{self.minor}.{self.patch}{self.channel.letter}{self.revision}"

    def __str__(self) -> str:
        return self.format()

    def compare_to(self, other: UnityVersion) -> int:
        """Compare with another version.
        Returns -1 if self < other, 0 if equal, 1 if self > other.
        """
        if not isinstance(other, UnityVersion):
            raise TypeError(f"Object must be UnityVersion, got {type(other).__name__}")
        return (self > other) - (self < other)

    @property
    def version_tuple(self) -> tuple[int, int, int]:
        """The (major, minor, patch) triple without channel information."""
        return (self.major, self.minor, self.patch)


def coerce_version(version: UnityVersion | str) -> UnityVersion:
    """Accept a UnityVersion or its text form.

    Raises:
        TypeError: If version is neither a UnityVersion nor a string.
        VersionFormatError: If the text cannot be parsed.
        VersionRangeError: If a parsed number is out of range.
    """
    if isinstance(version, UnityVersion):
        return version
    if isinstance(version, str):
        return UnityVersion.parse(version)
    raise TypeError(
        f"version must be UnityVersion or str, got {type(version).__name__}"
    )
