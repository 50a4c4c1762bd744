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

"""Exception hierarchy for unitychangeset.

Exceptions are reserved for caller mistakes: malformed version strings,
unknown platforms, broken configuration files. Network failures and upstream
markup changes are NOT raised; they come back as a status inside a
RequestResult (see unitychangeset.results).

- ConfigError: Configuration-related errors (YAML parse, unknown pattern
  table, unknown platform key)
- VersionFormatError: Version text that cannot be parsed
- VersionRangeError: Version text with out-of-range numbers

All exceptions inherit from UnityChangesetError, allowing users to catch all
library errors with a single except clause if needed. The two version
errors also inherit from ValueError.

Example:
    Catching malformed input:
        ```python
        from unitychangeset.exceptions import VersionFormatError
        from unitychangeset.versioning import UnityVersion

        try:
            UnityVersion.parse("2022.1")
        except VersionFormatError as e:
            print(f"Bad version: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "UnityChangesetError",
    "ConfigError",
    "VersionFormatError",
    "VersionRangeError",
]


class UnityChangesetError(Exception):
    """Base exception for all unitychangeset errors."""

    pass


class ConfigError(UnityChangesetError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Missing configuration files
    - Unknown pattern table names
    - Unknown platform keys
    """

    pass


class VersionFormatError(UnityChangesetError, ValueError):
    """Raised when version text does not have the expected shape.

    Example:
        ```python
        UnityVersion.parse("abc")  # raises VersionFormatError
        ```
    """

    pass


class VersionRangeError(UnityChangesetError, ValueError):
    """Raised when a version component is outside its allowed range.

    Negative numbers and a zero revision are rejected.
    """

    pass
