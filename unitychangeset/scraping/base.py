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

"""Pattern tables and their registry for unitychangeset.

The scrapers are driven entirely by declarative pattern tables: URLs,
regular expressions and title transforms. When the upstream site changes
its markup, a new table is registered under a new name and selected from
configuration; the extraction and orchestration code stays untouched.

- PatternTable: bundle of one ListingPatterns per channel, one
  ChangesetPatterns and one ModulePatterns
- Table registry: global dict mapping table names to tables
- Registration and lookup functions: register_pattern_table() and
  get_pattern_table()

Design Philosophy:
    - Tables are frozen dataclasses (data, not behaviour)
    - Registration happens at module import time (tables self-register)
    - Registry is a simple dict (no complex dependency injection needed)

Example:
    Registering a table for a redesigned site:
        ```python
        from dataclasses import replace
        from unitychangeset.scraping.base import (
            get_pattern_table,
            register_pattern_table,
        )

        current = get_pattern_table("unity-web")
        register_pattern_table(
            "unity-web-next",
            replace(current, changeset=replace(current.changeset, pattern=r"..."))
        )
        ```
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date
import re

from bs4 import BeautifulSoup

from unitychangeset.exceptions import ConfigError
from unitychangeset.versioning import Channel

# -------------------------------
# Pattern tables
# -------------------------------


def _identity(title: str) -> str:
    return title


@dataclass(frozen=True)
class ListingPatterns:
    """How to scrape one channel's release listing page.

    Attributes:
        url: Listing page URL.
        title_pattern: Regex with one capture group around each version title.
        date_pattern: Regex with one capture group around each release date.
        title_transform: Turns a cleaned title into canonical version text.
    """

    url: str
    title_pattern: str
    date_pattern: str
    title_transform: Callable[[str], str] = _identity


@dataclass(frozen=True)
class ChangesetPatterns:
    """How to scrape a changeset from a version's detail page.

    Attributes:
        urls: Detail page base URL per channel; the version text is appended.
        pattern: Regex with one capture group around the changeset.
    """

    urls: Mapping[Channel, str]
    pattern: str


@dataclass(frozen=True)
class ModulePatterns:
    """Where manifests live and which lines mark an installable module.

    Attributes:
        base_url: Manifest base; the URL is {base_url}/{changeset}/unity-{code}.ini.
        installer_keys: Substrings that mark a module's installer line.
    """

    base_url: str
    installer_keys: tuple[str, ...]


@dataclass(frozen=True)
class PatternTable:
    """Complete set of extraction patterns for one upstream site layout.

    Attributes:
        listings: Listing patterns per channel, in fetch order.
        changeset: Detail page patterns.
        modules: Manifest patterns.
    """

    listings: Mapping[Channel, ListingPatterns]
    changeset: ChangesetPatterns
    modules: ModulePatterns
    description: str = field(default="", compare=False)


# -------------------------------
# Text helpers
# -------------------------------

_WHITESPACE = re.compile(r"\s+")

_MONTHS: dict[str, int] = {
    name: number
    for number, name in enumerate(
        (
            "january",
            "february",
            "march",
            "april",
            "may",
            "june",
            "july",
            "august",
            "september",
            "october",
            "november",
            "december",
        ),
        start=1,
    )
}

# "MMMM dd, yyyy" and "MMMM d, yyyy" (English month names only)
_DATE_FORMATS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^([A-Za-z]+) (\d{2}), (\d{4})$"),
    re.compile(r"^([A-Za-z]+) (\d{1}), (\d{4})$"),
)


def fragment_text(fragment: str) -> str:
    """Reduce a matched HTML fragment to plain text.

    Inner tags are dropped, entities decoded and whitespace collapsed,
    e.g. '<time datetime="...">March 1, 2023</time>' -> "March 1, 2023".
    """
    text = BeautifulSoup(fragment, "html.parser").get_text(" ")
    return _WHITESPACE.sub(" ", text).strip()


def parse_release_date(text: str) -> date:
    """Parse an English release date such as "March 01, 2023" or "March 1, 2023".

    The zero-padded form is tried first, then the unpadded one.

    Raises:
        ValueError: If the text matches neither form or is not a real date.
    """
    for form in _DATE_FORMATS:
        match = form.match(text.strip())
        if not match:
            continue
        month = _MONTHS.get(match.group(1).lower())
        if month is None:
            raise ValueError(f"Unknown month name in {text!r}")
        return date(int(match.group(3)), month, int(match.group(2)))
    raise ValueError(f"Unrecognised release date: {text!r}")


# -------------------------------
# Table Registry
# -------------------------------

_TABLE_REGISTRY: dict[str, PatternTable] = {}


def register_pattern_table(name: str, table: PatternTable) -> None:
    """Register a pattern table by name in the global registry.

    Registering the same name twice overwrites the previous table (allows
    monkey-patching for tests).

    Args:
        name: Table name as used in the ``patterns`` configuration key.
        table: The pattern table.
    """
    _TABLE_REGISTRY[name] = table


def get_pattern_table(name: str) -> PatternTable:
    """Get a registered pattern table by name.

    Raises:
        ConfigError: If the name is not registered. The message lists the
            available tables.
    """
    if name not in _TABLE_REGISTRY:
        available = ", ".join(_TABLE_REGISTRY.keys())
        raise ConfigError(
            f"Unknown pattern table: {name!r}. Available: {available or '(none)'}"
        )
    return _TABLE_REGISTRY[name]
