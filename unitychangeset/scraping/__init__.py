"""
Scrapers for unitychangeset.

This package turns upstream pages into typed records. All URLs and
patterns come from declarative pattern tables, so the extraction code
does not change when the upstream markup does.

Available pattern tables:

- unity-web: unity.com release pages and download.unity3d.com manifests

Example:
    from unitychangeset.scraping import get_pattern_table

    table = get_pattern_table("unity-web")
    print(table.modules.base_url)

Note:
    Pattern tables self-register when their module is imported; importing
    this package registers the built-in tables.
"""

from .base import (
    ChangesetPatterns,
    ListingPatterns,
    ModulePatterns,
    PatternTable,
    get_pattern_table,
    register_pattern_table,
)

# Import tables so they register themselves
from . import unity_web  # noqa: F401

__all__ = [
    "ChangesetPatterns",
    "ListingPatterns",
    "ModulePatterns",
    "PatternTable",
    "get_pattern_table",
    "register_pattern_table",
]
