"""
unitychangeset - Unity editor release lookup

A Python library and CLI that scrapes Unity's public release pages, since
no structured API exists, and caches what it finds for the lifetime of the
process.

unitychangeset provides:
  - Enumeration of all release, beta and alpha editor versions
  - Lookup of a single version with its release date
  - The build changeset of a version
  - Installable modules of a version for Windows, Linux or macOS

Quick Start
-----------
List beta versions:

    $ uvc versions --channel beta

Get the changeset of a version:

    $ uvc changeset 2022.2.0b9

For full CLI documentation:

    $ uvc --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
registry : module
    VersionRegistry, the caching orchestrator.
versioning : package
    UnityVersion parsing and ordering.
scraping : package
    Pattern tables and the listing/changeset/module extractors.
io : package
    Page fetching transport.
config : package
    YAML configuration loading.

Public API
----------
    from unitychangeset import VersionRegistry, UnityVersion, Platform

    registry = VersionRegistry()
    result = registry.get_modules("2022.1.0", Platform.OSX)
    if result.ok:
        print([m.id for m in result.value])

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Unity editor versions, changesets and modules from the release pages"

# Re-export commonly used names for convenience
from unitychangeset.exceptions import (
    ConfigError,
    UnityChangesetError,
    VersionFormatError,
    VersionRangeError,
)
from unitychangeset.models import BuildData, ModuleData, Platform
from unitychangeset.registry import (
    VersionRegistry,
    get_default_registry,
    set_default_registry,
)
from unitychangeset.results import RequestResult, ResultStatus
from unitychangeset.versioning import Channel, UnityVersion

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "BuildData",
    "Channel",
    "ConfigError",
    "ModuleData",
    "Platform",
    "RequestResult",
    "ResultStatus",
    "UnityChangesetError",
    "UnityVersion",
    "VersionFormatError",
    "VersionRangeError",
    "VersionRegistry",
    "get_default_registry",
    "set_default_registry",
]
