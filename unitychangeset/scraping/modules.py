"""Module-list extraction for unitychangeset.

Per-platform manifests are INI-like files, one section per component:

    [Mac-Mono]
    title=Mac Build Support (Mono)
    url=MacEditorTargetInstaller/UnitySetup-Mac-Mono-Support-for-Editor-2022.1.0f1.pkg

The manifest is scanned line by line rather than handed to configparser:
only the most recent ``[header]`` and whether a line mentions one of the
installer keys matter, and upstream files are not guaranteed to be valid
INI.
"""

from __future__ import annotations

import asyncio

from unitychangeset.io import PageFetcher
from unitychangeset.logging import Logger, get_global_logger
from unitychangeset.models import ModuleData, Platform
from unitychangeset.results import RequestResult, ResultStatus

from .base import ModulePatterns


def manifest_url(changeset: str, platform: Platform, patterns: ModulePatterns) -> str:
    """Manifest URL: {base}/{changeset}/unity-{win|linux|osx}.ini.

    Raises:
        ValueError: If changeset is empty.
    """
    if not changeset:
        raise ValueError("Changeset can't be empty")
    return f"{patterns.base_url}/{changeset}/unity-{platform.code}.ini"


def extract_modules(manifest_text: str, patterns: ModulePatterns) -> list[ModuleData]:
    """Scan a manifest for installable modules.

    A module is emitted for the current section header each time a line
    mentions one of the installer keys. Lines before the first header
    never produce a module.

    Example:
        "[Mac-Mono]\\nurl=MacEditorTargetInstaller/x.pkg" ->
        [ModuleData(id="mac-mono", name="Mac Mono")]
    """
    modules: list[ModuleData] = []
    header: str | None = None

    for raw_line in manifest_text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("[") and line.endswith("]"):
            header = line
            continue
        if header is None:
            continue
        if any(key in line for key in patterns.installer_keys):
            modules.append(ModuleData.from_header(header))

    return modules


async def fetch_modules_async(
    fetcher: PageFetcher,
    changeset: str,
    platform: Platform,
    patterns: ModulePatterns,
    *,
    cancel: asyncio.Event | None = None,
    logger: Logger | None = None,
) -> RequestResult[list[ModuleData]]:
    """Fetch a manifest and extract its modules.

    An empty but successful manifest yields OK with an empty list.
    """
    logger = logger or get_global_logger()
    url = manifest_url(changeset, platform, patterns)

    page = await fetcher.fetch_async(url, cancel=cancel)
    if not page.ok:
        logger.verbose("SCRAPE", f"Manifest {url}: {page.outcome.name}")
        return RequestResult(page.outcome.status, [])

    modules = extract_modules(page.body, patterns)
    logger.debug("SCRAPE", f"Found {len(modules)} module(s) in {url}")
    return RequestResult(ResultStatus.OK, modules)
