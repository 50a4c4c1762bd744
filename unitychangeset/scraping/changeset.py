"""Changeset extraction for unitychangeset.

Each version has a detail page under its channel's base URL. The page
carries the changeset in a single capture group of the table's pattern.
There is no retry here; NOT_FOUND, HTTP_ERROR and UNKNOWN_ERROR from the
fetch are returned as-is.
"""

from __future__ import annotations

import asyncio
import re

from unitychangeset.io import PageFetcher
from unitychangeset.logging import Logger, get_global_logger
from unitychangeset.results import RequestResult, ResultStatus
from unitychangeset.versioning import UnityVersion

from .base import ChangesetPatterns, fragment_text


def changeset_url(version: UnityVersion, patterns: ChangesetPatterns) -> str:
    """Detail page URL for a version, e.g. .../editor/beta/2022.2.0b9."""
    return f"{patterns.urls[version.channel]}/{version}"


def extract_changeset(
    page_text: str, patterns: ChangesetPatterns
) -> RequestResult[str]:
    """Pull the changeset out of a detail page.

    Returns:
        OK with the changeset, or REGEX_NO_VALUE with "" if the pattern
        does not match or captures nothing.
    """
    match = re.search(patterns.pattern, page_text, flags=re.DOTALL)
    if not match:
        return RequestResult(ResultStatus.REGEX_NO_VALUE, "")
    changeset = fragment_text(match.group(1))
    if not changeset:
        return RequestResult(ResultStatus.REGEX_NO_VALUE, "")
    return RequestResult(ResultStatus.OK, changeset)


async def fetch_changeset_async(
    fetcher: PageFetcher,
    version: UnityVersion,
    patterns: ChangesetPatterns,
    *,
    cancel: asyncio.Event | None = None,
    logger: Logger | None = None,
) -> RequestResult[str]:
    """Fetch a version's detail page and extract its changeset."""
    logger = logger or get_global_logger()
    url = changeset_url(version, patterns)

    page = await fetcher.fetch_async(url, cancel=cancel)
    if not page.ok:
        logger.verbose("SCRAPE", f"Detail page for {version}: {page.outcome.name}")
        return RequestResult(page.outcome.status, "")

    result = extract_changeset(page.body, patterns)
    if result.ok:
        logger.debug("SCRAPE", f"Changeset for {version}: {result.value}")
    else:
        logger.verbose("SCRAPE", f"No changeset found on {url}")
    return result
