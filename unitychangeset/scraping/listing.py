"""Release-list extraction for unitychangeset.

Turns one channel's listing page into BuildData records. Titles and dates
are matched independently and paired by position, so the page must yield
the same number of each. Any mismatch, or any entry whose version or date
cannot be parsed, fails the whole page with REGEX_NO_VALUE: a partial
channel would silently hide releases, and a shape change upstream needs a
new pattern table rather than a best-effort guess.

Example:
    From Python:

        from unitychangeset.scraping import get_pattern_table
        from unitychangeset.scraping.listing import extract_builds
        from unitychangeset.versioning import Channel

        table = get_pattern_table("unity-web").listings[Channel.RELEASE]
        result = extract_builds(html, table)
        if result.ok:
            for build in result.value:
                print(build.version, build.release_date)
"""

from __future__ import annotations

import asyncio
import re

from unitychangeset.io import PageFetcher
from unitychangeset.logging import Logger, get_global_logger
from unitychangeset.models import BuildData
from unitychangeset.results import RequestResult, ResultStatus
from unitychangeset.versioning import UnityVersion

from .base import ListingPatterns, fragment_text, parse_release_date


def extract_builds(
    page_text: str,
    patterns: ListingPatterns,
    logger: Logger | None = None,
) -> RequestResult[list[BuildData]]:
    """Extract (version, release date) records from a listing page.

    Args:
        page_text: Raw HTML of the listing page.
        patterns: Title/date patterns and title transform for the channel.
        logger: Logger for diagnostics. Defaults to the global logger.

    Returns:
        OK with one BuildData per entry (page order), or REGEX_NO_VALUE
        with an empty list if the page does not match the patterns.
    """
    logger = logger or get_global_logger()

    titles = re.findall(patterns.title_pattern, page_text, flags=re.DOTALL)
    dates = re.findall(patterns.date_pattern, page_text, flags=re.DOTALL)

    if not titles or not dates or len(titles) != len(dates):
        logger.verbose(
            "SCRAPE",
            f"Pattern mismatch on {patterns.url}: "
            f"{len(titles)} title(s), {len(dates)} date(s)",
        )
        return RequestResult(ResultStatus.REGEX_NO_VALUE, [])

    builds: list[BuildData] = []
    for raw_title, raw_date in zip(titles, dates):
        title = fragment_text(raw_title)
        date_text = fragment_text(raw_date)
        try:
            version = UnityVersion.parse(patterns.title_transform(title))
            release_date = parse_release_date(date_text)
        except ValueError as err:
            logger.verbose(
                "SCRAPE",
                f"Unparseable entry on {patterns.url} "
                f"(title={title!r}, date={date_text!r}): {err}",
            )
            return RequestResult(ResultStatus.REGEX_NO_VALUE, [])
        builds.append(BuildData(version=version, release_date=release_date))

    logger.debug("SCRAPE", f"Extracted {len(builds)} build(s) from {patterns.url}")
    return RequestResult(ResultStatus.OK, builds)


async def fetch_builds_async(
    fetcher: PageFetcher,
    patterns: ListingPatterns,
    *,
    cancel: asyncio.Event | None = None,
    logger: Logger | None = None,
) -> RequestResult[list[BuildData]]:
    """Fetch a listing page and extract its builds.

    A failed fetch is reported with its own status (NOT_FOUND, HTTP_ERROR
    or UNKNOWN_ERROR) and an empty list.
    """
    page = await fetcher.fetch_async(patterns.url, cancel=cancel)
    if not page.ok:
        return RequestResult(page.outcome.status, [])
    return extract_builds(page.body, patterns, logger=logger)
