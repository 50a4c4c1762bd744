"""
Input/output operations for unitychangeset.

This package provides the page-fetching transport used by the scrapers.

Modules:

fetch : module
    Timed HTTP GET with retries, outcome classification and cancellation.

Public API:

HttpPageFetcher : class
    requests-based PageFetcher with blocking and async forms.
PageFetcher : Protocol
    Interface any transport must provide.
PageResponse : dataclass
    Body text plus FetchOutcome.
FetchOutcome : Enum
    OK, NOT_FOUND, TRANSPORT_ERROR or UNKNOWN_ERROR.
make_session : function
    requests.Session with retry/backoff defaults.

Example:
    from unitychangeset.io import HttpPageFetcher

    page = HttpPageFetcher(timeout=5).fetch("https://unity.com/releases/editor/beta")
    if page.ok:
        print(len(page.body))
"""

from .fetch import (
    FetchOutcome,
    HttpPageFetcher,
    PageFetcher,
    PageResponse,
    make_session,
)

__all__ = [
    "FetchOutcome",
    "HttpPageFetcher",
    "PageFetcher",
    "PageResponse",
    "make_session",
]
