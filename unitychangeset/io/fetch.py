"""
HTTP(S) page fetching for unitychangeset.

The scrapers never talk to requests directly; they go through a PageFetcher,
which performs a GET and classifies the outcome instead of raising. That
keeps transport policy (retries, timeouts, cancellation) in one place and
lets tests swap the transport out.

Key Features:

- **Retry Logic with Exponential Backoff** - Transient failures (429, 500, 502, 503, 504) are retried by urllib3.util.Retry before the outcome is classified.
- **Outcome Classification** - 200 -> OK, 404/401 -> NOT_FOUND, connection errors, timeouts and exhausted 429/5xx retries -> TRANSPORT_ERROR, anything else -> UNKNOWN_ERROR.
- **Deadlines and Cancellation** - fetch_async() gives every request a deadline (10 seconds by default) unless the caller passes an asyncio.Event, in which case setting the event abandons the request. Both end as TRANSPORT_ERROR.

Example:
Blocking fetch:

    >>> from unitychangeset.io import HttpPageFetcher
    >>> fetcher = HttpPageFetcher()
    >>> page = fetcher.fetch("https://unity.com/releases/editor/archive")
    >>> page.outcome
    <FetchOutcome.OK: 'ok'>

Cancellable fetch:

    >>> cancel = asyncio.Event()
    >>> page = await fetcher.fetch_async(url, cancel=cancel)

Notes:
- The blocking request runs on a thread pool owned by the fetcher, not the
  event loop's default executor, so asyncio.run() returns as soon as the
  deadline passes. An abandoned request finishes (or times out) in the
  background and its result is discarded.
- Timeouts passed to requests are per-request, not total.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from unitychangeset.logging import Logger, get_global_logger
from unitychangeset.results import ResultStatus

DEFAULT_TIMEOUT = 10.0
DEFAULT_DEADLINE = 10.0
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF_FACTOR = 0.5
DEFAULT_USER_AGENT = "unitychangeset/0.1.0"
DEFAULT_WORKERS = 4

_RETRY_STATUSES = (429, 500, 502, 503, 504)
_NOT_FOUND_STATUSES = (401, 404)


class FetchOutcome(Enum):
    """Classification of a single GET."""

    OK = "ok"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"
    UNKNOWN_ERROR = "unknown_error"

    @property
    def status(self) -> ResultStatus:
        """The ResultStatus reported to callers for this outcome."""
        return _OUTCOME_STATUS[self]


_OUTCOME_STATUS: dict[FetchOutcome, ResultStatus] = {
    FetchOutcome.OK: ResultStatus.OK,
    FetchOutcome.NOT_FOUND: ResultStatus.NOT_FOUND,
    FetchOutcome.TRANSPORT_ERROR: ResultStatus.HTTP_ERROR,
    FetchOutcome.UNKNOWN_ERROR: ResultStatus.UNKNOWN_ERROR,
}


@dataclass(frozen=True)
class PageResponse:
    """Body and outcome of a fetch. The body is "" unless outcome is OK."""

    body: str
    outcome: FetchOutcome

    @property
    def ok(self) -> bool:
        return self.outcome is FetchOutcome.OK


class PageFetcher(Protocol):
    """Capability the scrapers consume: fetch(url) -> (body, outcome)."""

    def fetch(self, url: str) -> PageResponse:
        ...

    async def fetch_async(
        self, url: str, cancel: asyncio.Event | None = None
    ) -> PageResponse:
        ...


def make_session(
    *,
    retries: int = DEFAULT_RETRIES,
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    user_agent: str = DEFAULT_USER_AGENT,
) -> requests.Session:
    """
    Create a requests.Session with retry/backoff defaults.

    - Retries on common transient status codes.
    - Applies exponential backoff.
    - Sets a helpful User-Agent to avoid being blocked.
    - raise_on_status=False hands the final 429/5xx response back to us
      for classification instead of raising.
    """
    s = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=_RETRY_STATUSES,
        allowed_methods=("GET", "HEAD"),
        raise_on_status=False,
    )
    s.headers.update({"User-Agent": user_agent})
    s.mount("http://", HTTPAdapter(max_retries=retry))
    s.mount("https://", HTTPAdapter(max_retries=retry))
    return s


class HttpPageFetcher:
    """PageFetcher backed by a requests.Session.

    Args:
        timeout: Per-request timeout passed to requests (seconds).
        deadline: Deadline for fetch_async() when no cancel event is given.
        retries: Retry count for transient statuses and connection errors.
        backoff_factor: urllib3 exponential backoff factor.
        user_agent: User-Agent header value.
        session: Pre-built session (overrides retries/backoff/user_agent).
        workers: Size of the thread pool fetch_async() runs requests on.
        logger: Logger for HTTP debug output. Defaults to the global logger.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        deadline: float = DEFAULT_DEADLINE,
        retries: int = DEFAULT_RETRIES,
        backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
        workers: int = DEFAULT_WORKERS,
        logger: Logger | None = None,
    ) -> None:
        self.timeout = timeout
        self.deadline = deadline
        self._session = session or make_session(
            retries=retries, backoff_factor=backoff_factor, user_agent=user_agent
        )
        self._logger = logger
        self._executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="uvc-fetch"
        )

    @property
    def logger(self) -> Logger:
        return self._logger or get_global_logger()

    def fetch(self, url: str) -> PageResponse:
        """GET url and classify the outcome. Never raises for HTTP failures."""
        self.logger.debug("HTTP", f"GET {url}")
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as err:
            self.logger.verbose("HTTP", f"Request failed for {url}: {err}")
            return PageResponse("", FetchOutcome.TRANSPORT_ERROR)

        code = response.status_code
        self.logger.debug("HTTP", f"{code} {url}")

        if code == 200:
            if response.encoding is None:
                response.encoding = "utf-8"
            return PageResponse(response.text, FetchOutcome.OK)
        if code in _NOT_FOUND_STATUSES:
            return PageResponse("", FetchOutcome.NOT_FOUND)
        if code in _RETRY_STATUSES:
            self.logger.verbose("HTTP", f"Giving up on {url} after {code}")
            return PageResponse("", FetchOutcome.TRANSPORT_ERROR)

        self.logger.verbose("HTTP", f"Unexpected status {code} {response.reason} for {url}")
        return PageResponse("", FetchOutcome.UNKNOWN_ERROR)

    async def fetch_async(
        self, url: str, cancel: asyncio.Event | None = None
    ) -> PageResponse:
        """Fetch url without blocking the event loop.

        Args:
            url: Page URL.
            cancel: Optional event; setting it abandons the request. When
                omitted, the request is abandoned after ``deadline`` seconds.

        Returns:
            The page response. Deadline expiry and cancellation are
            reported as TRANSPORT_ERROR.
        """
        loop = asyncio.get_running_loop()
        request = loop.run_in_executor(self._executor, self.fetch, url)

        if cancel is None:
            try:
                return await asyncio.wait_for(request, timeout=self.deadline)
            except asyncio.TimeoutError:
                self.logger.verbose(
                    "HTTP", f"Deadline of {self.deadline}s exceeded for {url}"
                )
                return PageResponse("", FetchOutcome.TRANSPORT_ERROR)

        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {request, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            waiter.cancel()

        if request in done:
            return request.result()

        request.cancel()
        self.logger.verbose("HTTP", f"Request cancelled: {url}")
        return PageResponse("", FetchOutcome.TRANSPORT_ERROR)

    def close(self) -> None:
        """Release the session and the thread pool without waiting on requests."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._session.close()
