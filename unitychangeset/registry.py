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

"""Version registry: the caching orchestrator for unitychangeset.

The registry owns one map from UnityVersion to BuildData and is the only
public query entry point. It coordinates the three scrapers:

1. Listing pages (alpha, beta, release) are fetched once, sequentially, the
   first time any query runs against an empty map.
2. A version's changeset is fetched the first time it is asked for.
3. A version's modules for a platform are fetched the first time they are
   asked for, after its changeset is known.

Caching Rules:

- Only successes are cached. A failed changeset or manifest fetch leaves
  the field empty, so the next call tries again.
- Enumeration is all-or-nothing. If any channel fails, the map stays
  empty and the failing channel's status is returned.
- flush() empties the map; everything is fetched again afterwards.

Concurrency:
    Every operation is implemented once as a coroutine (``*_async``); the
    blocking methods drive it with asyncio.run() and raise RuntimeError when
    called from inside a running event loop. Network fetches are the only
    suspension points. A re-entrant lock per registry guards the map: the
    enumeration merge is one locked update, and lazy fills assign whole
    field values under the lock, so no caller sees a half-merged map or a
    half-written record. Two callers asking for the same uncached version
    may both fetch it; the last write wins.

Example:
    Blocking usage:
        ```python
        from unitychangeset.registry import VersionRegistry

        registry = VersionRegistry()
        result = registry.get_changeset("2022.2.0b9")
        if result.ok:
            print(result.value)
        else:
            print(f"Error: {result.status.name}")
        ```

    Async usage with cancellation:
        ```python
        cancel = asyncio.Event()
        result = await registry.get_modules_async(
            "2022.1.0", Platform.OSX, cancel=cancel
        )
        ```
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from unitychangeset.config import Config
from unitychangeset.io import HttpPageFetcher, PageFetcher
from unitychangeset.logging import Logger, get_global_logger
from unitychangeset.models import BuildData, ModuleData, Platform
from unitychangeset.results import RequestResult, ResultStatus
from unitychangeset.scraping import PatternTable, get_pattern_table
from unitychangeset.scraping.changeset import fetch_changeset_async
from unitychangeset.scraping.listing import fetch_builds_async
from unitychangeset.scraping.modules import fetch_modules_async
from unitychangeset.versioning import Channel, UnityVersion, coerce_version

T = TypeVar("T")


def _run_blocking(query: Callable[..., Awaitable[T]], *args: Any) -> T:
    """Drive one registry coroutine to completion from synchronous code.

    Raises:
        RuntimeError: If called while an event loop is running in this
            thread. The coroutine is not created in that case.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(query(*args))
    raise RuntimeError(
        "Blocking VersionRegistry calls cannot run inside an event loop; "
        "await the *_async form instead"
    )


def _coerce_platform(platform: Platform | str) -> Platform:
    if isinstance(platform, Platform):
        return platform
    if isinstance(platform, str):
        return Platform.from_string(platform)
    raise TypeError(f"platform must be Platform or str, got {type(platform).__name__}")


class VersionRegistry:
    """Process-lifetime cache of Unity editor releases.

    Args:
        fetcher: Page transport. Defaults to an HttpPageFetcher built from
            ``config.http``.
        patterns: Pattern table. Defaults to the table named by
            ``config.patterns``.
        config: Effective configuration. Defaults to built-in defaults.
        logger: Logger. Defaults to the global logger at call time.
    """

    def __init__(
        self,
        fetcher: PageFetcher | None = None,
        *,
        patterns: PatternTable | None = None,
        config: Config | None = None,
        logger: Logger | None = None,
    ) -> None:
        config = config or Config()
        self._logger = logger
        self._fetcher = fetcher or HttpPageFetcher(
            timeout=config.http.timeout,
            deadline=config.http.deadline,
            retries=config.http.retries,
            backoff_factor=config.http.backoff_factor,
            user_agent=config.http.user_agent,
            logger=logger,
        )
        self._patterns = patterns or get_pattern_table(config.patterns)
        self._data: dict[UnityVersion, BuildData] = {}
        self._lock = threading.RLock()

    @property
    def logger(self) -> Logger:
        return self._logger or get_global_logger()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, version: object) -> bool:
        with self._lock:
            return version in self._data

    def _lookup(self, version: UnityVersion) -> BuildData | None:
        with self._lock:
            return self._data.get(version)

    # -------------------------------
    # Enumeration
    # -------------------------------

    async def get_all_versions_async(
        self, *, cancel: asyncio.Event | None = None
    ) -> RequestResult[list[BuildData]]:
        """Return every known release, fetching the listings if needed.

        On an empty map the channel listings are fetched one after the
        other in the pattern table's order. The first failing channel ends
        the call with its status and an empty list; nothing is merged.

        Returns:
            OK with the cached BuildData records (the live objects, which
            later lazy fills update), or the failing channel's status.
        """
        with self._lock:
            if self._data:
                return RequestResult(ResultStatus.OK, list(self._data.values()))

        logger = self.logger
        logger.verbose("REGISTRY", "Cache empty, fetching release listings")

        fetched: list[BuildData] = []
        for channel, listing in self._patterns.listings.items():
            result = await fetch_builds_async(
                self._fetcher, listing, cancel=cancel, logger=self._logger
            )
            if not result.ok:
                logger.verbose(
                    "REGISTRY",
                    f"{channel.name.lower()} listing failed: {result.status.name}",
                )
                return RequestResult(result.status, [])
            logger.verbose(
                "REGISTRY",
                f"{channel.name.lower()} listing: {len(result.value)} version(s)",
            )
            fetched.extend(result.value)

        with self._lock:
            for build in fetched:
                # First write wins
                self._data.setdefault(build.version, build)
            return RequestResult(ResultStatus.OK, list(self._data.values()))

    async def get_versions_async(
        self,
        channel: Channel | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> RequestResult[list[BuildData]]:
        """Like get_all_versions_async(), filtered to a channel and sorted ascending."""
        result = await self.get_all_versions_async(cancel=cancel)
        if not result.ok:
            return result
        builds = [b for b in result.value if channel is None or b.version.channel is channel]
        builds.sort(key=lambda b: b.version)
        return RequestResult(ResultStatus.OK, builds)

    # -------------------------------
    # Per-version queries
    # -------------------------------

    async def get_version_async(
        self,
        version: UnityVersion | str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> RequestResult[BuildData | None]:
        """Return one release with its changeset filled in.

        Raises:
            VersionFormatError, VersionRangeError: If version text is malformed.
        """
        version = coerce_version(version)

        listing = await self.get_all_versions_async(cancel=cancel)
        if not listing.ok:
            return RequestResult(listing.status, None)

        changeset = await self.get_changeset_async(version, cancel=cancel)
        if not changeset.ok:
            return RequestResult(changeset.status, None)

        build = self._lookup(version)
        if build is None:
            return RequestResult(ResultStatus.NOT_FOUND, None)
        return RequestResult(ResultStatus.OK, build)

    async def get_changeset_async(
        self,
        version: UnityVersion | str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> RequestResult[str]:
        """Return a release's changeset, fetching its detail page at most once.

        Raises:
            VersionFormatError, VersionRangeError: If version text is malformed.
        """
        version = coerce_version(version)

        listing = await self.get_all_versions_async(cancel=cancel)
        if not listing.ok:
            return RequestResult(listing.status, "")

        build = self._lookup(version)
        if build is None:
            self.logger.verbose("REGISTRY", f"Unknown version: {version}")
            return RequestResult(ResultStatus.NOT_FOUND, "")

        with self._lock:
            cached = build.changeset
        if cached:
            self.logger.debug("REGISTRY", f"Changeset for {version} served from cache")
            return RequestResult(ResultStatus.OK, cached)

        result = await fetch_changeset_async(
            self._fetcher,
            version,
            self._patterns.changeset,
            cancel=cancel,
            logger=self._logger,
        )
        if result.ok:
            with self._lock:
                build.changeset = result.value
        return result

    async def get_modules_async(
        self,
        version: UnityVersion | str,
        platform: Platform | str,
        *,
        cancel: asyncio.Event | None = None,
    ) -> RequestResult[list[ModuleData]]:
        """Return the installable modules of a release on a platform.

        Modules are cached per platform. A cached changeset is reused, so
        only the manifest is fetched.

        Raises:
            VersionFormatError, VersionRangeError: If version text is malformed.
            ConfigError: If platform text is not a known platform code.
        """
        version = coerce_version(version)
        platform = _coerce_platform(platform)

        listing = await self.get_all_versions_async(cancel=cancel)
        if not listing.ok:
            return RequestResult(listing.status, [])

        build = self._lookup(version)
        if build is None:
            return RequestResult(ResultStatus.NOT_FOUND, [])

        with self._lock:
            cached = build.modules.get(platform)
        if cached is not None:
            self.logger.debug(
                "REGISTRY", f"Modules for {version} ({platform.code}) served from cache"
            )
            return RequestResult(ResultStatus.OK, list(cached))

        changeset = await self.get_changeset_async(version, cancel=cancel)
        if not changeset.ok:
            return RequestResult(changeset.status, [])

        result = await fetch_modules_async(
            self._fetcher,
            changeset.value,
            platform,
            self._patterns.modules,
            cancel=cancel,
            logger=self._logger,
        )
        if not result.ok:
            return result

        with self._lock:
            build.modules = {**build.modules, platform: tuple(result.value)}
        return RequestResult(ResultStatus.OK, list(result.value))

    # -------------------------------
    # Blocking wrappers
    # -------------------------------

    def get_all_versions(self) -> RequestResult[list[BuildData]]:
        """Blocking form of get_all_versions_async()."""
        return _run_blocking(self.get_all_versions_async)

    def get_versions(self, channel: Channel | None = None) -> RequestResult[list[BuildData]]:
        """Blocking form of get_versions_async()."""
        return _run_blocking(self.get_versions_async, channel)

    def get_version(self, version: UnityVersion | str) -> RequestResult[BuildData | None]:
        """Blocking form of get_version_async()."""
        return _run_blocking(self.get_version_async, version)

    def get_changeset(self, version: UnityVersion | str) -> RequestResult[str]:
        """Blocking form of get_changeset_async()."""
        return _run_blocking(self.get_changeset_async, version)

    def get_modules(
        self, version: UnityVersion | str, platform: Platform | str
    ) -> RequestResult[list[ModuleData]]:
        """Blocking form of get_modules_async()."""
        return _run_blocking(self.get_modules_async, version, platform)

    # -------------------------------
    # Lifecycle
    # -------------------------------

    def flush(self) -> None:
        """Forget everything; the next query re-fetches all listings."""
        with self._lock:
            self._data.clear()
        self.logger.verbose("REGISTRY", "Cache flushed")


# -------------------------------
# Default instance
# -------------------------------

_default_registry: VersionRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> VersionRegistry:
    """Return the shared registry, creating it with defaults on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = VersionRegistry()
        return _default_registry


def set_default_registry(registry: VersionRegistry | None) -> None:
    """Replace the shared registry (None resets to a fresh default on next use)."""
    global _default_registry
    with _default_lock:
        _default_registry = registry
