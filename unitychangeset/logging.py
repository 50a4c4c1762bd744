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

"""Logging interface for unitychangeset.

Library modules report progress through a small logger object rather than
printing, so the registry and scrapers stay quiet unless the CLI (or a
caller) installs something louder.

Levels, from loudest to quietest:

- step: numbered progress lines, printed whenever a DefaultLogger is used
- verbose: what the registry and scrapers decided (cache hits, failures)
- debug: every HTTP request and every extracted value (enables verbose too)

Example:
    Configure global logger:
        ```python
        from unitychangeset.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Use in library code:
        ```python
        from unitychangeset.logging import get_global_logger

        get_global_logger().verbose("REGISTRY", "Cache empty, fetching listings")
        ```

Note:
    The process starts with a SilentLogger installed globally.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """What the library needs from a logger."""

    def step(self, step: int, total: int, message: str) -> None:
        """Report progress through a multi-phase command.

        Args:
            step: Phase number, starting at 1.
            total: Number of phases.
            message: What the phase does.
        """
        ...

    def verbose(self, prefix: str, message: str) -> None:
        """Report a decision or outcome.

        Args:
            prefix: Subsystem tag: "REGISTRY", "SCRAPE", "HTTP" or "CONFIG".
            message: Text to report.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Report low-level detail. Same arguments as verbose()."""
        ...


class DefaultLogger:
    """Logger writing tagged lines to a text stream (stdout by default)."""

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self.show_verbose = verbose or debug
        self.show_debug = debug
        self._stream = stream

    def _write(self, line: str) -> None:
        # Resolve lazily so pytest's capsys and redirected stdout are honoured
        print(line, file=self._stream or sys.stdout)

    def step(self, step: int, total: int, message: str) -> None:
        self._write(f"[{step}/{total}] {message}")

    def verbose(self, prefix: str, message: str) -> None:
        if self.show_verbose:
            self._write(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self.show_debug:
            self._write(f"[{prefix}] {message}")


class SilentLogger:
    """Logger that discards everything."""

    def step(self, step: int, total: int, message: str) -> None:
        pass

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Build a stdout logger for the CLI flags -v and -d."""
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Return the logger library code falls back to."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Install the logger library code falls back to.

    Objects constructed with an explicit logger keep using it.
    """
    global _global_logger
    _global_logger = logger
