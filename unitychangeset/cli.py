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

"""Command-line interface for unitychangeset.

This module provides the ``uvc`` entry point, a thin presentation layer
over VersionRegistry.

Commands:

    versions: List known editor versions (optionally one channel)
    show: Show one version with its release date and changeset
    changeset: Print the changeset of a version
    modules: List installable modules of a version for a platform

Example:
    List beta versions:
        ```bash
        $ uvc versions --channel beta
        ```

    Get a changeset:
        ```bash
        $ uvc changeset 2022.2.0b9
        ```

    List macOS modules:
        ```bash
        $ uvc modules 2022.1.0 --platform osx
        ```

Exit Codes:

- 0: Success
- 1: Error (bad input, configuration, network or upstream failure)

Note:
    A non-OK registry result is printed as ``Error: <STATUS>``. Verbose
    mode shows full tracebacks for raised errors.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
import sys

from unitychangeset import __version__
from unitychangeset.config import load_config
from unitychangeset.exceptions import UnityChangesetError
from unitychangeset.logging import get_global_logger, get_logger, set_global_logger
from unitychangeset.models import BuildData, Platform
from unitychangeset.registry import VersionRegistry
from unitychangeset.results import ResultStatus
from unitychangeset.versioning import Channel, UnityVersion

DATE_FORMAT = "%d/%m/%Y"

_CHANNELS: dict[str, Channel | None] = {
    "all": None,
    "release": Channel.RELEASE,
    "alpha": Channel.ALPHA,
    "beta": Channel.BETA,
}

# -------------------------------
# Table rendering
# -------------------------------


def render_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    title_padding: int = 5,
    data_padding: int = 2,
) -> str:
    """Render rows as a fixed-width text table.

    Columns are as wide as their widest cell (header cells get extra
    padding), separated by ``|``.

    Raises:
        ValueError: If a row's length differs from the header count.
    """
    for row in rows:
        if len(row) != len(headers):
            raise ValueError("Data columns count must be equal to header elements count")

    widths = [len(h) + 2 * title_padding for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell) + 2 * data_padding)

    rule = "-" * (sum(widths) + len(widths) - 1)
    title = "|".join(h.center(w) for h, w in zip(headers, widths))
    lines = [rule, title, rule]
    for row in rows:
        lines.append(
            "|".join(
                (" " * data_padding + cell).ljust(w) for cell, w in zip(row, widths)
            )
        )
    return "\n".join(lines)


def _print_status_error(status: ResultStatus) -> int:
    print(f"Error: {status.name}")
    return 1


def _build_registry(args: argparse.Namespace) -> VersionRegistry:
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)
    config = load_config(Path(args.config) if args.config else None)
    return VersionRegistry(config=config)


# -------------------------------
# Command handlers
# -------------------------------


def cmd_versions(args: argparse.Namespace) -> int:
    """Handler for 'uvc versions' command.

    Prints a VERSION/DATE table for the selected channel, oldest first.
    """
    registry = _build_registry(args)
    print("Loading data ...")
    result = registry.get_versions(_CHANNELS[args.channel])
    if not result.ok:
        return _print_status_error(result.status)

    rows = [[str(b.version), b.release_date.strftime(DATE_FORMAT)] for b in result.value]
    print(render_table(["VERSION", "DATE"], rows))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handler for 'uvc show' command."""
    registry = _build_registry(args)
    print("Loading data ...")
    result = registry.get_version(args.version)
    if not result.ok:
        return _print_status_error(result.status)

    build: BuildData = result.value
    print(
        render_table(
            ["VERSION", "DATE", "CHANGESET"],
            [
                [
                    str(build.version),
                    build.release_date.strftime(DATE_FORMAT),
                    build.changeset or "",
                ]
            ],
        )
    )
    return 0


def cmd_changeset(args: argparse.Namespace) -> int:
    """Handler for 'uvc changeset' command."""
    registry = _build_registry(args)
    print("Loading data ...")
    result = registry.get_changeset(args.version)
    if not result.ok:
        return _print_status_error(result.status)

    print(f"Changeset: {result.value}")
    return 0


def cmd_modules(args: argparse.Namespace) -> int:
    """Handler for 'uvc modules' command."""
    registry = _build_registry(args)
    version = UnityVersion.parse(args.version)
    platform = Platform.from_string(args.platform)

    logger = get_global_logger()
    print("Loading data ...")

    logger.step(1, 2, "Resolving changeset...")
    changeset = registry.get_changeset(version)
    if not changeset.ok:
        return _print_status_error(changeset.status)

    logger.step(2, 2, f"Fetching {platform.code} manifest...")
    result = registry.get_modules(version, platform)
    if not result.ok:
        return _print_status_error(result.status)

    print(
        render_table(
            ["VERSION", "PLATFORM", "MODULES"],
            [[str(version), platform.name, ", ".join(m.id for m in result.value)]],
        )
    )
    return 0


# -------------------------------
# Parser
# -------------------------------


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uvc",
        description="Look up Unity editor versions, changesets and modules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"uvc {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'versions' command
    parser_versions = subparsers.add_parser(
        "versions",
        help="List available editor versions",
        description="List released, alpha and beta versions. 'all' can be a long list.",
    )
    parser_versions.add_argument(
        "--channel",
        choices=list(_CHANNELS),
        default="all",
        help="Channel to list (default: all)",
    )
    _add_common_arguments(parser_versions)
    parser_versions.set_defaults(func=cmd_versions)

    # 'show' command
    parser_show = subparsers.add_parser(
        "show",
        help="Show the info about one version",
    )
    parser_show.add_argument("version", help="Version, e.g. 2022.2.0b9")
    _add_common_arguments(parser_show)
    parser_show.set_defaults(func=cmd_show)

    # 'changeset' command
    parser_changeset = subparsers.add_parser(
        "changeset",
        help="Get the changeset of a version",
    )
    parser_changeset.add_argument("version", help="Version, e.g. 2020.3.34")
    _add_common_arguments(parser_changeset)
    parser_changeset.set_defaults(func=cmd_changeset)

    # 'modules' command
    parser_modules = subparsers.add_parser(
        "modules",
        help="List installable modules of a version",
    )
    parser_modules.add_argument("version", help="Version, e.g. 2022.1.0")
    parser_modules.add_argument(
        "--platform",
        required=True,
        help="Platform the editor runs on: win, linux or osx",
    )
    _add_common_arguments(parser_modules)
    parser_modules.set_defaults(func=cmd_modules)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the uvc CLI.

    This function is registered as the 'uvc' console script in pyproject.toml.
    """
    args = build_parser().parse_args(argv)

    try:
        exit_code = args.func(args)
    except UnityChangesetError as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
