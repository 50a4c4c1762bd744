"""
Configuration loading and merging for unitychangeset.

Configuration is optional. Without a file, built-in defaults are used; with
one, the YAML file is deep-merged on top of the defaults and validated into
a frozen Config object.

Configuration Layers
--------------------
1. **Built-in defaults** (DEFAULTS in this module)
2. **User file** (any YAML path, e.g. ``uvc.yaml``)

Merge Behavior
--------------
The file is layered over DEFAULTS key by key:
  - **Mappings** (such as ``http``) merge recursively, so a file may set one key
  - **Lists** from the file replace the default list
  - **Scalars** from the file win

Recognised Keys
---------------
    http:
      timeout: 10          # per-request timeout (seconds)
      deadline: 10         # async deadline when no cancel event is given
      retries: 3           # urllib3 retries for 429/5xx and connection errors
      backoff_factor: 0.5
      user_agent: "unitychangeset/0.1 (...)"
    patterns: unity-web    # registered pattern table name

Error Handling
--------------
- ConfigError: missing file, YAML parse errors, empty or non-mapping
  files, wrong value types
- Parse errors keep the PyYAML exception as __cause__

Examples
--------
    >>> from pathlib import Path
    >>> from unitychangeset.config import load_config
    >>> cfg = load_config(Path("uvc.yaml"))
    >>> cfg.http.timeout
    5.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from unitychangeset.exceptions import ConfigError
from unitychangeset.io.fetch import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_DEADLINE,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from unitychangeset.logging import Logger, get_global_logger

DEFAULT_PATTERN_TABLE = "unity-web"

DEFAULTS: dict[str, Any] = {
    "http": {
        "timeout": DEFAULT_TIMEOUT,
        "deadline": DEFAULT_DEADLINE,
        "retries": DEFAULT_RETRIES,
        "backoff_factor": DEFAULT_BACKOFF_FACTOR,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "patterns": DEFAULT_PATTERN_TABLE,
}

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class HttpSettings:
    """Transport settings for HttpPageFetcher."""

    timeout: float = DEFAULT_TIMEOUT
    deadline: float = DEFAULT_DEADLINE
    retries: int = DEFAULT_RETRIES
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class Config:
    """Effective configuration.

    Attributes:
        http: Transport settings.
        patterns: Name of the registered pattern table to scrape with.
        source: File the configuration was loaded from, if any.
    """

    http: HttpSettings = field(default_factory=HttpSettings)
    patterns: str = DEFAULT_PATTERN_TABLE
    source: Path | None = None


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """
    Read and parse one YAML file.

    Raises:
      ConfigError - when the file does not exist, cannot be parsed or is empty
    """
    if not p.exists():
        raise ConfigError(f"Configuration file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Return base with overlay layered on top.

    Rules:
      - nested mappings merge recursively
      - a list in overlay replaces the list in base
      - any other overlay value replaces the base value

    Neither argument is modified.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Validation
# -------------------------------


def _number(http: dict[str, Any], key: str, *, integer: bool = False) -> Any:
    value = http.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"http.{key} must be a number, got {value!r}")
    if integer and not isinstance(value, int):
        raise ConfigError(f"http.{key} must be an integer, got {value!r}")
    if value < 0:
        raise ConfigError(f"http.{key} cannot be negative: {value!r}")
    return value if integer else float(value)


def _build_config(merged: dict[str, Any], source: Path | None) -> Config:
    http = merged.get("http")
    if not isinstance(http, dict):
        raise ConfigError("'http' must be a mapping")

    user_agent = http.get("user_agent")
    if not isinstance(user_agent, str) or not user_agent.strip():
        raise ConfigError("http.user_agent must be a non-empty string")

    patterns = merged.get("patterns")
    if not isinstance(patterns, str) or not patterns.strip():
        raise ConfigError("'patterns' must be a non-empty string")

    return Config(
        http=HttpSettings(
            timeout=_number(http, "timeout"),
            deadline=_number(http, "deadline"),
            retries=_number(http, "retries", integer=True),
            backoff_factor=_number(http, "backoff_factor"),
            user_agent=user_agent,
        ),
        patterns=patterns,
        source=source,
    )


# -------------------------------
# Public API
# -------------------------------


def load_config(
    path: Path | None = None,
    *,
    logger: Logger | None = None,
) -> Config:
    """
    Load the effective configuration.

    Steps
      1) Start from DEFAULTS.
      2) If a path is given, read it and deep-merge it on top.
      3) Validate types and build a frozen Config.

    Raises
      ConfigError on a missing file, YAML errors, a non-mapping top level
      or invalid values.
    """
    logger = logger or get_global_logger()

    if path is None:
        logger.verbose("CONFIG", "No configuration file, using defaults")
        return _build_config(DEFAULTS, None)

    path = Path(path).resolve()
    logger.verbose("CONFIG", f"Loading configuration: {path}")

    data = _load_yaml_file(path)
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML must be a mapping (dict): {path}")

    merged = _deep_merge_dicts(DEFAULTS, data)
    logger.debug("CONFIG", f"Effective configuration: {merged}")
    return _build_config(merged, path)
