"""
Configuration management for unitychangeset.

This package loads optional YAML configuration (transport settings and the
pattern table to scrape with) and merges it over built-in defaults.

Modules
-------
loader : module
    YAML loading, deep merging and validation into a frozen Config.

Public API
----------
load_config : function
    Load the effective configuration, optionally from a YAML file.
Config, HttpSettings : dataclasses
    The validated configuration.

Example
-------
    from pathlib import Path
    from unitychangeset.config import load_config

    cfg = load_config(Path("uvc.yaml"))
    print(cfg.http.timeout, cfg.patterns)
"""

from .loader import DEFAULTS, Config, HttpSettings, load_config

__all__ = ["DEFAULTS", "Config", "HttpSettings", "load_config"]
