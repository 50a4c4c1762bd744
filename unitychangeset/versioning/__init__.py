"""
Version identifiers for unitychangeset.

This package parses, formats and orders Unity editor version strings.

Modules
-------
keys : module
    UnityVersion value type and the Channel enum.

Public API
----------
UnityVersion : dataclass
    Immutable, totally ordered version (major.minor.patch + channel + revision).
Channel : IntEnum
    ALPHA, BETA or RELEASE; the value is the comparison rank.
coerce_version : function
    Accept a UnityVersion or its text form.

Examples
--------
    >>> from unitychangeset.versioning import UnityVersion, Channel
    >>> v = UnityVersion.parse("2022.2.0b9")
    >>> v.channel is Channel.BETA, v.revision
    (True, 9)
    >>> str(v)
    '2022.2.0b9'
    >>> UnityVersion.parse("2020.3.34") > UnityVersion.parse("2020.3.33")
    True

Notes
-----
- For the same major.minor.patch, a release sorts after its betas, and
  betas after alphas.
- Parse errors raise VersionFormatError / VersionRangeError (both ValueError).
"""

from .keys import Channel, UnityVersion, coerce_version

__all__ = ["Channel", "UnityVersion", "coerce_version"]
