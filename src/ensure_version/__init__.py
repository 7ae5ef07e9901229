"""Runtime version guard for Python libraries and applications.

Declare the interpreter a module needs and fail early with a clear message::

    from ensure_version import ensure_version

    ensure_version(">=3.10")
    ensure_version({"python": ">=3.10 <3.14", "sqlite": ">=3.35.0"})

Ranges use npm semver syntax (``>=``, ``<``, hyphen ranges, ``||``, ``~``,
``^``, partial versions).
"""

from ensure_version.errors import (
    EnsureVersionError,
    MalformedRequirementError,
    VersionMismatchError,
)
from ensure_version.guard import Advisory, VersionGuard, ensure_version
from ensure_version.source import ReleaseCatalog, VersionSource, default_source
from ensure_version.versions import VersionTriple, parse_version

__all__ = [
    "Advisory",
    "EnsureVersionError",
    "MalformedRequirementError",
    "ReleaseCatalog",
    "VersionGuard",
    "VersionMismatchError",
    "VersionSource",
    "VersionTriple",
    "default_source",
    "ensure_version",
    "parse_version",
]
