"""Semantic version parsing and npm-style range matching."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from semantic_version import NpmSpec, Version

from ensure_version.errors import MalformedRequirementError


_TRIPLE_RE = re.compile(r"^\s*v?(\d+)\.(\d+)\.(\d+)")
# Anything after major.minor.patch in a range token: extra numeric segments
# (V8-style 9.9.115.7), pre-release tags and build metadata.
_QUALIFIED_TOKEN_RE = re.compile(
    r"(?<![\w.])(v?\d+\.\d+\.\d+)(?:\.\d+)*(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?"
)
# Comparator followed by whitespace, e.g. ">= 1.8.0".
_SPACED_OPERATOR_RE = re.compile(r"(<=|>=|<|>|=|~|\^)\s+(?=[vV]?\d|[xX*])")


@dataclass(frozen=True, order=True)
class VersionTriple:
    """A major.minor.patch version."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_semver(self) -> Version:
        return Version(str(self))


def parse_version(raw: str) -> VersionTriple:
    """Parse the first three numeric components of a dotted version string."""
    match = _TRIPLE_RE.match(raw or "")
    if not match:
        raise ValueError(
            f"Unable to parse version {raw!r} (expected at least major.minor.patch)."
        )
    return VersionTriple(*(int(part) for part in match.groups()))


def truncate_range(expression: str) -> str:
    """Cut version tokens in a range expression down to major.minor.patch."""
    return _QUALIFIED_TOKEN_RE.sub(r"\1", expression)


def parse_range(expression: str) -> NpmSpec:
    """Parse an npm-style range expression."""
    if not isinstance(expression, str) or not expression.strip():
        raise MalformedRequirementError(
            f"{expression!r} is not a valid semver range", requirement=expression
        )
    try:
        normalized = _SPACED_OPERATOR_RE.sub(r"\1", expression.strip())
        return NpmSpec(truncate_range(normalized))
    except ValueError as e:
        raise MalformedRequirementError(
            f"{expression!r} is not a valid semver range: {e}", requirement=expression
        ) from e


def satisfies(version: VersionTriple, expression: str | NpmSpec) -> bool:
    """Return True when the version falls within the range."""
    version_range = expression if isinstance(expression, NpmSpec) else parse_range(expression)
    return version_range.match(version.to_semver())


def max_satisfying(
    candidates: Iterable[VersionTriple], expression: str | NpmSpec
) -> VersionTriple | None:
    """Return the highest candidate within the range, or None."""
    version_range = expression if isinstance(expression, NpmSpec) else parse_range(expression)
    by_semver = {candidate.to_semver(): candidate for candidate in candidates}
    best = version_range.select(by_semver)
    if best is None:
        return None
    return by_semver[best]
