"""Check running component versions against a required semver range.

A requirement is either a single range string, which applies to the primary
component, or a mapping of component key to range string::

    ensure_version(">=3.10")
    ensure_version({"python": ">=3.10", "sqlite": ">=3.35.0"})

Components are always evaluated in the source's canonical key order, so the
first failing key and the order of advisories never depend on how the caller
built the mapping. A range violation raises ``VersionMismatchError``. When the
running version satisfies the range but a newer compatible minor or patch
exists, a warning (minor) or info (patch) record is logged instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Union

from semantic_version import NpmSpec

from ensure_version.config import CATALOG_WAIT, MINOR_SCAN_LIMIT, PATCH_SCAN_LIMIT
from ensure_version.errors import MalformedRequirementError, VersionMismatchError
from ensure_version.source import VersionSource, default_source
from ensure_version.versions import VersionTriple, max_satisfying, parse_range, satisfies


Requirement = Union[str, Mapping[str, str]]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Advisory:
    """A newer version that still satisfies the required range."""

    key: str
    running: VersionTriple
    available: VersionTriple
    level: int
    message: str

    @property
    def is_minor(self) -> bool:
        return self.level == logging.WARNING


def normalize_requirement(
    requirement: Requirement | None, primary: str, allowed: Iterable[str]
) -> dict[str, str]:
    """Turn a range string or a component mapping into a component mapping."""
    allowed = tuple(allowed)
    if isinstance(requirement, str):
        return {primary: requirement}
    if not isinstance(requirement, Mapping):
        raise MalformedRequirementError(
            f"requirement {requirement!r} is not a valid semver range or mapping",
            requirement=requirement,
            allowed=allowed,
        )

    normalized = {
        key: value
        for key, value in requirement.items()
        if key in allowed and value is not None
    }
    if not normalized:
        raise MalformedRequirementError(
            f"requirement {dict(requirement)!r} should have at least one of these keys "
            f"[{', '.join(allowed)}]",
            requirement=requirement,
            allowed=allowed,
        )
    return normalized


def _synthesized_candidates(
    running: VersionTriple, minor_limit: int, patch_limit: int
) -> list[VersionTriple]:
    """Every later minor (at patch 0) and later patch within the running major."""
    candidates = [
        VersionTriple(running.major, minor, 0)
        for minor in range(running.minor + 1, minor_limit + 1)
    ]
    candidates.extend(
        VersionTriple(running.major, running.minor, patch)
        for patch in range(running.patch + 1, patch_limit + 1)
    )
    return candidates


class VersionGuard:
    """Validates requirements against a single version source."""

    def __init__(
        self,
        source: VersionSource,
        *,
        minor_limit: int = MINOR_SCAN_LIMIT,
        patch_limit: int = PATCH_SCAN_LIMIT,
        wait_for_catalog: bool = CATALOG_WAIT,
    ) -> None:
        self.source = source
        self.minor_limit = minor_limit
        self.patch_limit = patch_limit
        self.wait_for_catalog = wait_for_catalog

    def check(
        self,
        requirement: Requirement | None,
        logs: bool = True,
        caller: str | None = None,
    ) -> None:
        """Raise if any required component is out of range; log possible upgrades."""
        required = normalize_requirement(requirement, self.source.primary, self.source.keys)

        for key in self.source.keys:
            if key not in required:
                continue
            expression = required[key]

            version_range = parse_range(expression)
            running = self.source.version(key)
            if not satisfies(running, version_range):
                raise VersionMismatchError(
                    key=key, running=str(running), required=expression, caller=caller
                )

            if not logs:
                continue
            advisory = self._advise(key, running, version_range, expression, caller)
            if advisory is not None:
                logger.log(advisory.level, advisory.message)

    def advise(self, key: str, expression: str, caller: str | None = None) -> Advisory | None:
        """Return the upgrade advisory for one component, if any."""
        version_range = parse_range(expression)
        return self._advise(key, self.source.version(key), version_range, expression, caller)

    def _candidates(self, key: str, running: VersionTriple) -> list[VersionTriple]:
        releases = self.source.releases(key, wait=self.wait_for_catalog)
        if releases:
            return [release for release in releases if release.major == running.major]
        return _synthesized_candidates(running, self.minor_limit, self.patch_limit)

    def _advise(
        self,
        key: str,
        running: VersionTriple,
        version_range: NpmSpec,
        expression: str,
        caller: str | None,
    ) -> Advisory | None:
        best = max_satisfying([running, *self._candidates(key, running)], version_range)
        if best is None:
            return None

        required_by = f" required by {caller}" if caller else ""
        if best.minor != running.minor:
            return Advisory(
                key=key,
                running=running,
                available=best,
                level=logging.WARNING,
                message=(
                    f"{key}@{running} is not the maximum minor matching {expression}"
                    f"{required_by}, {key} minor can be upgraded to {best}"
                ),
            )
        if best.patch != running.patch:
            return Advisory(
                key=key,
                running=running,
                available=best,
                level=logging.INFO,
                message=(
                    f"{key}@{running} is not the maximum patch matching {expression}"
                    f"{required_by}, {key} patch can be upgraded to {best}"
                ),
            )
        return None


def ensure_version(
    requirement: Requirement | None,
    logs: bool = True,
    caller: str | None = None,
    *,
    source: VersionSource | None = None,
) -> None:
    """Fail fast when the running interpreter does not meet ``requirement``.

    Raises ``MalformedRequirementError`` for a missing, empty, or unparsable
    requirement and ``VersionMismatchError`` for the first component, in
    canonical order, whose running version is outside its range.
    """
    VersionGuard(source or default_source()).check(requirement, logs=logs, caller=caller)
