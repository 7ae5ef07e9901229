"""Running component versions and the optional release catalog."""

from __future__ import annotations

import logging
import re
import sqlite3
import sys
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping

import requests

from ensure_version.config import (
    CATALOG_URL,
    PRIMARY_COMPONENT,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from ensure_version.versions import VersionTriple, parse_version


logger = logging.getLogger(__name__)

# Markdown-style release headings: "### 1.9.4 / 2021-05-04", "## Python 3.12.4".
_HEADING_RE = re.compile(
    r"^\s*#{1,6}\s*(?:[A-Za-z][\w-]*\s+)?v?(\d+)\.(\d+)\.(\d+)\b", re.MULTILINE
)


def parse_release_headings(text: str) -> tuple[VersionTriple, ...]:
    """Extract the sorted, de-duplicated release versions from changelog headings."""
    found = {
        VersionTriple(int(major), int(minor), int(patch))
        for major, minor, patch in _HEADING_RE.findall(text or "")
    }
    return tuple(sorted(found))


class ReleaseCatalog:
    """Every known release of the primary component, fetched at most once."""

    def __init__(
        self,
        url: str | None,
        *,
        timeout: int = REQUEST_TIMEOUT,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self._releases: tuple[VersionTriple, ...] | None = None
        self._pending: Future | None = None

    @classmethod
    def from_releases(cls, releases: Iterable[VersionTriple | str]) -> ReleaseCatalog:
        """Build a catalog from known versions without any network access."""
        catalog = cls(None)
        catalog._releases = tuple(
            sorted(
                {
                    release if isinstance(release, VersionTriple) else parse_version(release)
                    for release in releases
                }
            )
        )
        return catalog

    def _fetch(self) -> tuple[VersionTriple, ...]:
        """Download and parse the release list; empty on any failure."""
        if not self.url:
            return ()
        # Advisories are optional, so a broken catalog only disables them.
        try:
            response = requests.get(
                self.url, headers={"User-Agent": self.user_agent}, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException:
            logger.debug("Release catalog unavailable at %s", self.url, exc_info=True)
            return ()

        releases = parse_release_headings(response.text)
        if not releases:
            logger.debug("No release headings found in %s", self.url)
        return releases

    def load(self) -> tuple[VersionTriple, ...]:
        """Return the releases, fetching them on first use."""
        if self._releases is None:
            releases = self._fetch()
            # First completed fetch wins when callers race.
            if self._releases is None:
                self._releases = releases
        return self._releases

    def prefetch(self) -> Future:
        """Start loading in the background; every caller shares one future."""
        if self._pending is None:
            executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="release-catalog")
            self._pending = executor.submit(self.load)
            executor.shutdown(wait=False)
        return self._pending

    def peek(self) -> tuple[VersionTriple, ...] | None:
        """Return the releases if already loaded, without blocking."""
        return self._releases


@dataclass(frozen=True)
class VersionSource:
    """Versions reported by the running system, in canonical key order."""

    versions: Mapping[str, str]
    primary: str = PRIMARY_COMPONENT
    catalog: ReleaseCatalog | None = None
    _parsed: Mapping[str, VersionTriple] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.primary not in self.versions:
            raise ValueError(
                f"Primary component {self.primary!r} missing from {list(self.versions)}"
            )
        object.__setattr__(self, "versions", MappingProxyType(dict(self.versions)))
        object.__setattr__(
            self,
            "_parsed",
            MappingProxyType({key: parse_version(raw) for key, raw in self.versions.items()}),
        )

    @classmethod
    def from_interpreter(cls, catalog_url: str | None = CATALOG_URL) -> VersionSource:
        """Describe the running Python interpreter."""
        impl = sys.implementation.version
        versions = {
            "python": "{0.major}.{0.minor}.{0.micro}".format(sys.version_info),
            "implementation": f"{impl.major}.{impl.minor}.{impl.micro}",
            "sqlite": sqlite3.sqlite_version,
        }
        catalog = ReleaseCatalog(catalog_url) if catalog_url else None
        return cls(versions, primary="python", catalog=catalog)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self.versions)

    def raw(self, key: str) -> str:
        return self.versions[key]

    def version(self, key: str) -> VersionTriple:
        return self._parsed[key]

    def releases(self, key: str, *, wait: bool = True) -> tuple[VersionTriple, ...] | None:
        """Known releases for a component, or None when no usable catalog exists."""
        if key != self.primary or self.catalog is None:
            return None
        if wait:
            releases = self.catalog.load()
        else:
            self.catalog.prefetch()
            releases = self.catalog.peek()
        return releases or None


@lru_cache(maxsize=None)
def default_source() -> VersionSource:
    """Process-wide source for the running interpreter, built on first use."""
    return VersionSource.from_interpreter()
