"""Tests for semver parsing and range helpers."""

from __future__ import annotations

import pytest

from ensure_version.errors import MalformedRequirementError
from ensure_version.versions import (
    VersionTriple,
    max_satisfying,
    parse_range,
    parse_version,
    satisfies,
    truncate_range,
)


def test_parse_version_ignores_extra_segments() -> None:
    assert parse_version("1.9.4.1") == VersionTriple(1, 9, 4)
    assert parse_version("9.9.115.7") == VersionTriple(9, 9, 115)
    assert parse_version("v2.7.1+cu124") == VersionTriple(2, 7, 1)


def test_parse_version_rejects_short_strings() -> None:
    with pytest.raises(ValueError, match="Unable to parse"):
        parse_version("9.9")


def test_version_triples_order_by_major_minor_patch() -> None:
    assert VersionTriple(1, 10, 0) > VersionTriple(1, 9, 400)
    assert str(VersionTriple(1, 2, 3)) == "1.2.3"


def test_truncate_range_only_touches_long_tokens() -> None:
    assert truncate_range("8.3.102 || 9.9.115.7") == "8.3.102 || 9.9.115"
    assert truncate_range(">=1.8.0 <2.0.0") == ">=1.8.0 <2.0.0"


@pytest.mark.parametrize("expression", ["", "   ", "banana", None, 3])
def test_parse_range_rejects_invalid_expressions(expression) -> None:
    with pytest.raises(MalformedRequirementError):
        parse_range(expression)


def test_malformed_range_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        parse_range("banana")


def test_satisfies_supports_npm_range_syntax() -> None:
    running = VersionTriple(1, 9, 4)
    assert satisfies(running, ">=1.8.0")
    assert satisfies(running, "1.5.2 || 1.8.0 - 2.0.0")
    assert satisfies(running, "<1.9.5")
    assert satisfies(running, "1.9")
    assert not satisfies(running, "1.9.3")
    assert not satisfies(running, "^2.0.0")


def test_satisfies_tolerates_space_after_comparator() -> None:
    running = VersionTriple(1, 9, 4)
    assert satisfies(running, ">= 1.8.0")
    assert satisfies(running, ">= 1.8.0 < 2.0.0")
    assert satisfies(running, "~ 1.9.0")
    assert not satisfies(running, "< 1.9.4")


def test_truncate_range_drops_qualifiers() -> None:
    assert truncate_range("1.9.4+build.7") == "1.9.4"
    assert truncate_range(">=1.9.0-rc.1 <2.0.0") == ">=1.9.0 <2.0.0"
    assert truncate_range("1.8.0 - 2.0.0") == "1.8.0 - 2.0.0"


def test_max_satisfying_picks_highest_match() -> None:
    candidates = [VersionTriple(1, 8, 0), VersionTriple(1, 9, 4), VersionTriple(2, 1, 0)]
    assert max_satisfying(candidates, "1.5.2 || 1.8.0 - 2.0.0") == VersionTriple(1, 9, 4)
    assert max_satisfying(candidates, ">=3.0.0") is None
