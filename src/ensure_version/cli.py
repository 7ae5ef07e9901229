"""CLI entry point for checking the running interpreter."""

from __future__ import annotations

import argparse

from ensure_version.compat import ensure_supported_python


ensure_supported_python()


from rich.console import Console

from ensure_version.config import CATALOG_URL
from ensure_version.errors import MalformedRequirementError, VersionMismatchError
from ensure_version.guard import VersionGuard
from ensure_version.logging_config import setup_logging
from ensure_version.source import VersionSource


def _parse_component(value: str) -> tuple[str, str]:
    key, sep, expression = value.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=RANGE, got {value!r}")
    return key.strip(), expression.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ensure-version",
        description="Check the running interpreter against a semver range.",
    )
    parser.add_argument("range", nargs="?", help="Range for the primary component.")
    parser.add_argument(
        "-c",
        "--component",
        action="append",
        default=[],
        type=_parse_component,
        metavar="KEY=RANGE",
        help="Range for a specific component (repeatable).",
    )
    parser.add_argument("--no-logs", action="store_true", help="Disable upgrade advisories.")
    parser.add_argument("--caller", default=None, help="Name shown in error messages.")
    parser.add_argument("--catalog-url", default=CATALOG_URL, help="Release list URL.")
    parser.add_argument("--show", action="store_true", help="Print running versions.")
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run a single version check from the command line."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    console = Console()

    source = VersionSource.from_interpreter(catalog_url=args.catalog_url or None)
    if args.show:
        for key in source.keys:
            console.print(f"{key}@{source.raw(key)}", style="dim")

    requirement: str | dict[str, str] | None
    if args.component:
        requirement = dict(args.component)
        if args.range:
            if source.primary in requirement:
                parser.error(
                    f"RANGE conflicts with -c {source.primary}=...; give the range only once"
                )
            requirement[source.primary] = args.range
    else:
        requirement = args.range

    if requirement is None and args.show:
        return 0

    try:
        VersionGuard(source).check(requirement, logs=not args.no_logs, caller=args.caller)
    except MalformedRequirementError as e:
        console.print(str(e), style="red")
        return 2
    except VersionMismatchError as e:
        console.print(str(e), style="red")
        return 1

    console.print("All required versions match.", style="bold green")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
