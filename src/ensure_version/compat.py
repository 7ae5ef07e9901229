"""Runtime compatibility checks for this package itself."""

from __future__ import annotations

from ensure_version.guard import ensure_version


SUPPORTED_PYTHON = ">=3.10.0"


def ensure_supported_python() -> None:
    """Fail fast with a clear message on unsupported Python versions."""
    ensure_version({"python": SUPPORTED_PYTHON}, logs=False, caller="ensure-version")
