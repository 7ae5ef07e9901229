"""Errors raised by the version guard."""

from __future__ import annotations

from typing import Any, Iterable


class EnsureVersionError(Exception):
    """Base class for version guard failures."""


class MalformedRequirementError(EnsureVersionError, TypeError):
    """Raised when a requirement is missing, empty, or not valid range syntax."""

    def __init__(self, message: str, *, requirement: Any = None, allowed: Iterable[str] = ()):
        self.requirement = requirement
        self.allowed = tuple(allowed)
        super().__init__(message)


class VersionMismatchError(EnsureVersionError, RuntimeError):
    """Raised when a running component does not satisfy its required range."""

    def __init__(self, *, key: str, running: str, required: str, caller: str | None = None):
        self.key = key
        self.running = running
        self.required = required
        self.caller = caller
        message = f"{key}@{running} does not match required version {required}"
        if caller:
            message += f" (required by {caller})"
        super().__init__(message)
