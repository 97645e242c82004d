"""Custom exceptions for changelog gate checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changelog_gate.matcher import Match

UNRELEASED_CHANGES_MESSAGE = (
    "The changelog file still contains unreleased changes. "
    "Did you forget to update the changelog?"
)


class ChangelogGateError(RuntimeError):
    """Base exception for changelog gate failures."""


class ConfigurationError(ChangelogGateError):
    """Raised when the supplied configuration (pattern, config file, settings) is invalid."""

    def __init__(self, message: str, *, pattern: str | None = None, detail: str | None = None):
        super().__init__(message)
        self.pattern = pattern
        self.detail = detail


class ChangelogReadError(ChangelogGateError):
    """Raised when the changelog file cannot be located, accessed or decoded."""


@dataclass(slots=True)
class UnreleasedChangesError(ChangelogGateError):
    """Raised when the changelog still contains unreleased entries."""

    match: Match

    def __str__(self) -> str:
        return UNRELEASED_CHANGES_MESSAGE
