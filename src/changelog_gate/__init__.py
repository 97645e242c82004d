"""Release gate that fails while a changelog still holds unreleased entries."""

from __future__ import annotations

from importlib import metadata

from changelog_gate.exceptions import (
    ChangelogGateError,
    ChangelogReadError,
    ConfigurationError,
    UnreleasedChangesError,
)
from changelog_gate.matcher import (
    DEFAULT_UNRELEASED_PATTERN,
    Match,
    MatchPattern,
    MatchResult,
    NoMatch,
    compile_pattern,
    evaluate,
)

__all__ = (
    "DEFAULT_UNRELEASED_PATTERN",
    "ChangelogGateError",
    "ChangelogReadError",
    "ConfigurationError",
    "Match",
    "MatchPattern",
    "MatchResult",
    "NoMatch",
    "UnreleasedChangesError",
    "__version__",
    "compile_pattern",
    "evaluate",
)


def _detect_version() -> str:
    """Return the installed package version or a placeholder during development."""
    try:
        return metadata.version("changelog-gate")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__version__ = _detect_version()
