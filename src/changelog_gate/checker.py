"""Changelog gate evaluation for release preparation."""

from __future__ import annotations

import logging

from changelog_gate.config import CheckerConfig
from changelog_gate.exceptions import UnreleasedChangesError
from changelog_gate.loader import read_changelog
from changelog_gate.matcher import Match, MatchResult, compile_pattern, evaluate

logger = logging.getLogger(__name__)


def report_match(result: Match) -> None:
    if result.section is not None:
        logger.error('Unreleased section "%s" is not empty.', result.section)
    if result.content is not None:
        logger.error('Found unreleased content "%s".', result.content)


def check_changelog(config: CheckerConfig) -> MatchResult:
    """
    Check the configured changelog for unreleased content.

    Returns:
        The :class:`~changelog_gate.matcher.NoMatch` result when the gate passes.

    Raises:
        ConfigurationError: If the pattern is invalid.
        ChangelogReadError: If the changelog cannot be read.
        UnreleasedChangesError: If the changelog still contains unreleased changes.
    """
    pattern = compile_pattern(config.pattern)
    document = read_changelog(config.changelog_file, config.encoding)
    logger.debug("Checked preconditions")

    logger.info("Checking changelog for pattern: %s", pattern.source)
    result = evaluate(document, pattern)

    if isinstance(result, Match):
        report_match(result)
        logger.error("Aborting the build...")
        raise UnreleasedChangesError(result)

    logger.info("Changelog does not contain unreleased changes")
    return result
