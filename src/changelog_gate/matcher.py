"""Detection of unreleased entries in a Keep a Changelog document.

The matcher searches the decoded changelog text for an ``## [Unreleased]``
heading that is followed, after any number of blank lines, by a line that is
neither blank nor another ``## [...]`` heading. Such a line means entries were
left behind when the release section was cut.

Blank lines may hold Unicode horizontal whitespace (NBSP, em space, ...), and
NEL, U+2028 and U+2029 count as line breaks alongside CR and LF. A byte-order
mark before the first heading is ignored.

Example::

    >>> evaluate("## [Unreleased]\\n- fix bug\\n## [1.0.0] - 2020-01-01\\n").matched
    True
    >>> evaluate("## [Unreleased]\\n\\n## [1.0.0] - 2020-01-01\\n").matched
    False
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Union

from changelog_gate.exceptions import ConfigurationError

# Equivalents of \h and \R. CR only counts alone when no LF follows, so CRLF
# runs cannot be split.
_HSPACE = r"[ \t\xa0\u1680\u2000-\u200a\u202f\u205f\u3000]"
_NEWLINE_CHARS = r"\n\x0b\x0c\r\x85\u2028\u2029"
_NEWLINE = r"(?:\r\n|\r(?!\n)|[\n\x0b\x0c\x85\u2028\u2029])"

DEFAULT_UNRELEASED_PATTERN = (
    rf"(?:\A\ufeff?|{_NEWLINE})"
    rf"(?P<section>##{_HSPACE}*\[Unreleased\]{_HSPACE}*)"
    rf"{_NEWLINE}"
    rf"(?:{_HSPACE}*{_NEWLINE})*"
    rf"(?P<content>(?!{_HSPACE}*##{_HSPACE}*\[){_HSPACE}*\S[^{_NEWLINE_CHARS}]*)"
    rf"(?:{_NEWLINE}|\Z)"
)

SECTION_GROUP = "section"
CONTENT_GROUP = "content"


@dataclass(frozen=True, slots=True)
class MatchPattern:
    """A compiled search pattern with optional ``section``/``content`` groups."""

    source: str
    regex: re.Pattern[str]

    @property
    def has_section_group(self) -> bool:
        return SECTION_GROUP in self.regex.groupindex

    @property
    def has_content_group(self) -> bool:
        return CONTENT_GROUP in self.regex.groupindex


@dataclass(frozen=True, slots=True)
class NoMatch:
    """The changelog has no unreleased content; the gate passes."""

    @property
    def matched(self) -> bool:
        return False

    @property
    def passed(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Match:
    """Unreleased content was found; the gate fails.

    Captures are ``None`` when the pattern does not define the group or the
    group did not participate in the match.
    """

    section: str | None = None
    content: str | None = None

    @property
    def matched(self) -> bool:
        return True

    @property
    def passed(self) -> bool:
        return False


MatchResult = Union[NoMatch, Match]


@lru_cache(maxsize=32)
def compile_pattern(source: str) -> MatchPattern:
    """Compile ``source`` into a :class:`MatchPattern`.

    Raises:
        ConfigurationError: If ``source`` is not a valid regular expression.
    """
    try:
        regex = re.compile(source)
    except re.error as exc:
        raise ConfigurationError(
            f"Invalid unreleased pattern {source!r}: {exc}",
            pattern=source,
            detail=str(exc),
        ) from exc
    return MatchPattern(source=source, regex=regex)


def default_pattern() -> MatchPattern:
    return compile_pattern(DEFAULT_UNRELEASED_PATTERN)


def _capture(match: re.Match[str], name: str) -> str | None:
    if name not in match.re.groupindex:
        return None
    return match.group(name)


def evaluate(document: str, pattern: MatchPattern | str | None = None) -> MatchResult:
    """Classify ``document`` against ``pattern`` (the built-in rule by default).

    Any occurrence of the pattern anywhere in the document yields a
    :class:`Match`; otherwise :class:`NoMatch` is returned.
    """
    if pattern is None:
        compiled = default_pattern()
    elif isinstance(pattern, str):
        compiled = compile_pattern(pattern)
    else:
        compiled = pattern

    found = compiled.regex.search(document)
    if found is None:
        return NoMatch()
    return Match(
        section=_capture(found, SECTION_GROUP),
        content=_capture(found, CONTENT_GROUP),
    )
