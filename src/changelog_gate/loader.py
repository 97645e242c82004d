"""Read the changelog file into a text buffer."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from changelog_gate.exceptions import ChangelogReadError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
BYTE_ORDER_MARK = "\ufeff"


def resolve_encoding(encoding: str | None) -> str:
    """Return ``encoding`` or the default, warning when it was never configured."""
    if encoding is None or not encoding.strip():
        logger.warning(
            "The expected file encoding of the changelog file has not been set! "
            "Defaulting to %s.",
            DEFAULT_ENCODING.upper(),
        )
        return DEFAULT_ENCODING
    return encoding.strip()


def ensure_readable(path: Path | None) -> Path:
    """
    Validate that ``path`` points at a readable file.

    Raises:
        ChangelogReadError: If the path is unset, missing, not a file or not readable.
    """
    if path is None:
        raise ChangelogReadError("The path to the changelog file has not been set!")
    logger.debug("The path of the changelog file is: %s", path)

    absolute = path.resolve()
    if not path.exists():
        raise ChangelogReadError(f"The changelog file {absolute} does not exist!")
    logger.debug("The changelog file exists.")

    if not path.is_file():
        raise ChangelogReadError(f"The changelog file {absolute} is not a file!")

    if not os.access(path, os.R_OK):
        raise ChangelogReadError(
            f"The changelog file {absolute} can't be read! Hint: Check file permissions."
        )
    return path


def read_changelog(path: Path | None, encoding: str | None = None) -> str:
    """Return the decoded contents of the changelog at ``path``."""
    checked = ensure_readable(path)
    resolved_encoding = resolve_encoding(encoding)
    logger.debug("The expected encoding of the changelog file is: %s", resolved_encoding)

    try:
        text = checked.read_text(encoding=resolved_encoding)
    except LookupError as exc:
        raise ChangelogReadError(
            f"Could not read changelog file {checked}: unknown encoding {resolved_encoding!r}"
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ChangelogReadError(f"Could not read changelog file {checked}: {exc}") from exc
    return text.removeprefix(BYTE_ORDER_MARK)
