"""Unit tests for reading changelog files."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pytest

from changelog_gate.exceptions import ChangelogReadError
from changelog_gate.loader import read_changelog, resolve_encoding


def test_path_not_set() -> None:
    with pytest.raises(ChangelogReadError, match="path to the changelog file has not been set"):
        read_changelog(None, "utf-8")


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ChangelogReadError, match="does not exist"):
        read_changelog(tmp_path / "this-file-does-not.exist", "utf-8")


def test_directory_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ChangelogReadError, match="is not a file"):
        read_changelog(tmp_path, "utf-8")


def test_unreadable_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_text("# Changelog\n", encoding="utf-8")
    monkeypatch.setattr(os, "access", lambda path, mode: False)

    with pytest.raises(ChangelogReadError, match="can't be read! Hint: Check file permissions."):
        read_changelog(changelog, "utf-8")


def test_reads_with_explicit_encoding(tmp_path: Path) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_bytes("## [Unreleased]\n- Übersetzung\n".encode("latin-1"))

    assert read_changelog(changelog, "latin-1") == "## [Unreleased]\n- Übersetzung\n"


def test_decode_failure(tmp_path: Path) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_bytes(b"## [Unreleased]\n- \xff\xfe broken\n")

    with pytest.raises(ChangelogReadError, match="Could not read changelog file") as exc_info:
        read_changelog(changelog, "utf-8")
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_unknown_encoding(tmp_path: Path) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_text("# Changelog\n", encoding="utf-8")

    with pytest.raises(ChangelogReadError, match="unknown encoding 'no-such-codec'"):
        read_changelog(changelog, "no-such-codec")


def test_unset_encoding_defaults_to_utf8(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_text("## [Unreleased]\n- café\n", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="changelog_gate.loader"):
        text = read_changelog(changelog, None)

    assert text == "## [Unreleased]\n- café\n"
    assert "Defaulting to UTF-8" in caplog.text


def test_resolve_encoding() -> None:
    assert resolve_encoding(" latin-1 ") == "latin-1"
    assert resolve_encoding("") == "utf-8"
    assert resolve_encoding(None) == "utf-8"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions required")
def test_permission_bits_are_honoured(tmp_path: Path) -> None:
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        pytest.skip("root can read files regardless of permission bits")
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_text("# Changelog\n", encoding="utf-8")
    changelog.chmod(0o000)
    try:
        with pytest.raises(ChangelogReadError, match="can't be read"):
            read_changelog(changelog, "utf-8")
    finally:
        changelog.chmod(0o644)


def test_leading_byte_order_mark_is_dropped(tmp_path: Path) -> None:
    changelog = tmp_path / "CHANGELOG.md"
    changelog.write_bytes(b"\xef\xbb\xbf## [Unreleased]\n- pending\n")

    assert read_changelog(changelog, "utf-8") == "## [Unreleased]\n- pending\n"
    assert read_changelog(changelog, None) == "## [Unreleased]\n- pending\n"
