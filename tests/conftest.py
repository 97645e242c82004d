"""Pytest configuration helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from changelog_gate.config import get_settings

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures" / "changelogs"


@pytest.fixture()
def changelog_fixture() -> FixtureLoader:
    """Return a helper resolving bundled changelog fixtures by name."""
    return FixtureLoader(FIXTURES_DIR)


class FixtureLoader:
    def __init__(self, base: Path) -> None:
        self.base = base

    def path(self, name: str) -> Path:
        return self.base / name

    def text(self, name: str) -> str:
        return self.path(name).read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep developer environment variables and .env files out of settings.

    Tests run from a temporary directory so no stray ``.env`` is picked up,
    and the memoized settings are rebuilt for every test.
    """
    for variable in ("CHANGELOG_FILE", "ENCODING", "UNRELEASED_PATTERN", "LOG_LEVEL"):
        monkeypatch.delenv(f"CHANGELOG_GATE_{variable}", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    try:
        yield
    finally:
        get_settings.cache_clear()
