"""Changelog gate for release preparation (CLI wrapper)."""
from __future__ import annotations

import sys
from pathlib import Path

from changelog_gate.checker import check_changelog
from changelog_gate.config import resolve_config
from changelog_gate.exceptions import ChangelogGateError, UnreleasedChangesError


def main(changelog_path: str, pattern: str | None = None) -> int:
    overrides = {"changelog_file": Path(changelog_path), "unreleased_pattern": pattern}
    try:
        check_changelog(resolve_config(overrides=overrides))
    except UnreleasedChangesError as exc:
        print("CHANGELOG GATE FAILED")
        print(str(exc))
        if exc.match.content is not None:
            print(f"- {exc.match.content}")
        return 2
    except ChangelogGateError as exc:
        print(f"ERROR: {exc}")
        return 1

    print("CHANGELOG GATE PASSED")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: python ops/tools/check_changelog.py <CHANGELOG.md> [pattern]")
        sys.exit(1)

    changelog_arg = sys.argv[1]
    pattern_arg = sys.argv[2] if len(sys.argv) > 2 else None
    sys.exit(main(changelog_arg, pattern_arg))
