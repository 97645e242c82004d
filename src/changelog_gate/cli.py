from __future__ import annotations

import pathlib
from typing import Any, Optional

import typer

from changelog_gate.checker import check_changelog
from changelog_gate.config import configure_logging, load_config_file, resolve_config
from changelog_gate.exceptions import ChangelogGateError, UnreleasedChangesError
from changelog_gate.matcher import DEFAULT_UNRELEASED_PATTERN

app = typer.Typer(no_args_is_help=True, help="Fail the build while a changelog has unreleased changes.")

EXIT_ERROR = 1
EXIT_UNRELEASED = 2


@app.command("check")
def check(
    changelog: Optional[pathlib.Path] = typer.Argument(
        None,
        help="Changelog file to check (defaults to CHANGELOG_GATE_CHANGELOG_FILE or ./CHANGELOG.md).",
    ),
    encoding: Optional[str] = typer.Option(
        None, "--encoding", help="Encoding of the changelog file (defaults to UTF-8)."
    ),
    pattern: Optional[str] = typer.Option(
        None, "--pattern", help="Regular expression locating unreleased content."
    ),
    config: Optional[pathlib.Path] = typer.Option(
        None,
        "--config",
        help="YAML file with gate options (changelog_file, encoding, unreleased_pattern, log_level).",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    """Check a changelog for entries still listed under [Unreleased]."""
    overrides: dict[str, Any] = {
        "changelog_file": changelog,
        "encoding": encoding,
        "unreleased_pattern": pattern,
        "log_level": log_level,
    }
    try:
        file_values = load_config_file(config) if config is not None else None
        resolved = resolve_config(file_values=file_values, overrides=overrides)
        configure_logging(resolved.log_level)
        check_changelog(resolved)
    except UnreleasedChangesError as exc:
        typer.echo("CHANGELOG GATE FAILED")
        typer.echo(str(exc))
        if exc.match.section is not None:
            typer.echo(f"- section: {exc.match.section}")
        if exc.match.content is not None:
            typer.echo(f"- content: {exc.match.content}")
        raise typer.Exit(EXIT_UNRELEASED)
    except ChangelogGateError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(EXIT_ERROR)

    typer.echo("CHANGELOG GATE PASSED")


@app.command("pattern")
def show_pattern() -> None:
    """Print the built-in pattern for unreleased content."""
    typer.echo(DEFAULT_UNRELEASED_PATTERN)


if __name__ == "__main__":
    app()
