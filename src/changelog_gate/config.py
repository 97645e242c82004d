"""Configuration for changelog gate checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from changelog_gate.exceptions import ConfigurationError
from changelog_gate.matcher import DEFAULT_UNRELEASED_PATTERN

DEFAULT_CHANGELOG_FILE = "./CHANGELOG.md"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Gate settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CHANGELOG_GATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    CHANGELOG_FILE: str = Field(
        default=DEFAULT_CHANGELOG_FILE, description="Location of the changelog file"
    )
    ENCODING: str | None = Field(
        default=None, description="Encoding of the changelog file (defaults to UTF-8 when unset)"
    )
    UNRELEASED_PATTERN: str = Field(
        default=DEFAULT_UNRELEASED_PATTERN,
        description="Regular expression locating unreleased content",
    )
    LOG_LEVEL: str = Field(default="INFO", description="Logging level for the CLI")

    @field_validator("UNRELEASED_PATTERN")
    @classmethod
    def validate_pattern_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("UNRELEASED_PATTERN must not be empty")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True, slots=True)
class CheckerConfig:
    """Resolved, immutable configuration for a single check."""

    changelog_file: Path | None
    encoding: str | None
    pattern: str
    log_level: str = "INFO"


class ConfigFileOptions(BaseModel):
    """Options accepted in a YAML config file."""

    model_config = ConfigDict(extra="forbid")

    changelog_file: str | None = None
    encoding: str | None = None
    unreleased_pattern: str | None = None
    log_level: str | None = None


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load gate options from a YAML file.

    Args:
        path: YAML document containing a mapping of gate options.

    Returns:
        The mapping with ``None`` values removed.

    Raises:
        ConfigurationError: If the file cannot be read, is not a mapping or
            contains unknown keys or values of the wrong type.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Could not read config file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        options = ConfigFileOptions.model_validate(data)
    except ValidationError as exc:
        unknown = sorted(
            str(error["loc"][0]) for error in exc.errors() if error["type"] == "extra_forbidden"
        )
        if unknown:
            raise ConfigurationError(
                f"Unknown keys in config file {path}: {', '.join(unknown)}"
            ) from exc
        raise ConfigurationError(f"Invalid config file {path}: {exc}") from exc
    return options.model_dump(exclude_none=True)


def _first_set(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def resolve_config(
    settings: Settings | None = None,
    file_values: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> CheckerConfig:
    """Merge CLI overrides, config file values and settings into a :class:`CheckerConfig`."""
    if settings is None:
        try:
            settings = get_settings()
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid gate settings: {exc}") from exc
    from_file = file_values or {}
    explicit = overrides or {}

    def pick(key: str, fallback: Any) -> Any:
        return _first_set(explicit.get(key), from_file.get(key), fallback)

    changelog_file = pick("changelog_file", settings.CHANGELOG_FILE)
    pattern = pick("unreleased_pattern", settings.UNRELEASED_PATTERN)
    if not isinstance(pattern, str) or not pattern:
        raise ConfigurationError("The unreleased pattern must be a non-empty string")

    log_level = str(pick("log_level", settings.LOG_LEVEL)).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level: {log_level!r}")

    encoding = pick("encoding", settings.ENCODING)
    return CheckerConfig(
        changelog_file=Path(changelog_file) if changelog_file else None,
        encoding=str(encoding) if encoding is not None else None,
        pattern=pattern,
        log_level=log_level,
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )
