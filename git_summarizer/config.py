"""Configuration loader - reads git-summarizer.toml with ENV overrides."""  # noqa: I001

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import Any, cast

from git_summarizer.prompts import DEFAULT_COMMIT_FORMAT

CONFIG_FILENAME = "git-summarizer.toml"
SECTION = "git_summarizer"

LOG_LEVELS = ("debug", "info", "warning", "error")


class ConfigError(ValueError):
    """Raised when the startup configuration is invalid."""


@dataclass
class ServerSettings:
    """Server process settings."""

    log_level: str = "info"

    def validate(self) -> None:
        if not isinstance(self.log_level, str) or self.log_level.lower() not in LOG_LEVELS:
            raise ConfigError(f"Invalid log_level: {self.log_level}")


@dataclass
class LoggingSettings:
    """stderr log output."""

    format: str = "text"  # "text" | "json"
    include_correlation_id: bool = True

    def validate(self) -> None:
        if not isinstance(self.format, str) or self.format not in ("text", "json"):
            raise ConfigError(f"Invalid log format: {self.format}")


@dataclass
class GitSettings:
    """Repository the tools operate on."""

    repo_path: str = "."
    git_binary: str = "git"

    def validate(self) -> None:
        if not isinstance(self.repo_path, str):
            raise ConfigError(f"repo_path must be a string: {self.repo_path!r}")
        if not isinstance(self.git_binary, str) or not self.git_binary:
            raise ConfigError("git_binary must be a non-empty string")


@dataclass
class CommitSettings:
    """Starting commit message template (clients may replace it at initialize)."""

    format: str = DEFAULT_COMMIT_FORMAT

    def validate(self) -> None:
        if not isinstance(self.format, str) or not self.format.strip():
            raise ConfigError("commit format must be a non-empty string")


@dataclass
class AppConfig:
    """Root configuration."""

    enabled: bool = True
    server: ServerSettings = field(default_factory=ServerSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    git: GitSettings = field(default_factory=GitSettings)
    commit: CommitSettings = field(default_factory=CommitSettings)

    def validate(self) -> None:
        if not isinstance(self.enabled, bool):
            raise ConfigError(f"enabled must be a boolean: {self.enabled!r}")
        self.server.validate()
        self.logging.validate()
        self.git.validate()
        self.commit.validate()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def _apply_env_overrides(cfg: AppConfig) -> AppConfig:
    """Apply environment variable overrides. ENV beats TOML."""
    if os.getenv("GIT_SUMMARIZER_ENABLED"):
        cfg.enabled = _env_flag("GIT_SUMMARIZER_ENABLED")

    if os.getenv("GIT_SUMMARIZER_LOG_LEVEL"):
        cfg.server.log_level = os.getenv("GIT_SUMMARIZER_LOG_LEVEL", cfg.server.log_level)

    if os.getenv("GIT_SUMMARIZER_LOG_FORMAT"):
        cfg.logging.format = os.getenv("GIT_SUMMARIZER_LOG_FORMAT", cfg.logging.format)

    if os.getenv("GIT_SUMMARIZER_REPO"):
        cfg.git.repo_path = os.getenv("GIT_SUMMARIZER_REPO", cfg.git.repo_path)

    if os.getenv("GIT_SUMMARIZER_GIT"):
        cfg.git.git_binary = os.getenv("GIT_SUMMARIZER_GIT", cfg.git.git_binary)

    if os.getenv("GIT_SUMMARIZER_COMMIT_FORMAT"):
        cfg.commit.format = os.getenv("GIT_SUMMARIZER_COMMIT_FORMAT", cfg.commit.format)

    return cfg


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{key}] must be a table")
    return value


def _apply_toml(cfg: AppConfig, data: dict[str, Any]) -> AppConfig:
    section = _table(data, SECTION)

    cfg.enabled = section.get("enabled", cfg.enabled)

    srv = _table(section, "server")
    cfg.server.log_level = srv.get("log_level", cfg.server.log_level)

    log = _table(section, "logging")
    cfg.logging.format = log.get("format", cfg.logging.format)
    cfg.logging.include_correlation_id = log.get(
        "include_correlation_id", cfg.logging.include_correlation_id
    )

    git = _table(section, "git")
    cfg.git.repo_path = git.get("repo_path", cfg.git.repo_path)
    cfg.git.git_binary = git.get("git_binary", cfg.git.git_binary)

    commit = _table(section, "commit")
    cfg.commit.format = commit.get("format", cfg.commit.format)

    return cfg


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """
    Load config from git-summarizer.toml with ENV overrides.

    Precedence: ENV → TOML → defaults

    Args:
        config_path: Path to the TOML file. If None, searches:
            1. GIT_SUMMARIZER_CONFIG env var
            2. ./git-summarizer.toml

    Returns:
        AppConfig dataclass with merged settings.

    Raises:
        ConfigError: unreadable TOML or invalid values.
    """
    if config_path is None:
        if os.getenv("GIT_SUMMARIZER_CONFIG"):
            config_path = Path(cast(str, os.getenv("GIT_SUMMARIZER_CONFIG")))
        else:
            config_path = Path(CONFIG_FILENAME)
    else:
        config_path = Path(config_path)

    cfg = AppConfig()

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
        cfg = _apply_toml(cfg, data)

    cfg = _apply_env_overrides(cfg)

    cfg.validate()

    return cfg
