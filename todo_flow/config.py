"""Configuration helpers for todo-flow."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Optional


class ConfigError(RuntimeError):
    """Raised when configuration values are invalid."""


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(slots=True)
class Settings:
    """Runtime configuration for the API and CLI."""

    environment: str = "local"
    log_level: str = "INFO"
    seed_file: Optional[Path] = None
    enforce_unique_usernames: bool = False
    allowed_frontend: Optional[str] = None


def _env_flag(name: str) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be 0 or 1 (got {raw!r}).")


def load_settings(*, prefix: str = "TODO_FLOW_") -> Settings:
    """Load settings from environment variables.

    Args:
        prefix: Prefix shared by all variable names.

    Returns:
        Settings with the resolved values.

    Raises:
        ConfigError: if the log level is unknown, a flag is not boolean,
            or the seed file does not exist.
    """

    environment = os.getenv(f"{prefix}ENV", "local").strip() or "local"

    log_level = os.getenv(f"{prefix}LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Unknown log level {log_level!r} in {prefix}LOG_LEVEL.")

    seed_file: Optional[Path] = None
    seed_raw = os.getenv(f"{prefix}SEED_FILE", "").strip()
    if seed_raw:
        seed_file = Path(seed_raw)
        if not seed_file.is_file():
            raise ConfigError(f"Seed file not found: {seed_file}")

    allowed_frontend = os.getenv(f"{prefix}ALLOWED_FRONTEND", "").strip() or None

    return Settings(
        environment=environment,
        log_level=log_level,
        seed_file=seed_file,
        enforce_unique_usernames=_env_flag(f"{prefix}UNIQUE_USERNAMES"),
        allowed_frontend=allowed_frontend,
    )
