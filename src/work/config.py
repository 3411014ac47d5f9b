"""Configuration loading, data-directory resolution, and logging setup."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

APP_NAME = "work"
DATABASE_FILENAME = "database.db"

_LOG_HANDLER_NAME = APP_NAME

_FORMATTERS = {
    "json": json.dumps({
        "time": "%(asctime)s",
        "level": "%(levelname)s",
        "logger": "%(name)s",
        "message": "%(message)s",
    }),
    "text": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
}


@dataclass(frozen=True)
class Config:
    """Application configuration. All values sourced from environment variables."""

    database_path: str

    # Optional
    log_level: str = "WARNING"
    log_format: str = "text"


def application_data_dir() -> Path:
    """Return the per-user data directory for this application.

    Uses $XDG_DATA_HOME when it is set and non-empty, otherwise
    ~/.local/share. Raises RuntimeError if the home directory cannot be
    determined.
    """
    data_home = os.environ.get("XDG_DATA_HOME")
    if not data_home:
        data_home = str(Path.home() / ".local" / "share")
    return Path(data_home) / APP_NAME


def default_database_path() -> str:
    """Return <data-home>/work/database.db."""
    return str(application_data_dir() / DATABASE_FILENAME)


def load_config(env_path: str | Path | None = None) -> Config:
    """Load configuration from environment variables.

    Loads a .env file if present (for local development). WORK_DATABASE_PATH
    overrides the default database location. Raises ValueError for an
    unknown LOG_LEVEL or LOG_FORMAT.
    """
    load_dotenv(dotenv_path=env_path)

    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Invalid LOG_LEVEL: {log_level}")

    log_format = os.environ.get("LOG_FORMAT", "text").lower()
    if log_format not in _FORMATTERS:
        raise ValueError(
            f"Invalid LOG_FORMAT: {log_format} (expected one of: {', '.join(sorted(_FORMATTERS))})"
        )

    return Config(
        database_path=os.environ.get("WORK_DATABASE_PATH") or default_database_path(),
        log_level=log_level,
        log_format=log_format,
    )


def setup_logging(config: Config) -> None:
    """Send log records to stderr at the configured level and format.

    Calling this again replaces the handler installed by a previous call
    instead of adding a second one.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_LOG_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMATTERS.get(config.log_format, _FORMATTERS["text"])))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _LOG_HANDLER_NAME:
            root.removeHandler(existing)
    root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    root.addHandler(handler)
