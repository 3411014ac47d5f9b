"""Database schema definition and initialization."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from work.storage.connection import get_connection

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"

_SCHEMA_SQL = """\
-- Work sessions
CREATE TABLE IF NOT EXISTS shift (
    id      INTEGER PRIMARY KEY,
    start   TEXT,
    end     TEXT
);

-- Units of work, matched to a shift by time overlap
CREATE TABLE IF NOT EXISTS task (
    id              INTEGER PRIMARY KEY,
    description     TEXT,
    classification  INTEGER,
    start           TEXT,
    end             TEXT
);
"""


def ensure_database_file(database_path: str) -> None:
    """Create parent directories and an empty database file if missing.

    In-memory databases have no file and are left alone.
    """
    if database_path == IN_MEMORY:
        return
    path = Path(database_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(mode=0o644, exist_ok=True)


def init_schema(conn: sqlite3.Connection) -> None:
    """Create all tables on *conn* if they do not already exist."""
    with conn:
        conn.executescript(_SCHEMA_SQL)


def init_db(database_path: str) -> None:
    """Create the database file and all tables if they do not already exist."""
    ensure_database_file(database_path)
    with get_connection(database_path) as conn:
        init_schema(conn)
    logger.info("Database initialized at %s", database_path)
