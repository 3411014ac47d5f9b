"""SQLite connection management."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Generator

from work.storage.timestamps import sql_datetime


def connect(database_path: str) -> sqlite3.Connection:
    """Open a SQLite connection with WAL mode and the ``unixdate`` function.

    The caller owns the returned connection and must close it.
    """
    conn = sqlite3.connect(database_path)
    try:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.create_function("unixdate", 1, sql_datetime)
    except BaseException:
        conn.close()
        raise
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_connection(database_path: str) -> Generator[sqlite3.Connection, None, None]:
    """Open a connection for a single unit of work.

    Commits on clean exit, rolls back on exception, and always closes.
    """
    conn = connect(database_path)
    try:
        yield conn
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()
