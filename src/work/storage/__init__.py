"""Storage layer — SQLite persistence for shifts and tasks."""

from work.storage.connection import connect, get_connection
from work.storage.dal import WorkDAL
from work.storage.schema import ensure_database_file, init_db, init_schema

__all__ = ["WorkDAL", "connect", "ensure_database_file", "get_connection", "init_db", "init_schema"]
