"""Data access layer for shifts and tasks."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone

from work.config import default_database_path
from work.models import Shift, Task, coerce_classification
from work.storage.connection import connect
from work.storage.queries import build_list_query
from work.storage.schema import ensure_database_file, init_schema
from work.storage.timestamps import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _decode_times(row: sqlite3.Row) -> tuple[datetime, datetime]:
    """Decode the start and end columns of *row*, failing on either."""
    try:
        start = parse_timestamp(row["start"])
    except ValueError as exc:
        raise ValueError(f"failed to parse start time: {exc}") from exc
    try:
        end = parse_timestamp(row["end"])
    except ValueError as exc:
        raise ValueError(f"failed to parse end time: {exc}") from exc
    return start, end


class WorkDAL:
    """Owns one SQLite connection and exposes shift and task operations.

    An empty *database_path* resolves to ``<data-home>/work/database.db``.
    The database file and schema are created on construction. Close the
    handle with :meth:`close` or use the instance as a context manager.
    """

    def __init__(self, database_path: str = "") -> None:
        if not database_path:
            database_path = default_database_path()
        ensure_database_file(database_path)
        conn = connect(database_path)
        try:
            init_schema(conn)
        except BaseException:
            conn.close()
            raise
        logger.info("Database initialized at %s", database_path)
        self.database_path = database_path
        self._conn = conn

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> WorkDAL:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------
    def create_task(self, task: Task) -> None:
        """Insert *task*. Raises sqlite3.IntegrityError if its id exists."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO task (id, description, classification, start, end) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    task.id,
                    task.description,
                    int(task.classification),
                    format_timestamp(task.start),
                    format_timestamp(task.end),
                ),
            )
        logger.debug("Created task %d", task.id)

    def end_task(self, task_id: int) -> None:
        """Set the task's end to now. A missing id is a no-op, not an error."""
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE task SET end = ? WHERE id = ?",
                (format_timestamp(_now()), task_id),
            )
        logger.debug("Ended task %d (%d row(s) updated)", task_id, cursor.rowcount)

    def get_latest_task(self) -> Task | None:
        """Return the task with the highest id, or None if there are none."""
        tasks = self.list_tasks(limit=1)
        return tasks[0] if tasks else None

    def list_tasks(self, limit: int = 0, days: int = 0) -> list[Task]:
        """Return tasks newest-id first, optionally capped and day-windowed.

        Raises ValueError if any fetched row holds an undecodable timestamp.
        """
        sql, params = build_list_query("task", limit=limit, days=days)
        rows = self._conn.execute(sql, params).fetchall()

        tasks = []
        for r in rows:
            start, end = _decode_times(r)
            tasks.append(Task(
                id=r["id"],
                description=r["description"],
                classification=coerce_classification(r["classification"]),
                start=start,
                end=end,
            ))
        return tasks

    # ------------------------------------------------------------------
    # Shifts
    # ------------------------------------------------------------------
    def create_shift(self, shift: Shift) -> None:
        """Insert *shift*. Raises sqlite3.IntegrityError if its id exists."""
        with self._conn:
            self._conn.execute(
                "INSERT INTO shift (id, start, end) VALUES (?, ?, ?)",
                (shift.id, format_timestamp(shift.start), format_timestamp(shift.end)),
            )
        logger.debug("Created shift %d", shift.id)

    def end_shift(self, shift_id: int) -> None:
        """Set the shift's end to now. A missing id is a no-op, not an error."""
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE shift SET end = ? WHERE id = ?",
                (format_timestamp(_now()), shift_id),
            )
        logger.debug("Ended shift %d (%d row(s) updated)", shift_id, cursor.rowcount)

    def get_latest_shift(self) -> Shift | None:
        """Return the shift with the highest id, or None if there are none."""
        shifts = self.list_shifts(limit=1)
        return shifts[0] if shifts else None

    def list_shifts(self, limit: int = 0, days: int = 0) -> list[Shift]:
        """Return shifts newest-id first, optionally capped and day-windowed.

        Raises ValueError if any fetched row holds an undecodable timestamp.
        """
        sql, params = build_list_query("shift", limit=limit, days=days)
        rows = self._conn.execute(sql, params).fetchall()

        shifts = []
        for r in rows:
            start, end = _decode_times(r)
            shifts.append(Shift(id=r["id"], start=start, end=end))
        return shifts
