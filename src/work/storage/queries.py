"""Statement builder for the filtered, newest-first listings."""

from __future__ import annotations

TABLE_COLUMNS = {
    "shift": ("id", "start", "end"),
    "task": ("id", "description", "classification", "start", "end"),
}

# Rows whose start cannot be decoded are kept so the row decoder reports them.
_DAY_FILTER = "WHERE coalesce(unixdate(start) > datetime('now', ?), 1)"
_ORDER = "ORDER BY id DESC"


def day_modifier(days: int) -> str:
    """Return the SQLite date modifier for *days* ago, e.g. ``-7 days``."""
    return f"-{days} days"


def build_list_query(table: str, limit: int = 0, days: int = 0) -> tuple[str, tuple]:
    """Return ``(sql, params)`` listing *table* newest-first.

    ``limit > 0`` caps the row count and ``days > 0`` keeps rows that
    started strictly within the last *days* days. Non-positive values
    disable the corresponding filter.
    """
    if table not in TABLE_COLUMNS:
        raise ValueError(f"Unknown table: {table}")

    select = f"SELECT {', '.join(TABLE_COLUMNS[table])} FROM {table}"  # noqa: S608
    has_limit = limit > 0
    has_days = days > 0

    if has_days and has_limit:
        return f"{select} {_DAY_FILTER} {_ORDER} LIMIT ?", (day_modifier(days), limit)
    if has_days:
        return f"{select} {_DAY_FILTER} {_ORDER}", (day_modifier(days),)
    if has_limit:
        return f"{select} {_ORDER} LIMIT ?", (limit,)
    return f"{select} {_ORDER}", ()
