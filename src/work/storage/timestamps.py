"""Text codec for stored timestamps.

Timestamps are stored in the Unix date(1) layout, e.g.
``Sat Oct  3 09:05:07 UTC 2026``. Writes always use UTC. Reads resolve
UTC/GMT, the local zone's own abbreviations, and numeric offsets; any
other zone abbreviation is read as UTC, so rows written in local time on
another machine stay readable.
"""

from __future__ import annotations

import re
import time
from datetime import datetime, timedelta, timezone

UNIX_DATE_LAYOUT = "Mon Jan _2 15:04:05 MST 2006"

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_UTC_ZONES = frozenset({"UTC", "GMT", "Z"})

_PATTERN = re.compile(
    r"^(?P<weekday>[A-Z][a-z]{2}) "
    r"(?P<month>[A-Z][a-z]{2}) "
    r"(?P<day> ?\d{1,2}) "
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2}):(?P<second>\d{2}) "
    r"(?P<zone>[A-Z]{1,5}|[+-]\d{2}(?:\d{2})?) "
    r"(?P<year>\d{4})$"
)


def format_timestamp(dt: datetime) -> str:
    """Encode *dt* in the stored layout. Naive values are taken as local time."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    dt = dt.astimezone(timezone.utc)
    return (
        f"{_WEEKDAYS[dt.weekday()]} {_MONTHS[dt.month - 1]} {dt.day:2d} "
        f"{dt:%H:%M:%S} UTC {dt.year:04d}"
    )


def _numeric_offset(zone: str) -> timezone:
    sign = -1 if zone[0] == "-" else 1
    hours = int(zone[1:3])
    minutes = int(zone[3:5]) if len(zone) == 5 else 0
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_timestamp(text: str) -> datetime:
    """Decode stored text into an aware datetime.

    Raises ValueError when the text does not match the layout. The weekday
    is checked for syntax only. A zone abbreviation that is neither UTC nor
    the local zone is read with a zero offset.
    """
    if not isinstance(text, str):
        raise ValueError(f"expected timestamp text, got {type(text).__name__}")

    match = _PATTERN.match(text)
    if match is None:
        raise ValueError(f"{text!r} does not match layout {UNIX_DATE_LAYOUT!r}")
    if match["weekday"] not in _WEEKDAYS:
        raise ValueError(f"{text!r}: unknown weekday {match['weekday']!r}")
    if match["month"] not in _MONTHS:
        raise ValueError(f"{text!r}: unknown month {match['month']!r}")

    naive = datetime(
        int(match["year"]),
        _MONTHS.index(match["month"]) + 1,
        int(match["day"].strip()),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
    )

    zone = match["zone"]
    if zone in _UTC_ZONES:
        return naive.replace(tzinfo=timezone.utc)
    if zone[0] in "+-":
        return naive.replace(tzinfo=_numeric_offset(zone))
    if zone in time.tzname:
        return naive.astimezone()
    return naive.replace(tzinfo=timezone.utc)


def sql_datetime(text: str) -> str | None:
    """Convert stored text to SQLite's ``YYYY-MM-DD HH:MM:SS`` UTC form.

    Registered on connections as the SQL function ``unixdate``. Returns
    None for text that cannot be decoded.
    """
    try:
        dt = parse_timestamp(text)
    except ValueError:
        return None
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
