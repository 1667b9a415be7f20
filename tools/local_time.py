# tools/local_time.py
"""
Turn a user's picked date (and optional time) into an offset-qualified
ISO-8601 timestamp, e.g. 2025-06-15T08:30:00+07:00.

The wall-clock value is what the user chose on their own clock, so it is
interpreted in the local zone (or the zone passed in), and the offset is the
one in effect on that date, not today's.
"""
import re
from datetime import datetime, timezone, tzinfo
from typing import Optional

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{2}):(\d{2})$")


class InvalidScheduleInput(ValueError):
    pass


def parse_date(date_str: str) -> tuple[int, int, int]:
    m = _DATE_RE.match((date_str or "").strip())
    if not m:
        raise InvalidScheduleInput(f"date must be YYYY-MM-DD, got {date_str!r}")
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def parse_time(time_str: Optional[str]) -> tuple[int, int]:
    """HH:MM -> (hour, minute). Absent or blank means midnight."""
    if time_str is None or not time_str.strip():
        return 0, 0
    m = _TIME_RE.match(time_str.strip())
    if not m:
        raise InvalidScheduleInput(f"time must be HH:MM, got {time_str!r}")
    return int(m.group(1)), int(m.group(2))


def format_offset(offset_minutes: int) -> str:
    sign = "+" if offset_minutes >= 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def localize(year: int, month: int, day: int, hour: int = 0, minute: int = 0, tz: Optional[tzinfo] = None) -> datetime:
    """
    Aware datetime for that wall-clock moment in `tz` (process-local zone when None).

    Times skipped by a DST jump come out shifted forward, the same as the
    clock would read; repeated times take their first occurrence.
    """
    try:
        naive = datetime(year, month, day, hour, minute, 0)
    except ValueError as e:
        raise InvalidScheduleInput(str(e)) from e

    try:
        if tz is None:
            aware = naive.astimezone()
            return aware.astimezone(timezone.utc).astimezone()
        aware = naive.replace(tzinfo=tz, fold=0)
        return aware.astimezone(timezone.utc).astimezone(tz)
    except (OverflowError, OSError) as e:
        # the UTC equivalent falls outside year 1..9999
        raise InvalidScheduleInput(f"date out of supported range: {e}") from e


def encode_local_datetime(date_str: str, time_str: Optional[str] = None, tz: Optional[tzinfo] = None) -> str:
    """
    "2025-03-10", None    -> "2025-03-10T00:00:00+07:00"   (in a UTC+7 zone)
    "2025-06-15", "08:30" -> "2025-06-15T08:30:00+07:00"
    """
    year, month, day = parse_date(date_str)
    hour, minute = parse_time(time_str)
    local = localize(year, month, day, hour, minute, tz=tz)

    offset_minutes = int(local.utcoffset().total_seconds() // 60)
    return local.strftime("%Y-%m-%dT%H:%M:%S") + format_offset(offset_minutes)
