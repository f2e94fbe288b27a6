from __future__ import annotations

from datetime import datetime, time

SECONDS_PER_DAY = 24 * 3600


def seconds_since_midnight(value: time | datetime) -> int:
    # Time-of-day only; any date component is ignored.
    return value.hour * 3600 + value.minute * 60 + value.second


def time_from_seconds(seconds: int) -> time:
    """Convert service-day seconds into a time of day.

    Values of 24h or more wrap around midnight; there is no date rollover.
    """

    s = int(seconds) % SECONDS_PER_DAY
    return time(hour=s // 3600, minute=(s % 3600) // 60, second=s % 60)


def parse_time_of_day(raw: str | time | datetime) -> time:
    """Accept ``HH:MM`` or ``HH:MM:SS`` (or an existing ``time``/``datetime``).

    A ``datetime`` contributes its time of day only.
    """

    if isinstance(raw, datetime):
        return raw.time()
    if isinstance(raw, time):
        return raw
    if not isinstance(raw, str):
        raise TypeError(f"Expected a time of day, got {type(raw).__name__}")
    parts = raw.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time of day: {raw!r}")
    try:
        hh, mm = int(parts[0]), int(parts[1])
        ss = int(parts[2]) if len(parts) == 3 else 0
        return time(hour=hh, minute=mm, second=ss)
    except ValueError as exc:
        raise ValueError(f"Invalid time of day: {raw!r}") from exc


def format_seconds(seconds: int) -> str:
    t = time_from_seconds(seconds)
    return t.strftime("%H:%M:%S")
