"""Millisecond-of-day time arithmetic and HH:MM:SS.mmm conversion."""

from __future__ import annotations


def add_hours(update: int, time: int) -> int:
    return time + update * 3600000


def add_minutes(update: int, time: int) -> int:
    return time + update * 60000


def add_seconds(update: int, time: int) -> int:
    return time + update * 1000


def add_millis(update: int, time: int) -> int:
    return time + update


def string_to_time(text: str) -> int:
    """Parse ``HH:MM:SS.mmm`` into milliseconds since midnight."""
    hour = int(text[0:2])
    minute = int(text[3:5])
    second = int(text[6:8])
    millis = int(text[9:12])
    return add_hours(hour, add_minutes(minute, add_seconds(second, add_millis(millis, 0))))


def time_to_string(t: int) -> str:
    """Format milliseconds since midnight; the millisecond part is not zero-padded."""
    t, millis = divmod(t, 1000)
    t, second = divmod(t, 60)
    hour, minute = divmod(t, 60)
    return f"{hour:02d}:{minute:02d}:{second:02d}.{millis}"