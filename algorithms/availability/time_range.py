"""
Clock-time interval primitives.

A ``TimeRange`` is a half-open ``[start, end)`` range of clock times inside a
single day, optionally pinned to a day of the week (0=Sunday .. 6=Saturday).
Everything here is pure: no database access, no "now".
"""

from datetime import time
from typing import Any, Optional, Union

SECONDS_PER_DAY = 24 * 60 * 60


class InvalidIntervalError(ValueError):
    """Raised for malformed clock times and empty or reversed ranges."""


def _to_seconds(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def _from_seconds(seconds: int) -> time:
    return time(seconds // 3600, (seconds % 3600) // 60, seconds % 60)


def parse_clock_time(value: Union[str, time]) -> time:
    """
    Parse ``"HH:MM:SS"`` or ``"HH:MM"`` into a second precision ``time``.

    ``time`` instances pass through with microseconds dropped.

    Raises:
        InvalidIntervalError: if the value is not a valid clock time
    """
    if isinstance(value, time):
        return value.replace(microsecond=0, tzinfo=None)

    if not isinstance(value, str):
        raise InvalidIntervalError(f"Cannot parse clock time from {value!r}")

    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise InvalidIntervalError(f"Invalid clock time {value!r}")

    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    try:
        return time(hour, minute, second)
    except ValueError as e:
        raise InvalidIntervalError(f"Invalid clock time {value!r}") from e


def format_clock_time(value: time, with_seconds: bool = True) -> str:
    """Format a clock time as ``"HH:MM:SS"`` or ``"HH:MM"``."""
    return value.strftime("%H:%M:%S" if with_seconds else "%H:%M")


def add_minutes(value: time, minutes: int) -> time:
    """
    Shift a clock time by a number of minutes.

    Clock arithmetic never wraps: a result outside the same day raises
    ``InvalidIntervalError``.
    """
    seconds = _to_seconds(value) + int(minutes) * 60
    if seconds < 0 or seconds >= SECONDS_PER_DAY:
        raise InvalidIntervalError(
            f"Adding {minutes} minutes to {format_clock_time(value)} leaves the day"
        )
    return _from_seconds(seconds)


def minutes_between(start: time, end: time) -> int:
    """Whole minutes from ``start`` to ``end``, truncating leftover seconds."""
    return (_to_seconds(end) - _to_seconds(start)) // 60


class TimeRange:
    """Represents a half-open clock-time range, optionally on a given weekday."""

    __slots__ = ("start", "end", "day_of_week")

    def __init__(
        self,
        start: Union[str, time],
        end: Union[str, time],
        day_of_week: Optional[int] = None,
    ):
        """
        Initialize a time range.

        Args:
            start: Start clock time
            end: End clock time, strictly after ``start``
            day_of_week: Optional weekday, 0=Sunday .. 6=Saturday

        Raises:
            InvalidIntervalError: if ``start >= end``
        """
        self.start = parse_clock_time(start)
        self.end = parse_clock_time(end)
        self.day_of_week = day_of_week

        if self.start >= self.end:
            raise InvalidIntervalError(
                f"Start {format_clock_time(self.start)} must be before "
                f"end {format_clock_time(self.end)}"
            )

    def __str__(self) -> str:
        return (
            f"{format_clock_time(self.start, with_seconds=False)} - "
            f"{format_clock_time(self.end, with_seconds=False)}"
        )

    def __repr__(self) -> str:
        return (
            f"TimeRange({format_clock_time(self.start)!r}, "
            f"{format_clock_time(self.end)!r}, day_of_week={self.day_of_week!r})"
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TimeRange):
            return NotImplemented
        return (self.start, self.end, self.day_of_week) == (
            other.start,
            other.end,
            other.day_of_week,
        )

    def __hash__(self) -> int:
        return hash((self.start, self.end, self.day_of_week))

    @property
    def duration_minutes(self) -> int:
        return minutes_between(self.start, self.end)

    def overlaps(self, other: "TimeRange") -> bool:
        """
        Check if this time range overlaps with another.

        Back-to-back ranges (``self.end == other.start``) do not overlap, and
        ranges pinned to different weekdays never do.
        """
        if (
            self.day_of_week is not None
            and other.day_of_week is not None
            and self.day_of_week != other.day_of_week
        ):
            return False
        return self.start < other.end and self.end > other.start

    def contains(self, point: time) -> bool:
        """Check if a clock time falls inside ``[start, end)``."""
        return self.start <= point < self.end

    def contains_range(self, other: "TimeRange") -> bool:
        """Check if this time range fully contains another range."""
        return self.start <= other.start and self.end >= other.end

    @classmethod
    def from_slot(cls, slot: Any) -> "TimeRange":
        """Build a weekday-pinned range from anything shaped like a time slot."""
        return cls(slot.start_time, slot.end_time, day_of_week=slot.day_of_week)

    @classmethod
    def from_assignment(cls, assignment: Any) -> Optional["TimeRange"]:
        """
        Build the range an assignment occupies.

        Returns None for assignments that have not been given start and end
        times yet.
        """
        if assignment.assigned_start_time is None or assignment.assigned_end_time is None:
            return None
        return cls(assignment.assigned_start_time, assignment.assigned_end_time)
