"""
Gap, first-fit and capacity calculations for a single time slot.

All functions take the slot as a ``TimeRange`` and the slot's bookings as a
list of ``TimeRange`` objects sorted by start time. Bookings are trusted to be
non-overlapping: overlap is enforced when assignments are written, so nothing
here re-validates it.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .time_range import (
    InvalidIntervalError,
    TimeRange,
    add_minutes,
    format_clock_time,
    minutes_between,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gap:
    """A contiguous free interval inside one slot."""

    start: Any
    end: Any
    duration_minutes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": format_clock_time(self.start),
            "end": format_clock_time(self.end),
            "duration_minutes": self.duration_minutes,
        }


@dataclass(frozen=True)
class NextAvailable:
    """The earliest window of a requested length that fits in a slot."""

    start: Any
    end: Any

    def to_dict(self) -> Dict[str, str]:
        return {
            "start": format_clock_time(self.start),
            "end": format_clock_time(self.end),
        }


@dataclass(frozen=True)
class Capacity:
    """Booked and free minutes for one slot, or for several slots combined."""

    total_minutes: int
    booked_minutes: int
    available_minutes: int
    has_capacity: bool
    gaps: List[Gap] = field(default_factory=list)
    slot_count: int = 1

    @property
    def utilization_percent(self) -> int:
        """Booked share of the total, rounded half up to a whole percent."""
        if self.total_minutes <= 0:
            return 0
        return int(self.booked_minutes * 100 / self.total_minutes + 0.5)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_minutes": self.total_minutes,
            "booked_minutes": self.booked_minutes,
            "available_minutes": self.available_minutes,
            "has_capacity": self.has_capacity,
            "utilization_percent": self.utilization_percent,
            "slot_count": self.slot_count,
            "gaps": [gap.to_dict() for gap in self.gaps],
        }


def find_gaps(slot: TimeRange, booked: Sequence[TimeRange]) -> List[Gap]:
    """
    Walk the bookings from the slot's opening time and collect the free
    intervals between them.

    With no bookings the whole slot is a single gap.
    """
    gaps = []
    cursor = slot.start

    for booking in booked:
        if cursor < booking.start:
            gaps.append(Gap(cursor, booking.start, minutes_between(cursor, booking.start)))
        cursor = max(cursor, booking.end)

    if cursor < slot.end:
        gaps.append(Gap(cursor, slot.end, minutes_between(cursor, slot.end)))

    return gaps


def first_fit(
    slot: TimeRange, booked: Sequence[TimeRange], duration_minutes: int
) -> Optional[NextAvailable]:
    """
    Find the earliest window of ``duration_minutes`` inside the slot.

    First-fit: the first gap long enough wins, even when a later gap would be
    a tighter fit.

    Returns:
        The window, or None when nothing fits

    Raises:
        InvalidIntervalError: for a non-positive duration
    """
    if duration_minutes is None or duration_minutes <= 0:
        raise InvalidIntervalError(
            f"Duration must be a positive number of minutes, got {duration_minutes!r}"
        )

    cursor = slot.start

    for booking in booked:
        try:
            candidate_end = add_minutes(cursor, duration_minutes)
        except InvalidIntervalError:
            return None

        if candidate_end <= booking.start:
            return NextAvailable(cursor, candidate_end)

        cursor = max(cursor, booking.end)

    try:
        candidate_end = add_minutes(cursor, duration_minutes)
    except InvalidIntervalError:
        return None

    if candidate_end <= slot.end:
        return NextAvailable(cursor, candidate_end)

    logger.debug("No %s minute window left in slot %s", duration_minutes, slot)
    return None


def summarize_capacity(slot: TimeRange, booked: Sequence[TimeRange]) -> Capacity:
    total = slot.duration_minutes
    booked_minutes = sum(booking.duration_minutes for booking in booked)
    available = total - booked_minutes

    return Capacity(
        total_minutes=total,
        booked_minutes=booked_minutes,
        available_minutes=available,
        has_capacity=available > 0,
        gaps=find_gaps(slot, booked),
    )


def combine_capacities(capacities: Iterable[Capacity]) -> Capacity:
    """
    Add up several slot capacities.

    Gap lists are concatenated in input order and never merged, even when two
    slots are back to back.
    """
    capacities = list(capacities)
    total = sum(c.total_minutes for c in capacities)
    booked_minutes = sum(c.booked_minutes for c in capacities)
    available = sum(c.available_minutes for c in capacities)

    gaps = []
    for capacity in capacities:
        gaps.extend(capacity.gaps)

    return Capacity(
        total_minutes=total,
        booked_minutes=booked_minutes,
        available_minutes=available,
        has_capacity=available > 0,
        gaps=gaps,
        slot_count=sum(c.slot_count for c in capacities),
    )
