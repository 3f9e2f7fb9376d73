"""
Availability calculation algorithms.

Framework-free building blocks for the scheduling engine:
- TimeRange: half-open clock-time ranges with weekday-aware overlap
- find_gaps / first_fit / summarize_capacity: per-slot free time math
- combine_capacities: aggregation across several slots
"""

from .capacity import (
    Capacity,
    Gap,
    NextAvailable,
    combine_capacities,
    find_gaps,
    first_fit,
    summarize_capacity,
)
from .time_range import (
    InvalidIntervalError,
    TimeRange,
    add_minutes,
    format_clock_time,
    minutes_between,
    parse_clock_time,
)

__all__ = [
    "Capacity",
    "Gap",
    "InvalidIntervalError",
    "NextAvailable",
    "TimeRange",
    "add_minutes",
    "combine_capacities",
    "find_gaps",
    "first_fit",
    "format_clock_time",
    "minutes_between",
    "parse_clock_time",
    "summarize_capacity",
]
