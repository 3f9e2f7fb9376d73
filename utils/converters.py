"""
Data type conversion utilities for FacilityHub.

Used by the API layer to turn path and query string values into the types the
scheduling services expect.
"""

import datetime
from typing import Any, Optional

from django.utils.dateparse import parse_date, parse_datetime


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """
    Convert a value to integer.

    Args:
        value: Input value
        default: Default value if conversion fails

    Returns:
        Integer or default if conversion fails
    """
    if value is None or value == "":
        return default

    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def to_date(value: Any) -> Optional[datetime.date]:
    """
    Convert a value to date.

    Args:
        value: Input value (string, date object, etc.)

    Returns:
        Date object or None if conversion fails
    """
    if value is None:
        return None

    # datetime is a date subclass, check it first
    if isinstance(value, datetime.datetime):
        return value.date()

    if isinstance(value, datetime.date):
        return value

    if isinstance(value, str):
        try:
            parsed = parse_date(value)
            if parsed:
                return parsed

            parsed = parse_datetime(value)
            if parsed:
                return parsed.date()
        except ValueError:
            pass

    return None
