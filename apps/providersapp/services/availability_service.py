"""
Availability engine for provider time slots.

Answers the questions every scheduling workflow asks before it writes: does a
time window collide with existing work, where are the free gaps inside a
slot, and how much capacity is left. The engine never writes; callers hold
the schedule lock and do the mutation themselves.

An instance memoizes the assignment lists it fetches. Create one per request
or transaction and do not share it.
"""

import logging
from datetime import timedelta

from algorithms.availability.capacity import (
    combine_capacities,
    find_gaps,
    first_fit,
    summarize_capacity,
)
from algorithms.availability.time_range import (
    InvalidIntervalError,
    TimeRange,
    format_clock_time,
)
from apps.assignmentsapp.models import Assignment
from apps.providersapp.constants import AUTO_SELECT_MAX_DAYS
from apps.providersapp.enums import weekday_for_date
from apps.providersapp.models import TimeSlot

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Read-only overlap, gap and capacity calculations"""

    def __init__(self):
        self._assignments_cache = {}

    def clear_cache(self):
        self._assignments_cache.clear()

    def has_overlap(
        self,
        service_provider_id,
        scheduled_date,
        start_time,
        end_time,
        exclude_assignment_id=None,
    ):
        """
        Check a candidate time window against the provider's time-boxed work
        on a date.

        Completed assignments and assignments without start and end times are
        ignored. Back-to-back windows do not conflict.

        Raises:
            InvalidIntervalError: if ``start_time`` is not before ``end_time``
        """
        candidate = TimeRange(start_time, end_time)

        conflict = (
            Assignment.objects.find_active(service_provider_id, scheduled_date)
            .time_boxed()
            .excluding(exclude_assignment_id)
            .filter(
                assigned_start_time__lt=candidate.end,
                assigned_end_time__gt=candidate.start,
            )
            .exists()
        )

        if conflict:
            logger.info(
                "Overlap for provider %s on %s at %s",
                service_provider_id,
                scheduled_date,
                candidate,
            )
        return conflict

    def get_existing_assignments(
        self, time_slot, scheduled_date, exclude_assignment_id=None, service_provider_id=None
    ):
        """
        Time-boxed, non-completed assignments occupying ``time_slot`` on a
        date, ordered by start time.
        """
        if service_provider_id is None:
            service_provider_id = time_slot.service_provider_id

        key = (service_provider_id, scheduled_date, time_slot.pk, exclude_assignment_id)
        if key not in self._assignments_cache:
            logger.debug(
                "Fetching assignments for slot %s on %s (excluding %s)",
                time_slot.pk,
                scheduled_date,
                exclude_assignment_id,
            )
            self._assignments_cache[key] = list(
                Assignment.objects.find_active(service_provider_id, scheduled_date)
                .time_boxed()
                .excluding(exclude_assignment_id)
                .for_slot(time_slot.pk)
                .order_by("assigned_start_time")
            )
        return self._assignments_cache[key]

    def _booked_ranges(self, time_slot, scheduled_date, exclude_assignment_id=None, **kwargs):
        return [
            TimeRange.from_assignment(assignment)
            for assignment in self.get_existing_assignments(
                time_slot, scheduled_date, exclude_assignment_id, **kwargs
            )
        ]

    def calculate_next_available_time(
        self, time_slot, scheduled_date, duration_minutes, exclude_assignment_id=None
    ):
        """
        Earliest window of ``duration_minutes`` inside the slot (first fit).

        Returns:
            NextAvailable, or None when the slot has no gap that long
        """
        return first_fit(
            time_slot.as_time_range(),
            self._booked_ranges(time_slot, scheduled_date, exclude_assignment_id),
            duration_minutes,
        )

    def get_slot_capacity(self, time_slot, scheduled_date, exclude_assignment_id=None, **kwargs):
        return summarize_capacity(
            time_slot.as_time_range(),
            self._booked_ranges(time_slot, scheduled_date, exclude_assignment_id, **kwargs),
        )

    def find_available_gaps(self, time_slot, scheduled_date, exclude_assignment_id=None):
        return find_gaps(
            time_slot.as_time_range(),
            self._booked_ranges(time_slot, scheduled_date, exclude_assignment_id),
        )

    def has_multi_slot_overlap(
        self,
        service_provider_id,
        scheduled_date,
        time_slot_ids,
        exclude_assignment_id=None,
    ):
        """
        Slot-granularity conflict test for work spanning several slots.

        Compares the clock ranges of the candidate slots against the slots
        every other non-completed assignment occupies on that date. Assigned
        start and end times are ignored here, so assignments that were never
        time-boxed still block.
        """
        candidates = [
            slot.as_time_range() for slot in TimeSlot.objects.find_by_ids(time_slot_ids)
        ]
        if not candidates:
            return False

        existing = (
            Assignment.objects.find_active(service_provider_id, scheduled_date)
            .excluding(exclude_assignment_id)
            .prefetch_related("time_slots")
        )

        for assignment in existing:
            for occupied_slot in assignment.time_slots.all():
                occupied = occupied_slot.as_time_range()
                for candidate in candidates:
                    if candidate.overlaps(occupied):
                        logger.info(
                            "Slot overlap for provider %s on %s: %s collides with "
                            "assignment %s",
                            service_provider_id,
                            scheduled_date,
                            candidate,
                            assignment.pk,
                        )
                        return True
        return False

    def get_multi_slot_capacity(self, time_slots, service_provider_id, scheduled_date):
        """
        Capacity over several slots.

        Each slot is measured on its own and the gap lists are concatenated,
        never merged across slot boundaries.
        """
        return combine_capacities(
            self.get_slot_capacity(
                slot, scheduled_date, service_provider_id=service_provider_id
            )
            for slot in time_slots
        )

    def get_provider_day_availability(
        self, service_provider, date, min_duration_minutes=None
    ):
        """
        Per-slot availability of a provider on one date.

        Slots that cannot fit ``min_duration_minutes`` are left out.

        Returns:
            List of dicts, one per active slot on that weekday
        """
        slots = service_provider.time_slots_for_day(weekday_for_date(date))
        results = []

        for slot in slots:
            capacity = self.get_slot_capacity(slot, date)

            if min_duration_minutes:
                if capacity.available_minutes < min_duration_minutes:
                    continue
                is_available = True
            else:
                is_available = capacity.has_capacity

            entry = {
                "time_slot_id": str(slot.pk),
                "day_of_week": slot.day_of_week,
                "day_name": str(slot.day_name),
                "start_time": format_clock_time(slot.start_time),
                "end_time": format_clock_time(slot.end_time),
                "display_name": str(slot.display_name),
                "duration_minutes": slot.duration_minutes,
                "is_available": is_available,
                "has_capacity": capacity.has_capacity,
                "total_minutes": capacity.total_minutes,
                "booked_minutes": capacity.booked_minutes,
                "available_minutes": capacity.available_minutes,
                "utilization_percent": capacity.utilization_percent,
                "gaps": [gap.to_dict() for gap in capacity.gaps],
            }

            if min_duration_minutes:
                window = self.calculate_next_available_time(slot, date, min_duration_minutes)
                entry["next_available"] = window.to_dict() if window else None

            results.append(entry)

        return results

    def auto_select_slots(
        self, service_provider, start_date, duration_minutes, max_days=AUTO_SELECT_MAX_DAYS
    ):
        """
        Pick slots for ``duration_minutes`` of work, starting on ``start_date``
        and moving forward one day at a time.

        Each day's active slots are taken earliest first. A slot contributes
        ``min(available, still needed)`` minutes, placed at its first-fit
        window; fully booked slots and slots whose free time is too
        fragmented for that window are skipped. The walk stops once the
        duration is covered or after ``max_days`` days.

        Returns:
            dict with the picked slots, the combined window and whether the
            duration was covered
        """
        if duration_minutes is None or duration_minutes <= 0:
            raise InvalidIntervalError(
                f"Duration must be a positive number of minutes, got {duration_minutes!r}"
            )

        slots_by_day = {}
        for slot in service_provider.time_slots.active().order_by("start_time"):
            slots_by_day.setdefault(slot.day_of_week, []).append(slot)

        selected = []
        accumulated = 0
        days_processed = 0
        current_date = start_date
        last_date = start_date

        while accumulated < duration_minutes and days_processed < max_days:
            days_processed += 1

            for slot in slots_by_day.get(weekday_for_date(current_date), []):
                capacity = self.get_slot_capacity(slot, current_date)
                if capacity.available_minutes <= 0:
                    continue

                minutes = min(capacity.available_minutes, duration_minutes - accumulated)
                window = self.calculate_next_available_time(slot, current_date, minutes)
                if window is None:
                    continue

                selected.append((slot, current_date, window, minutes))
                accumulated += minutes
                last_date = current_date

                if accumulated >= duration_minutes:
                    break

            current_date += timedelta(days=1)

        time_slot_ids = []
        for slot, _date, _window, _minutes in selected:
            if str(slot.pk) not in time_slot_ids:
                time_slot_ids.append(str(slot.pk))

        assigned_start = assigned_end = scheduled_end_date = None
        if selected:
            assigned_start = min(window.start for _s, _d, window, _m in selected)
            assigned_end = max(window.end for _s, _d, window, _m in selected)
            dates = {picked_date for _s, picked_date, _w, _m in selected}
            if len(dates) > 1:
                scheduled_end_date = max(dates)

        span_days = (last_date - start_date).days + 1
        is_sufficient = accumulated >= duration_minutes

        if not is_sufficient:
            logger.info(
                "Auto-selection for provider %s from %s covered %s of %s minutes",
                service_provider.pk,
                start_date,
                accumulated,
                duration_minutes,
            )

        return {
            "start_date": start_date.isoformat(),
            "end_date": scheduled_end_date.isoformat() if scheduled_end_date else None,
            "is_multi_day": span_days > 1,
            "span_days": span_days,
            "requested_duration_minutes": duration_minutes,
            "accumulated_minutes": accumulated,
            "is_sufficient": is_sufficient,
            "shortfall_minutes": 0 if is_sufficient else duration_minutes - accumulated,
            "time_slot_ids": time_slot_ids,
            "assigned_start_time": format_clock_time(assigned_start) if selected else None,
            "assigned_end_time": format_clock_time(assigned_end) if selected else None,
            "selected_slots": [
                {
                    "time_slot_id": str(slot.pk),
                    "date": picked_date.isoformat(),
                    "day_name": str(slot.day_name),
                    "display_name": str(slot.display_name),
                    "start_time": format_clock_time(window.start),
                    "end_time": format_clock_time(window.end),
                    "minutes": minutes,
                }
                for slot, picked_date, window, minutes in selected
            ],
            "days_processed": days_processed,
        }
