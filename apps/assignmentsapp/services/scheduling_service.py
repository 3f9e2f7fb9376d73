import logging
import uuid

from django.db import transaction
from django.utils.translation import gettext_lazy as _

from algorithms.availability.time_range import TimeRange, format_clock_time
from apps.assignmentsapp.constants import SLOT_CONFLICT_MESSAGE, TIME_WINDOW_CONFLICT_MESSAGE
from apps.assignmentsapp.models import Assignment
from apps.providersapp.enums import weekday_for_date
from apps.providersapp.models import TimeSlot
from apps.providersapp.services.availability_service import AvailabilityService
from core.exceptions import (
    InvalidStateTransitionError,
    SchedulingConflictError,
    ValidationError,
)
from utils.distributed_locks import schedule_lock

logger = logging.getLogger(__name__)


class AssignmentSchedulingService:
    """Creates assignments and edits their time windows without double booking"""

    @staticmethod
    def _load_slots(service_provider, scheduled_date, time_slot_ids):
        try:
            time_slot_ids = list(dict.fromkeys(uuid.UUID(str(i)) for i in time_slot_ids))
        except ValueError as e:
            raise ValidationError(_("Invalid time slot id."), detail={"error": str(e)}) from e

        if not time_slot_ids:
            raise ValidationError(_("At least one time slot must be selected."))

        slots = list(
            TimeSlot.objects.for_provider(service_provider.pk)
            .find_by_ids(time_slot_ids)
            .order_by("start_time")
        )

        found = {slot.pk for slot in slots}
        missing = [str(slot_id) for slot_id in time_slot_ids if slot_id not in found]
        if missing:
            raise ValidationError(
                _("Some time slots do not belong to this service provider."),
                detail={"time_slot_ids": missing},
            )

        weekday = weekday_for_date(scheduled_date)
        unusable = [
            str(slot.pk)
            for slot in slots
            if not slot.is_active or slot.day_of_week != weekday
        ]
        if unusable:
            raise ValidationError(
                _("Time slots must be active and fall on the weekday of the scheduled date."),
                detail={"time_slot_ids": unusable},
            )

        return slots

    @staticmethod
    def _bounds(slots):
        return TimeRange(
            min(slot.start_time for slot in slots),
            max(slot.end_time for slot in slots),
        )

    def schedule_assignment(
        self,
        service_provider,
        scheduled_date,
        time_slot_ids,
        assigned_start_time=None,
        assigned_end_time=None,
        allocated_duration_minutes=None,
        scheduled_end_date=None,
        title="",
        notes="",
        exclude_assignment_id=None,
    ):
        """
        Book a provider's slots on a date.

        Without an explicit time window the assignment gets the full combined
        range of its slots. An explicit window must lie inside that range.

        Args:
            service_provider: ServiceProvider to book
            scheduled_date: Calendar date of the work
            time_slot_ids: IDs of the provider's slots to occupy
            assigned_start_time / assigned_end_time: Optional manual window
            allocated_duration_minutes: Expected work length, must fit in the slots
            scheduled_end_date: Last day for work spanning several days
            exclude_assignment_id: Assignment being replaced (re-assignment)

        Returns:
            The created Assignment

        Raises:
            ValidationError: for unusable slots or windows
            SchedulingConflictError: if the slots collide with other work
            ScheduleLockError: if the provider's schedule is busy
        """
        slots = self._load_slots(service_provider, scheduled_date, time_slot_ids)
        bounds = self._bounds(slots)

        if (assigned_start_time is None) != (assigned_end_time is None):
            raise ValidationError(_("Assigned start and end time must be set together."))

        if assigned_start_time is not None:
            window = TimeRange(assigned_start_time, assigned_end_time)
            if not bounds.contains_range(window):
                raise ValidationError(
                    _("The assigned time must fall within {start} - {end}.").format(
                        start=format_clock_time(bounds.start, with_seconds=False),
                        end=format_clock_time(bounds.end, with_seconds=False),
                    )
                )
        else:
            window = bounds

        total_slot_minutes = sum(slot.duration_minutes for slot in slots)
        if allocated_duration_minutes and total_slot_minutes < allocated_duration_minutes:
            raise ValidationError(
                _(
                    "The selected slots offer {slot_minutes} minutes but "
                    "{required_minutes} are required."
                ).format(
                    slot_minutes=total_slot_minutes,
                    required_minutes=allocated_duration_minutes,
                ),
                detail={
                    "slot_minutes": total_slot_minutes,
                    "required_minutes": allocated_duration_minutes,
                },
            )

        if scheduled_end_date and scheduled_end_date < scheduled_date:
            raise ValidationError(_("End date cannot be before the scheduled date."))

        slot_ids = [slot.pk for slot in slots]

        with schedule_lock(service_provider.pk, scheduled_date), transaction.atomic():
            availability = AvailabilityService()
            if availability.has_multi_slot_overlap(
                service_provider.pk, scheduled_date, slot_ids, exclude_assignment_id
            ):
                raise SchedulingConflictError(
                    SLOT_CONFLICT_MESSAGE,
                    detail={"time_slot_ids": [str(slot_id) for slot_id in slot_ids]},
                )

            assignment = Assignment.objects.create(
                service_provider=service_provider,
                title=title,
                scheduled_date=scheduled_date,
                scheduled_end_date=scheduled_end_date or scheduled_date,
                assigned_start_time=window.start,
                assigned_end_time=window.end,
                allocated_duration_minutes=allocated_duration_minutes,
                notes=notes,
            )
            assignment.time_slots.set(slots)

        logger.info(
            "Scheduled assignment %s for provider %s on %s at %s",
            assignment.pk,
            service_provider.pk,
            scheduled_date,
            window,
        )
        return assignment

    def update_time_window(self, assignment, assigned_start_time, assigned_end_time):
        """
        Move an assignment's time window, guarded by the fine-grained overlap
        check that ignores the assignment itself.

        Raises:
            InvalidStateTransitionError: once work has started
            ValidationError: if the window leaves the assignment's slots
            SchedulingConflictError: if the window collides with other work
        """
        window = TimeRange(assigned_start_time, assigned_end_time)

        with schedule_lock(assignment.service_provider_id, assignment.scheduled_date):
            with transaction.atomic():
                locked = Assignment.objects.select_for_update().get(pk=assignment.pk)

                if not locked.can_start():
                    raise InvalidStateTransitionError(
                        _("Only assignments that have not started can be rescheduled."),
                        detail={"status": locked.status},
                    )

                bounds = locked.get_time_range_bounds()
                if bounds is not None and not bounds.contains_range(window):
                    raise ValidationError(
                        _("The assigned time must fall within {start} - {end}.").format(
                            start=format_clock_time(bounds.start, with_seconds=False),
                            end=format_clock_time(bounds.end, with_seconds=False),
                        )
                    )

                availability = AvailabilityService()
                if availability.has_overlap(
                    locked.service_provider_id,
                    locked.scheduled_date,
                    window.start,
                    window.end,
                    exclude_assignment_id=locked.pk,
                ):
                    raise SchedulingConflictError(TIME_WINDOW_CONFLICT_MESSAGE)

                locked.assigned_start_time = window.start
                locked.assigned_end_time = window.end
                locked.save(
                    update_fields=["assigned_start_time", "assigned_end_time", "updated_at"]
                )

        logger.info("Moved assignment %s to %s", locked.pk, window)
        return locked
