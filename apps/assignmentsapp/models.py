import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import F, Q, Sum
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from algorithms.availability.time_range import TimeRange
from apps.assignmentsapp.constants import MAX_EXTENSION_MINUTES, MIN_EXTENSION_MINUTES
from apps.assignmentsapp.enums import AssignmentStatus, ExtensionStatus
from apps.providersapp.models import ServiceProvider, TimeSlot
from core.exceptions import InvalidStateTransitionError


class AssignmentQuerySet(models.QuerySet):
    def find_active(self, service_provider_id, scheduled_date):
        """Assignments still occupying the provider's calendar on a date"""
        return self.filter(
            service_provider_id=service_provider_id, scheduled_date=scheduled_date
        ).exclude(status=AssignmentStatus.COMPLETED)

    def excluding(self, assignment_id):
        if assignment_id is None:
            return self
        return self.exclude(id=assignment_id)

    def time_boxed(self):
        return self.filter(
            assigned_start_time__isnull=False, assigned_end_time__isnull=False
        )

    def for_slot(self, time_slot_id):
        return self.filter(time_slots__id=time_slot_id)

    def for_any_slot(self, time_slot_ids):
        return self.filter(time_slots__id__in=list(time_slot_ids)).distinct()


class Assignment(models.Model):
    """
    A unit of work bound to one provider, a calendar date and one or more of
    the provider's weekly time slots.

    ``assigned_start_time``/``assigned_end_time`` stay empty until the work is
    time-boxed; until then the assignment only occupies its slots.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    service_provider = models.ForeignKey(
        ServiceProvider,
        on_delete=models.CASCADE,
        related_name="assignments",
        verbose_name=_("Service Provider"),
    )
    title = models.CharField(_("Title"), max_length=255, blank=True)
    time_slots = models.ManyToManyField(
        TimeSlot,
        related_name="assignments",
        verbose_name=_("Time Slots"),
        blank=True,
    )
    scheduled_date = models.DateField(_("Scheduled Date"))
    scheduled_end_date = models.DateField(_("Scheduled End Date"), null=True, blank=True)
    assigned_start_time = models.TimeField(_("Assigned Start Time"), null=True, blank=True)
    assigned_end_time = models.TimeField(_("Assigned End Time"), null=True, blank=True)
    allocated_duration_minutes = models.PositiveIntegerField(
        _("Allocated Duration (minutes)"), null=True, blank=True
    )
    status = models.CharField(
        _("Status"),
        max_length=20,
        choices=AssignmentStatus.choices,
        default=AssignmentStatus.ASSIGNED,
    )
    started_at = models.DateTimeField(_("Started At"), null=True, blank=True)
    held_at = models.DateTimeField(_("Held At"), null=True, blank=True)
    resumed_at = models.DateTimeField(_("Resumed At"), null=True, blank=True)
    finished_at = models.DateTimeField(_("Finished At"), null=True, blank=True)
    completed_at = models.DateTimeField(_("Completed At"), null=True, blank=True)
    notes = models.TextField(_("Notes"), blank=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    objects = AssignmentQuerySet.as_manager()

    class Meta:
        verbose_name = _("Assignment")
        verbose_name_plural = _("Assignments")
        ordering = ["scheduled_date", "assigned_start_time"]
        indexes = [
            models.Index(
                fields=["service_provider", "scheduled_date", "status"],
                name="assignment_provider_date_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(assigned_start_time__isnull=True)
                    | Q(assigned_end_time__isnull=True)
                    | Q(assigned_start_time__lt=F("assigned_end_time"))
                ),
                name="assignment_start_before_end",
            ),
        ]

    def __str__(self):
        return f"{self.title or self.pk} ({self.service_provider}, {self.scheduled_date})"

    def clean(self):
        super().clean()
        if (self.assigned_start_time is None) != (self.assigned_end_time is None):
            raise ValidationError(
                _("Assigned start and end time must be set together.")
            )
        if self.is_time_boxed and self.assigned_start_time >= self.assigned_end_time:
            raise ValidationError(
                {"assigned_end_time": _("End time must be after start time.")}
            )
        if self.scheduled_end_date and self.scheduled_end_date < self.scheduled_date:
            raise ValidationError(
                {"scheduled_end_date": _("End date cannot be before the scheduled date.")}
            )

    @property
    def time_slot_ids(self):
        if self._state.adding:
            return []
        return [slot.pk for slot in self.time_slots.all()]

    @property
    def is_time_boxed(self):
        return self.assigned_start_time is not None and self.assigned_end_time is not None

    def as_time_range(self):
        return TimeRange.from_assignment(self)

    def get_check_date(self):
        """Date the assignment's end time falls on"""
        return self.scheduled_end_date or self.scheduled_date

    def is_multi_day(self):
        return bool(self.scheduled_end_date) and self.scheduled_end_date != self.scheduled_date

    def get_span_days(self):
        if not self.scheduled_end_date:
            return 1
        return (self.scheduled_end_date - self.scheduled_date).days + 1

    def get_time_range_bounds(self):
        """Earliest start to latest end over the assignment's slots, or None"""
        slots = list(self.time_slots.all())
        if not slots:
            return None
        return TimeRange(
            min(slot.start_time for slot in slots),
            max(slot.end_time for slot in slots),
        )

    def get_total_slot_minutes(self):
        return sum(slot.duration_minutes for slot in self.time_slots.all())

    def get_actual_duration_minutes(self):
        if not self.started_at or not self.finished_at:
            return None
        return int((self.finished_at - self.started_at).total_seconds() // 60)

    def get_total_approved_extension_minutes(self):
        total = self.extension_requests.approved().aggregate(
            total=Sum("requested_minutes")
        )["total"]
        return total or 0

    def get_total_allowed_duration_minutes(self):
        if not self.allocated_duration_minutes:
            return None
        return self.allocated_duration_minutes + self.get_total_approved_extension_minutes()

    def get_overtime_minutes(self):
        """Actual minus allowed minutes; negative when finished early"""
        actual = self.get_actual_duration_minutes()
        allowed = self.get_total_allowed_duration_minutes()
        if actual is None or allowed is None:
            return None
        return actual - allowed

    def has_pending_extension_request(self):
        return self.extension_requests.pending().exists()

    def can_request_extension(self):
        return (
            self.status == AssignmentStatus.IN_PROGRESS
            and not self.has_pending_extension_request()
        )

    def get_time_tracking_data(self):
        return {
            "allocated_minutes": self.allocated_duration_minutes,
            "approved_extension_minutes": self.get_total_approved_extension_minutes(),
            "total_allowed_minutes": self.get_total_allowed_duration_minutes(),
            "actual_minutes": self.get_actual_duration_minutes(),
            "overtime_minutes": self.get_overtime_minutes(),
            "has_pending_extension": self.has_pending_extension_request(),
            "can_request_extension": self.can_request_extension(),
        }

    # Status transitions

    def can_start(self):
        return self.status == AssignmentStatus.ASSIGNED

    def can_hold(self):
        return self.status == AssignmentStatus.IN_PROGRESS

    def can_resume(self):
        return self.status == AssignmentStatus.ON_HOLD

    def can_finish(self):
        return self.status == AssignmentStatus.IN_PROGRESS

    def can_complete(self):
        return self.status == AssignmentStatus.FINISHED

    def _transition(self, allowed, new_status, timestamp_field):
        if not allowed:
            raise InvalidStateTransitionError(
                detail={"status": self.status, "target_status": new_status}
            )
        self.status = new_status
        setattr(self, timestamp_field, timezone.now())
        self.save(update_fields=["status", timestamp_field, "updated_at"])

    def start(self):
        self._transition(self.can_start(), AssignmentStatus.IN_PROGRESS, "started_at")

    def hold(self):
        self._transition(self.can_hold(), AssignmentStatus.ON_HOLD, "held_at")

    def resume(self):
        self._transition(self.can_resume(), AssignmentStatus.IN_PROGRESS, "resumed_at")

    def finish(self):
        self._transition(self.can_finish(), AssignmentStatus.FINISHED, "finished_at")

    def complete(self):
        """Approve finished work; the assignment stops occupying its slots"""
        self._transition(self.can_complete(), AssignmentStatus.COMPLETED, "completed_at")


class TimeExtensionRequestQuerySet(models.QuerySet):
    def pending(self):
        return self.filter(status=ExtensionStatus.PENDING)

    def approved(self):
        return self.filter(status=ExtensionStatus.APPROVED)

    def for_assignment(self, assignment_id):
        return self.filter(assignment_id=assignment_id)


class TimeExtensionRequest(models.Model):
    """A provider's request to push an assignment's end time later"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    assignment = models.ForeignKey(
        Assignment,
        on_delete=models.CASCADE,
        related_name="extension_requests",
        verbose_name=_("Assignment"),
    )
    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="requested_extensions",
        verbose_name=_("Requested By"),
        null=True,
        blank=True,
    )
    requested_minutes = models.PositiveIntegerField(
        _("Requested Minutes"),
        validators=[
            MinValueValidator(MIN_EXTENSION_MINUTES),
            MaxValueValidator(MAX_EXTENSION_MINUTES),
        ],
    )
    reason = models.TextField(_("Reason"))
    status = models.CharField(
        _("Status"),
        max_length=20,
        choices=ExtensionStatus.choices,
        default=ExtensionStatus.PENDING,
    )
    responded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="responded_extensions",
        verbose_name=_("Responded By"),
        null=True,
        blank=True,
    )
    admin_notes = models.TextField(_("Admin Notes"), blank=True)
    requested_at = models.DateTimeField(_("Requested At"), default=timezone.now)
    responded_at = models.DateTimeField(_("Responded At"), null=True, blank=True)

    objects = TimeExtensionRequestQuerySet.as_manager()

    class Meta:
        verbose_name = _("Time Extension Request")
        verbose_name_plural = _("Time Extension Requests")
        ordering = ["-requested_at"]
        indexes = [models.Index(fields=["status", "requested_at"], name="extension_status_idx")]

    def __str__(self):
        return f"+{self.requested_minutes} min for {self.assignment_id} ({self.status})"

    def is_pending(self):
        return self.status == ExtensionStatus.PENDING

    def can_be_approved(self):
        return self.is_pending()

    def can_be_rejected(self):
        return self.is_pending()
