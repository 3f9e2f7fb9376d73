import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q
from django.utils.translation import gettext_lazy as _

from algorithms.availability.time_range import TimeRange, format_clock_time, minutes_between
from apps.providersapp.enums import DayOfWeek, weekday_for_date


class ServiceProvider(models.Model):
    """A person or company that performs maintenance work"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="service_provider",
        verbose_name=_("User"),
        null=True,
        blank=True,
    )
    name = models.CharField(_("Name"), max_length=255)
    phone = models.CharField(_("Phone"), max_length=32, blank=True)
    is_available = models.BooleanField(_("Available"), default=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Service Provider")
        verbose_name_plural = _("Service Providers")
        ordering = ["name"]
        indexes = [models.Index(fields=["is_available"], name="provider_available_idx")]

    def __str__(self):
        return self.name

    def time_slots_for_day(self, day_of_week):
        """Active slots for one weekday, earliest first"""
        return self.time_slots.active().for_day(day_of_week)

    def is_available_on_date(self, date):
        """Check if provider has any active slot on the weekday of ``date``"""
        if not self.is_available:
            return False
        return self.time_slots_for_day(weekday_for_date(date)).exists()


class TimeSlotQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def for_day(self, day_of_week):
        return self.filter(day_of_week=day_of_week)

    def for_provider(self, service_provider_id):
        return self.filter(service_provider_id=service_provider_id)

    def find_by_ids(self, ids):
        return self.filter(id__in=list(ids))


class TimeSlot(models.Model):
    """
    A weekly recurring window in which a provider accepts work.

    Slots are maintained from the provider's admin profile; the scheduling
    engine only reads them.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    service_provider = models.ForeignKey(
        ServiceProvider,
        on_delete=models.CASCADE,
        related_name="time_slots",
        verbose_name=_("Service Provider"),
    )
    day_of_week = models.IntegerField(_("Day of Week"), choices=DayOfWeek.choices)
    start_time = models.TimeField(_("Start Time"))
    end_time = models.TimeField(_("End Time"))
    is_active = models.BooleanField(_("Active"), default=True)
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    objects = TimeSlotQuerySet.as_manager()

    class Meta:
        verbose_name = _("Time Slot")
        verbose_name_plural = _("Time Slots")
        ordering = ["day_of_week", "start_time"]
        indexes = [
            models.Index(
                fields=["service_provider", "day_of_week", "is_active"],
                name="timeslot_provider_day_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(start_time__lt=F("end_time")),
                name="timeslot_start_before_end",
            ),
        ]

    def __str__(self):
        return f"{self.service_provider} - {self.display_name}"

    def clean(self):
        super().clean()
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValidationError({"end_time": _("End time must be after start time.")})

    @property
    def day_name(self):
        return DayOfWeek(self.day_of_week).label

    @property
    def formatted_time_range(self):
        return (
            f"{format_clock_time(self.start_time, with_seconds=False)} - "
            f"{format_clock_time(self.end_time, with_seconds=False)}"
        )

    @property
    def display_name(self):
        return f"{self.day_name} {self.formatted_time_range}"

    @property
    def duration_minutes(self):
        return minutes_between(self.start_time, self.end_time)

    def as_time_range(self):
        return TimeRange.from_slot(self)

    def matches_date(self, date):
        """Check if this slot recurs on the weekday of ``date``"""
        return self.day_of_week == weekday_for_date(date)

    def get_availability_on(self, date, duration_minutes=None):
        """
        Summarize this slot's free time on a concrete date.

        Inactive slots and slots for another weekday report no availability.
        When ``duration_minutes`` is given, ``is_available`` means that many
        minutes are still free and ``next_available`` holds the earliest
        window of that length.

        Returns:
            dict with is_available, has_capacity, total_minutes,
            booked_minutes, available_minutes and next_available
        """
        from apps.providersapp.services.availability_service import AvailabilityService

        if not self.is_active or not self.matches_date(date):
            return {
                "is_available": False,
                "has_capacity": False,
                "total_minutes": 0,
                "booked_minutes": 0,
                "available_minutes": 0,
                "next_available": None,
            }

        service = AvailabilityService()
        capacity = service.get_slot_capacity(self, date)

        next_available = None
        if duration_minutes:
            is_available = capacity.available_minutes >= duration_minutes
            window = service.calculate_next_available_time(self, date, duration_minutes)
            next_available = window.to_dict() if window else None
        else:
            is_available = capacity.has_capacity

        return {
            "is_available": is_available,
            "has_capacity": capacity.has_capacity,
            "total_minutes": capacity.total_minutes,
            "booked_minutes": capacity.booked_minutes,
            "available_minutes": capacity.available_minutes,
            "next_available": next_available,
        }

    def is_available_on(self, date):
        return self.get_availability_on(date)["is_available"]
