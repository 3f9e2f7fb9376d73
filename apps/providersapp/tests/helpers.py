from datetime import date, time

from django.contrib.auth.models import User

from apps.assignmentsapp.models import Assignment
from apps.providersapp.models import ServiceProvider, TimeSlot

# 2024-01-07 is a Sunday (weekday 0), 2024-01-08 a Monday (weekday 1)
SUNDAY = date(2024, 1, 7)
MONDAY = date(2024, 1, 8)


def create_staff_user(username="admin"):
    return User.objects.create_user(username=username, password="testpass123", is_staff=True)


def create_provider(name="Test Provider", user=None, **kwargs):
    return ServiceProvider.objects.create(name=name, user=user, **kwargs)


def create_slot(provider, start, end, day_of_week=0, is_active=True):
    """Create a weekly slot; ``start``/``end`` are (hour, minute) tuples"""
    return TimeSlot.objects.create(
        service_provider=provider,
        day_of_week=day_of_week,
        start_time=time(*start),
        end_time=time(*end),
        is_active=is_active,
    )


def create_assignment(provider, slots, scheduled_date=SUNDAY, start=None, end=None, **kwargs):
    """
    Create an assignment directly, bypassing the scheduling checks, so tests
    can arrange any calendar they need.
    """
    assignment = Assignment.objects.create(
        service_provider=provider,
        scheduled_date=scheduled_date,
        assigned_start_time=time(*start) if start else None,
        assigned_end_time=time(*end) if end else None,
        **kwargs,
    )
    assignment.time_slots.set(slots)
    return assignment
