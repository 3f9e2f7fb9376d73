from datetime import date, time, timedelta

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from algorithms.availability import TimeRange
from apps.assignmentsapp.enums import AssignmentStatus, ExtensionStatus
from apps.assignmentsapp.models import Assignment, TimeExtensionRequest
from apps.providersapp.tests.helpers import (
    SUNDAY,
    create_assignment,
    create_provider,
    create_slot,
)
from core.exceptions import InvalidStateTransitionError


class AssignmentModelTest(TestCase):
    """Test cases for the Assignment model"""

    def setUp(self):
        self.provider = create_provider()
        self.morning = create_slot(self.provider, (8, 0), (12, 0))
        self.afternoon = create_slot(self.provider, (13, 0), (16, 0))
        self.assignment = create_assignment(
            self.provider,
            [self.morning, self.afternoon],
            start=(9, 0),
            end=(11, 0),
            title="Replace boiler",
            allocated_duration_minutes=120,
        )

    def test_slot_helpers(self):
        self.assertEqual(
            set(self.assignment.time_slot_ids), {self.morning.pk, self.afternoon.pk}
        )
        self.assertEqual(self.assignment.get_time_range_bounds(), TimeRange("08:00", "16:00"))
        self.assertEqual(self.assignment.get_total_slot_minutes(), 420)
        self.assertEqual(self.assignment.as_time_range(), TimeRange("09:00", "11:00"))

    def test_unsaved_assignment_has_no_slots(self):
        self.assertEqual(
            Assignment(service_provider=self.provider, scheduled_date=SUNDAY).time_slot_ids, []
        )

    def test_assignment_without_slots_has_no_bounds(self):
        bare = create_assignment(self.provider, [])

        self.assertIsNone(bare.get_time_range_bounds())
        self.assertFalse(bare.is_time_boxed)
        self.assertIsNone(bare.as_time_range())

    def test_dates(self):
        self.assertEqual(self.assignment.get_check_date(), SUNDAY)
        self.assertFalse(self.assignment.is_multi_day())
        self.assertEqual(self.assignment.get_span_days(), 1)

        self.assignment.scheduled_end_date = date(2024, 1, 9)

        self.assertEqual(self.assignment.get_check_date(), date(2024, 1, 9))
        self.assertTrue(self.assignment.is_multi_day())
        self.assertEqual(self.assignment.get_span_days(), 3)

    def test_clean(self):
        self.assignment.assigned_end_time = None
        with self.assertRaises(ValidationError):
            self.assignment.clean()

        self.assignment.assigned_end_time = time(8, 0)
        with self.assertRaises(ValidationError):
            self.assignment.clean()

        self.assignment.assigned_end_time = time(11, 0)
        self.assignment.scheduled_end_date = date(2024, 1, 1)
        with self.assertRaises(ValidationError):
            self.assignment.clean()

    def test_database_rejects_reversed_window(self):
        with self.assertRaises(IntegrityError), transaction.atomic():
            Assignment.objects.create(
                service_provider=self.provider,
                scheduled_date=SUNDAY,
                assigned_start_time=time(11, 0),
                assigned_end_time=time(10, 0),
            )

    def test_lifecycle(self):
        self.assignment.start()
        self.assertEqual(self.assignment.status, AssignmentStatus.IN_PROGRESS)
        self.assertIsNotNone(self.assignment.started_at)

        self.assignment.hold()
        self.assertEqual(self.assignment.status, AssignmentStatus.ON_HOLD)

        self.assignment.resume()
        self.assignment.finish()
        self.assignment.complete()

        self.assignment.refresh_from_db()
        self.assertEqual(self.assignment.status, AssignmentStatus.COMPLETED)
        self.assertIsNotNone(self.assignment.resumed_at)
        self.assertIsNotNone(self.assignment.finished_at)
        self.assertIsNotNone(self.assignment.completed_at)

    def test_invalid_transitions(self):
        with self.assertRaises(InvalidStateTransitionError):
            self.assignment.finish()
        with self.assertRaises(InvalidStateTransitionError):
            self.assignment.complete()

        self.assignment.start()
        with self.assertRaises(InvalidStateTransitionError):
            self.assignment.start()

        self.assignment.refresh_from_db()
        self.assertEqual(self.assignment.status, AssignmentStatus.IN_PROGRESS)

    def test_time_tracking(self):
        started = timezone.now()
        self.assignment.status = AssignmentStatus.FINISHED
        self.assignment.started_at = started
        self.assignment.finished_at = started + timedelta(minutes=150)
        self.assignment.save()

        TimeExtensionRequest.objects.create(
            assignment=self.assignment,
            requested_minutes=20,
            reason="Extra parts needed",
            status=ExtensionStatus.APPROVED,
        )
        TimeExtensionRequest.objects.create(
            assignment=self.assignment,
            requested_minutes=60,
            reason="Rejected request",
            status=ExtensionStatus.REJECTED,
        )

        tracking = self.assignment.get_time_tracking_data()

        self.assertEqual(tracking["allocated_minutes"], 120)
        self.assertEqual(tracking["approved_extension_minutes"], 20)
        self.assertEqual(tracking["total_allowed_minutes"], 140)
        self.assertEqual(tracking["actual_minutes"], 150)
        self.assertEqual(tracking["overtime_minutes"], 10)
        self.assertFalse(tracking["has_pending_extension"])
        self.assertFalse(tracking["can_request_extension"])

    def test_time_tracking_before_work_starts(self):
        tracking = self.assignment.get_time_tracking_data()

        self.assertIsNone(tracking["actual_minutes"])
        self.assertIsNone(tracking["overtime_minutes"])
        self.assertEqual(tracking["approved_extension_minutes"], 0)

    def test_can_request_extension(self):
        self.assertFalse(self.assignment.can_request_extension())

        self.assignment.start()
        self.assertTrue(self.assignment.can_request_extension())

        TimeExtensionRequest.objects.create(
            assignment=self.assignment, requested_minutes=30, reason="Pipes are corroded"
        )
        self.assertTrue(self.assignment.has_pending_extension_request())
        self.assertFalse(self.assignment.can_request_extension())


class AssignmentQuerySetTest(TestCase):
    def setUp(self):
        self.provider = create_provider()
        self.slot = create_slot(self.provider, (8, 0), (12, 0))
        self.other_slot = create_slot(self.provider, (13, 0), (15, 0))
        self.boxed = create_assignment(self.provider, [self.slot], start=(8, 0), end=(9, 0))
        self.loose = create_assignment(self.provider, [self.slot, self.other_slot])
        self.done = create_assignment(
            self.provider, [self.slot], status=AssignmentStatus.COMPLETED
        )

    def test_find_active_excludes_completed(self):
        active = Assignment.objects.find_active(self.provider.pk, SUNDAY)

        self.assertEqual(set(active), {self.boxed, self.loose})

    def test_time_boxed_and_excluding(self):
        self.assertEqual(list(Assignment.objects.time_boxed()), [self.boxed])
        self.assertEqual(
            set(Assignment.objects.excluding(self.boxed.pk)), {self.loose, self.done}
        )
        self.assertEqual(Assignment.objects.excluding(None).count(), 3)

    def test_slot_lookups(self):
        self.assertEqual(Assignment.objects.for_slot(self.other_slot.pk).get(), self.loose)
        self.assertEqual(
            Assignment.objects.for_any_slot([self.slot.pk, self.other_slot.pk]).count(), 3
        )


class TimeExtensionRequestModelTest(TestCase):
    def setUp(self):
        provider = create_provider()
        slot = create_slot(provider, (8, 0), (12, 0))
        self.assignment = create_assignment(provider, [slot], start=(9, 0), end=(11, 0))
        self.extension = TimeExtensionRequest.objects.create(
            assignment=self.assignment, requested_minutes=30, reason="Pipes are corroded"
        )

    def test_defaults(self):
        self.assertEqual(self.extension.status, ExtensionStatus.PENDING)
        self.assertIsNotNone(self.extension.requested_at)
        self.assertIsNone(self.extension.responded_at)
        self.assertTrue(self.extension.is_pending())
        self.assertTrue(self.extension.can_be_approved())
        self.assertTrue(self.extension.can_be_rejected())

    def test_decided_request_cannot_be_decided_again(self):
        self.extension.status = ExtensionStatus.REJECTED

        self.assertFalse(self.extension.can_be_approved())
        self.assertFalse(self.extension.can_be_rejected())

    def test_minutes_validators(self):
        self.extension.requested_minutes = 10
        with self.assertRaises(ValidationError):
            self.extension.full_clean()

        self.extension.requested_minutes = 241
        with self.assertRaises(ValidationError):
            self.extension.full_clean()

    def test_queryset_helpers(self):
        self.assertEqual(TimeExtensionRequest.objects.pending().count(), 1)
        self.assertEqual(TimeExtensionRequest.objects.approved().count(), 0)
        self.assertEqual(
            TimeExtensionRequest.objects.for_assignment(self.assignment.pk).get(),
            self.extension,
        )
