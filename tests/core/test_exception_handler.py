from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.exceptions import NotFound

from algorithms.availability import InvalidIntervalError
from core.exceptions import (
    InvalidStateTransitionError,
    ScheduleLockError,
    SchedulingConflictError,
    ValidationError,
)
from core.exceptions.exception_handler import custom_exception_handler


class CustomExceptionHandlerTests(SimpleTestCase):
    """Test the error body and status produced for each exception family."""

    def handle(self, exc):
        return custom_exception_handler(exc, {"view": None})

    def test_conflict_maps_to_409(self):
        response = self.handle(
            SchedulingConflictError("Overlaps", detail={"requested_minutes": 30})
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(
            response.data,
            {
                "error": "scheduling_conflict",
                "message": "Overlaps",
                "details": {"requested_minutes": 30},
            },
        )

    def test_invalid_state_maps_to_422(self):
        response = self.handle(InvalidStateTransitionError("Already approved"))

        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertEqual(response.data["error"], "invalid_state")
        self.assertIsNone(response.data["details"])

    def test_validation_maps_to_400(self):
        response = self.handle(ValidationError("Bad minutes"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")

    def test_lock_failure_maps_to_503(self):
        response = self.handle(ScheduleLockError())

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["error"], "schedule_locked")

    def test_invalid_interval_maps_to_400(self):
        response = self.handle(InvalidIntervalError("Start must be before end"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_interval")
        self.assertEqual(response.data["message"], "Start must be before end")

    def test_django_validation_error_is_converted(self):
        response = self.handle(DjangoValidationError({"end_time": ["Too early"]}))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")
        self.assertEqual(response.data["details"], {"end_time": ["Too early"]})

    def test_drf_not_found_keeps_status(self):
        response = self.handle(NotFound("No such assignment"))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "not_found")
        self.assertEqual(response.data["message"], "No such assignment")

    def test_integrity_error_maps_to_409(self):
        response = self.handle(IntegrityError("CHECK constraint failed"))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "integrity_error")

    def test_unexpected_error_maps_to_500(self):
        response = self.handle(RuntimeError("boom"))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertIn("message", response.data)
