import uuid

from django.contrib.auth.models import User
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.providersapp.enums import DayOfWeek

from .helpers import (
    MONDAY,
    SUNDAY,
    create_assignment,
    create_provider,
    create_slot,
    create_staff_user,
)


class ProviderAvailabilityViewTest(APITestCase):
    """
    Test case for the provider availability endpoints.
    """

    def setUp(self):
        self.admin = create_staff_user()
        self.client.force_authenticate(user=self.admin)

        self.provider = create_provider(name="Acme Electric")
        self.morning = create_slot(self.provider, (8, 0), (12, 0))
        self.afternoon = create_slot(self.provider, (13, 0), (15, 0))
        self.assignment = create_assignment(
            self.provider, [self.afternoon], start=(13, 0), end=(14, 30)
        )

    def availability_url(self, day=SUNDAY, provider_id=None):
        return reverse(
            "provider-availability",
            kwargs={
                "provider_id": provider_id or self.provider.pk,
                "date": day.isoformat() if hasattr(day, "isoformat") else day,
            },
        )

    def test_day_availability(self):
        response = self.client.get(self.availability_url())

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["date"], "2024-01-07")
        self.assertEqual(response.data["service_provider"]["name"], "Acme Electric")
        self.assertTrue(response.data["is_available"])
        self.assertEqual(len(response.data["slots"]), 2)
        self.assertEqual(response.data["slots"][1]["available_minutes"], 30)
        self.assertEqual(response.data["slots"][1]["duration_minutes"], 120)
        self.assertTrue(response.data["slots"][1]["has_capacity"])
        self.assertEqual(response.data["day_of_week"], DayOfWeek.SUNDAY)
        self.assertTrue(response.data["has_available_slots"])
        self.assertIsNone(response.data["slots_with_requested_duration"])

    def test_min_duration_filters_slots(self):
        response = self.client.get(self.availability_url(), {"min_duration_minutes": 60})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["slots"]), 1)
        self.assertEqual(
            response.data["slots"][0]["next_available"],
            {"start": "08:00:00", "end": "09:00:00"},
        )
        self.assertEqual(response.data["slots_with_requested_duration"], 1)

    def test_day_without_slots(self):
        response = self.client.get(self.availability_url(MONDAY))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["slots"], [])

    def test_invalid_date(self):
        response = self.client.get(self.availability_url("2024-13-45"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")

    def test_non_positive_min_duration(self):
        response = self.client.get(self.availability_url(), {"min_duration_minutes": 0})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_integer_min_duration_is_rejected(self):
        response = self.client.get(self.availability_url(), {"min_duration_minutes": "ninety"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")
        self.assertIn("min_duration_minutes", response.data["details"])

    def test_min_duration_longer_than_a_day_is_rejected(self):
        response = self.client.get(self.availability_url(), {"min_duration_minutes": 1441})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_provider(self):
        response = self.client.get(self.availability_url(provider_id=uuid.uuid4()))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_non_staff_is_forbidden(self):
        user = User.objects.create_user(username="someone", password="testpass123")
        self.client.force_authenticate(user=user)

        response = self.client.get(self.availability_url())

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_is_rejected(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(self.availability_url())

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class ProviderAutoSelectViewTest(APITestCase):
    def setUp(self):
        self.admin = create_staff_user()
        self.client.force_authenticate(user=self.admin)

        self.provider = create_provider()
        self.sunday = create_slot(self.provider, (8, 0), (12, 0))
        self.monday = create_slot(
            self.provider, (8, 0), (12, 0), day_of_week=DayOfWeek.MONDAY
        )
        self.url = reverse("provider-auto-select", kwargs={"provider_id": self.provider.pk})

    def test_selection_across_two_days(self):
        response = self.client.get(
            self.url, {"start_date": SUNDAY.isoformat(), "duration_minutes": 300}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["is_sufficient"])
        self.assertEqual(
            response.data["time_slot_ids"], [str(self.sunday.pk), str(self.monday.pk)]
        )
        self.assertEqual(response.data["start_date"], "2024-01-07")
        self.assertEqual(response.data["end_date"], "2024-01-08")
        self.assertEqual(response.data["assigned_start_time"], "08:00:00")
        self.assertEqual(response.data["assigned_end_time"], "12:00:00")
        self.assertEqual(response.data["span_days"], 2)
        self.assertIn("message", response.data)

    def test_short_selection_reports_the_shortfall(self):
        create_assignment(self.provider, [self.sunday], start=(8, 0), end=(12, 0))

        response = self.client.get(
            self.url, {"start_date": SUNDAY.isoformat(), "duration_minutes": 43200}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["is_sufficient"])
        self.assertEqual(
            response.data["shortfall_minutes"],
            43200 - response.data["accumulated_minutes"],
        )

    def test_missing_parameters(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "validation_error")
        self.assertIn("start_date", response.data["details"])
        self.assertIn("duration_minutes", response.data["details"])

    def test_invalid_duration(self):
        for duration in ("ninety", 0, 43201):
            response = self.client.get(
                self.url, {"start_date": SUNDAY.isoformat(), "duration_minutes": duration}
            )

            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_provider(self):
        url = reverse("provider-auto-select", kwargs={"provider_id": uuid.uuid4()})

        response = self.client.get(
            url, {"start_date": SUNDAY.isoformat(), "duration_minutes": 60}
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_non_staff_is_forbidden(self):
        user = User.objects.create_user(username="someone", password="testpass123")
        self.client.force_authenticate(user=user)

        response = self.client.get(
            self.url, {"start_date": SUNDAY.isoformat(), "duration_minutes": 60}
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class SlotCapacityViewTest(APITestCase):
    def setUp(self):
        self.client.force_authenticate(user=create_staff_user())
        self.provider = create_provider()
        self.slot = create_slot(self.provider, (8, 0), (12, 0))
        self.assignment = create_assignment(
            self.provider, [self.slot], start=(9, 0), end=(10, 0)
        )

    def capacity_url(self, slot_id=None, day=SUNDAY):
        return reverse(
            "slot-capacity",
            kwargs={
                "provider_id": self.provider.pk,
                "slot_id": slot_id or self.slot.pk,
                "date": day.isoformat(),
            },
        )

    def test_capacity(self):
        response = self.client.get(self.capacity_url())

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["matches_date"])
        self.assertEqual(response.data["total_minutes"], 240)
        self.assertEqual(response.data["booked_minutes"], 60)
        self.assertEqual(response.data["utilization_percent"], 25)
        self.assertEqual(len(response.data["gaps"]), 2)
        self.assertEqual(response.data["time_slot"]["day_name"], "Sunday")

    def test_capacity_excluding_an_assignment(self):
        response = self.client.get(
            self.capacity_url(), {"exclude_assignment_id": str(self.assignment.pk)}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["booked_minutes"], 0)

    def test_slot_of_another_provider(self):
        other_slot = create_slot(create_provider(name="Other"), (8, 0), (12, 0))

        response = self.client.get(self.capacity_url(slot_id=other_slot.pk))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ProviderTimeSlotsViewTest(APITestCase):
    def setUp(self):
        self.client.force_authenticate(user=create_staff_user())
        self.provider = create_provider()
        create_slot(self.provider, (8, 0), (12, 0), day_of_week=DayOfWeek.SUNDAY)
        create_slot(self.provider, (8, 0), (12, 0), day_of_week=DayOfWeek.MONDAY)
        create_slot(
            self.provider, (13, 0), (17, 0), day_of_week=DayOfWeek.MONDAY, is_active=False
        )
        self.url = reverse("provider-time-slots", kwargs={"provider_id": self.provider.pk})

    def test_lists_all_slots(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)
        self.assertEqual(response.data[0]["formatted_time_range"], "08:00 - 12:00")

    def test_filters(self):
        response = self.client.get(self.url, {"active": "true", "day_of_week": 1})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["day_of_week"], DayOfWeek.MONDAY)
