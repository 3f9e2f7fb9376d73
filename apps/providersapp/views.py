"""
Provider availability views for FacilityHub.

Read-only endpoints over a provider's weekly time slots and the capacity left
in them on a given date. Slot maintenance happens in the admin back office.
"""

from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from rest_framework import generics
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.providersapp.enums import weekday_for_date
from apps.providersapp.models import ServiceProvider, TimeSlot
from apps.providersapp.serializers import (
    AutoSelectQuerySerializer,
    AvailabilityQuerySerializer,
    ServiceProviderSerializer,
    TimeSlotSerializer,
)
from apps.providersapp.services.availability_service import AvailabilityService
from core.exceptions import ValidationError
from utils.converters import to_date, to_int


def _parse_date(value):
    date_obj = to_date(value)
    if date_obj is None:
        raise ValidationError(_("Invalid date format. Use YYYY-MM-DD."))
    return date_obj


class ProviderAvailabilityView(APIView):
    """
    Per-slot availability of a provider on one date.

    Endpoint:
    - GET /api/providers/{provider_id}/availability/{date}/

    Query parameters:
        min_duration_minutes: only return slots that still have that many
            free minutes (1 to 1440), with the earliest window that fits

    Permissions:
    - Admin users
    """

    permission_classes = [IsAdminUser]

    def get(self, request, provider_id, date):
        date_obj = _parse_date(date)
        provider = get_object_or_404(ServiceProvider, id=provider_id)

        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        min_duration = query.validated_data.get("min_duration_minutes")

        slots = AvailabilityService().get_provider_day_availability(
            provider, date_obj, min_duration_minutes=min_duration
        )

        return Response(
            {
                "service_provider": ServiceProviderSerializer(provider).data,
                "date": date_obj.isoformat(),
                "day_of_week": weekday_for_date(date_obj),
                "is_available": provider.is_available,
                "slots": slots,
                "has_available_slots": any(slot["has_capacity"] for slot in slots),
                "slots_with_requested_duration": (
                    sum(1 for slot in slots if slot["is_available"]) if min_duration else None
                ),
            }
        )


class ProviderAutoSelectView(APIView):
    """
    Pick slots across one or more days for a piece of work.

    Endpoint:
    - GET /api/providers/{provider_id}/auto-select/?start_date=&duration_minutes=

    The selection is a suggestion only; nothing is booked until an
    assignment is scheduled with the returned slots.

    Permissions:
    - Admin users
    """

    permission_classes = [IsAdminUser]

    def get(self, request, provider_id):
        provider = get_object_or_404(ServiceProvider, id=provider_id)

        query = AutoSelectQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        selection = AvailabilityService().auto_select_slots(
            provider,
            query.validated_data["start_date"],
            query.validated_data["duration_minutes"],
        )

        if selection["is_sufficient"]:
            message = _("Allocated %(minutes)s minutes across %(days)s day(s).") % {
                "minutes": selection["accumulated_minutes"],
                "days": selection["span_days"],
            }
        else:
            message = _(
                "Could only allocate %(accumulated)s of %(required)s minutes across %(days)s day(s)."
            ) % {
                "accumulated": selection["accumulated_minutes"],
                "required": selection["requested_duration_minutes"],
                "days": selection["span_days"],
            }

        return Response(
            {
                "service_provider": ServiceProviderSerializer(provider).data,
                **selection,
                "message": message,
            }
        )


class SlotCapacityView(APIView):
    """
    Capacity and free gaps of a single slot on one date.

    Endpoint:
    - GET /api/providers/{provider_id}/slots/{slot_id}/capacity/{date}/

    Query parameters:
        exclude_assignment_id: leave one assignment out (edit in place)
    """

    permission_classes = [IsAdminUser]

    def get(self, request, provider_id, slot_id, date):
        date_obj = _parse_date(date)
        slot = get_object_or_404(TimeSlot, id=slot_id, service_provider_id=provider_id)

        exclude_id = request.query_params.get("exclude_assignment_id") or None
        capacity = AvailabilityService().get_slot_capacity(
            slot, date_obj, exclude_assignment_id=exclude_id
        )

        return Response(
            {
                "time_slot": TimeSlotSerializer(slot).data,
                "date": date_obj.isoformat(),
                "matches_date": slot.matches_date(date_obj),
                **capacity.to_dict(),
            }
        )


class ProviderTimeSlotsView(generics.ListAPIView):
    """
    List a provider's weekly time slots.

    Endpoint:
    - GET /api/providers/{provider_id}/time-slots/?active=true
    """

    serializer_class = TimeSlotSerializer
    permission_classes = [IsAdminUser]
    pagination_class = None

    def get_queryset(self):
        provider = get_object_or_404(ServiceProvider, id=self.kwargs["provider_id"])
        queryset = TimeSlot.objects.for_provider(provider.pk)

        if self.request.query_params.get("active") in ("true", "1"):
            queryset = queryset.active()

        day = to_int(self.request.query_params.get("day_of_week"))
        if day is not None:
            queryset = queryset.for_day(day)

        return queryset
