"""
Assignment scheduling and time extension views for FacilityHub.

Admins book providers into their weekly slots, move time windows and decide
on extension requests; providers request extensions for work in progress.
All conflict decisions are made by the services, which raise
``core.exceptions`` errors that the project exception handler renders.
"""

from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, status
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.assignmentsapp.filters import TimeExtensionRequestFilter
from apps.assignmentsapp.models import Assignment, TimeExtensionRequest
from apps.assignmentsapp.permissions import IsAssignedProviderOrAdmin
from apps.assignmentsapp.serializers import (
    AssignmentCreateSerializer,
    AssignmentSerializer,
    ExtensionApproveSerializer,
    ExtensionCreateSerializer,
    ExtensionRejectSerializer,
    TimeExtensionRequestSerializer,
    TimeWindowSerializer,
)
from apps.assignmentsapp.services.extension_service import ExtensionService
from apps.assignmentsapp.services.scheduling_service import AssignmentSchedulingService
from utils.pagination import StandardResultsSetPagination


class AssignmentCreateView(APIView):
    """
    Schedule an assignment into a provider's time slots.

    Endpoint:
    - POST /api/assignments/

    Status codes:
        201: Assignment created
        400: Invalid slots, window or duration
        409: Slots overlap another assignment
        503: Provider schedule locked by a concurrent request
    """

    permission_classes = [IsAdminUser]

    def post(self, request):
        serializer = AssignmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        assignment = AssignmentSchedulingService().schedule_assignment(
            service_provider=data["service_provider"],
            scheduled_date=data["scheduled_date"],
            time_slot_ids=data["time_slot_ids"],
            assigned_start_time=data.get("assigned_start_time"),
            assigned_end_time=data.get("assigned_end_time"),
            allocated_duration_minutes=data.get("allocated_duration_minutes"),
            scheduled_end_date=data.get("scheduled_end_date"),
            title=data.get("title", ""),
            notes=data.get("notes", ""),
            exclude_assignment_id=data.get("exclude_assignment_id"),
        )

        return Response(AssignmentSerializer(assignment).data, status=status.HTTP_201_CREATED)


class AssignmentDetailView(generics.RetrieveAPIView):
    """
    GET /api/assignments/{pk}/
    """

    queryset = Assignment.objects.select_related("service_provider").prefetch_related(
        "time_slots"
    )
    serializer_class = AssignmentSerializer
    permission_classes = [IsAuthenticated, IsAssignedProviderOrAdmin]


class AssignmentTimeWindowView(APIView):
    """
    Move an assignment's time window.

    Endpoint:
    - PATCH /api/assignments/{pk}/time-window/
    """

    permission_classes = [IsAdminUser]

    def patch(self, request, pk):
        assignment = get_object_or_404(Assignment, pk=pk)

        serializer = TimeWindowSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        assignment = AssignmentSchedulingService().update_time_window(
            assignment,
            serializer.validated_data["assigned_start_time"],
            serializer.validated_data["assigned_end_time"],
        )

        return Response(AssignmentSerializer(assignment).data)


class AssignmentExtensionRequestView(APIView):
    """
    Request more time for an assignment in progress.

    Endpoint:
    - POST /api/assignments/{pk}/extensions/

    Permissions:
    - The assigned provider, or staff
    """

    permission_classes = [IsAuthenticated, IsAssignedProviderOrAdmin]

    def post(self, request, pk):
        assignment = get_object_or_404(
            Assignment.objects.select_related("service_provider"), pk=pk
        )
        self.check_object_permissions(request, assignment)

        serializer = ExtensionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        extension = ExtensionService.request_extension(
            assignment,
            requested_by=request.user,
            requested_minutes=serializer.validated_data["requested_minutes"],
            reason=serializer.validated_data["reason"],
        )

        return Response(
            TimeExtensionRequestSerializer(extension).data, status=status.HTTP_201_CREATED
        )


class ExtensionListView(generics.ListAPIView):
    """
    GET /api/extensions/?status=pending&assignment={uuid}
    """

    queryset = TimeExtensionRequest.objects.select_related("assignment")
    serializer_class = TimeExtensionRequestSerializer
    permission_classes = [IsAdminUser]
    pagination_class = StandardResultsSetPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = TimeExtensionRequestFilter


class ExtensionApproveView(APIView):
    """
    Approve an extension and push the assignment's end time.

    Endpoint:
    - POST /api/extensions/{pk}/approve/

    Status codes:
        200: Approved
        409: Extended window overlaps another assignment; nothing changed
        422: Request is no longer pending
    """

    permission_classes = [IsAdminUser]

    def post(self, request, pk):
        extension = get_object_or_404(
            TimeExtensionRequest.objects.select_related("assignment"), pk=pk
        )

        serializer = ExtensionApproveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        extension = ExtensionService.approve(
            extension,
            responded_by=request.user,
            admin_notes=serializer.validated_data.get("admin_notes"),
        )

        return Response(TimeExtensionRequestSerializer(extension).data)


class ExtensionRejectView(APIView):
    """
    Reject an extension request. Notes are required.

    Endpoint:
    - POST /api/extensions/{pk}/reject/
    """

    permission_classes = [IsAdminUser]

    def post(self, request, pk):
        extension = get_object_or_404(TimeExtensionRequest, pk=pk)

        serializer = ExtensionRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        extension = ExtensionService.reject(
            extension,
            responded_by=request.user,
            admin_notes=serializer.validated_data["admin_notes"],
        )

        return Response(TimeExtensionRequestSerializer(extension).data)
