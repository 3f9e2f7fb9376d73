from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from apps.assignmentsapp.constants import (
    MAX_EXTENSION_MINUTES,
    MAX_REJECTION_NOTES_LENGTH,
    MIN_EXTENSION_MINUTES,
    MIN_EXTENSION_REASON_LENGTH,
    MIN_REJECTION_NOTES_LENGTH,
)
from apps.assignmentsapp.models import Assignment, TimeExtensionRequest
from apps.providersapp.models import ServiceProvider


class TimeExtensionRequestSerializer(serializers.ModelSerializer):
    class Meta:
        model = TimeExtensionRequest
        fields = (
            "id",
            "assignment",
            "requested_by",
            "requested_minutes",
            "reason",
            "status",
            "responded_by",
            "admin_notes",
            "requested_at",
            "responded_at",
        )
        read_only_fields = fields


class AssignmentSerializer(serializers.ModelSerializer):
    time_slot_ids = serializers.SerializerMethodField()
    service_provider_name = serializers.ReadOnlyField(source="service_provider.name")
    time_tracking = serializers.SerializerMethodField()

    class Meta:
        model = Assignment
        fields = (
            "id",
            "title",
            "service_provider",
            "service_provider_name",
            "time_slot_ids",
            "scheduled_date",
            "scheduled_end_date",
            "assigned_start_time",
            "assigned_end_time",
            "allocated_duration_minutes",
            "status",
            "started_at",
            "held_at",
            "resumed_at",
            "finished_at",
            "completed_at",
            "notes",
            "time_tracking",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_time_slot_ids(self, obj):
        return [str(slot_id) for slot_id in obj.time_slot_ids]

    def get_time_tracking(self, obj):
        return obj.get_time_tracking_data()


class AssignmentCreateSerializer(serializers.Serializer):
    service_provider = serializers.PrimaryKeyRelatedField(
        queryset=ServiceProvider.objects.all()
    )
    scheduled_date = serializers.DateField()
    scheduled_end_date = serializers.DateField(required=False, allow_null=True)
    time_slot_ids = serializers.ListField(
        child=serializers.UUIDField(), allow_empty=False
    )
    assigned_start_time = serializers.TimeField(required=False, allow_null=True)
    assigned_end_time = serializers.TimeField(required=False, allow_null=True)
    allocated_duration_minutes = serializers.IntegerField(
        required=False, allow_null=True, min_value=1
    )
    title = serializers.CharField(required=False, allow_blank=True, max_length=255)
    notes = serializers.CharField(required=False, allow_blank=True)
    exclude_assignment_id = serializers.UUIDField(required=False, allow_null=True)

    def validate(self, attrs):
        start = attrs.get("assigned_start_time")
        end = attrs.get("assigned_end_time")
        if (start is None) != (end is None):
            raise serializers.ValidationError(
                _("Assigned start and end time must be set together.")
            )
        return attrs


class TimeWindowSerializer(serializers.Serializer):
    assigned_start_time = serializers.TimeField()
    assigned_end_time = serializers.TimeField()

    def validate(self, attrs):
        if attrs["assigned_start_time"] >= attrs["assigned_end_time"]:
            raise serializers.ValidationError(
                {"assigned_end_time": _("End time must be after start time.")}
            )
        return attrs


class ExtensionCreateSerializer(serializers.Serializer):
    requested_minutes = serializers.IntegerField(
        min_value=MIN_EXTENSION_MINUTES, max_value=MAX_EXTENSION_MINUTES
    )
    reason = serializers.CharField(min_length=MIN_EXTENSION_REASON_LENGTH)


class ExtensionApproveSerializer(serializers.Serializer):
    admin_notes = serializers.CharField(
        required=False, allow_blank=True, max_length=MAX_REJECTION_NOTES_LENGTH
    )


class ExtensionRejectSerializer(serializers.Serializer):
    admin_notes = serializers.CharField(
        min_length=MIN_REJECTION_NOTES_LENGTH, max_length=MAX_REJECTION_NOTES_LENGTH
    )
