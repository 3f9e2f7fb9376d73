from rest_framework import serializers

from apps.providersapp.constants import (
    AUTO_SELECT_MAX_DURATION_MINUTES,
    MAX_MIN_DURATION_MINUTES,
)
from apps.providersapp.models import ServiceProvider, TimeSlot


class TimeSlotSerializer(serializers.ModelSerializer):
    day_name = serializers.SerializerMethodField()
    formatted_time_range = serializers.ReadOnlyField()
    duration_minutes = serializers.ReadOnlyField()

    class Meta:
        model = TimeSlot
        fields = (
            "id",
            "service_provider",
            "day_of_week",
            "day_name",
            "start_time",
            "end_time",
            "formatted_time_range",
            "duration_minutes",
            "is_active",
        )
        read_only_fields = fields

    def get_day_name(self, obj):
        return obj.get_day_of_week_display()


class ServiceProviderSerializer(serializers.ModelSerializer):
    class Meta:
        model = ServiceProvider
        fields = ("id", "name", "phone", "is_available")
        read_only_fields = fields


class AvailabilityQuerySerializer(serializers.Serializer):
    """Serializer for provider availability query parameters"""

    min_duration_minutes = serializers.IntegerField(
        required=False, min_value=1, max_value=MAX_MIN_DURATION_MINUTES
    )


class AutoSelectQuerySerializer(serializers.Serializer):
    """Serializer for slot auto-selection query parameters"""

    start_date = serializers.DateField(required=True)
    duration_minutes = serializers.IntegerField(
        required=True, min_value=1, max_value=AUTO_SELECT_MAX_DURATION_MINUTES
    )
