from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from apps.providersapp.models import ServiceProvider, TimeSlot


class TimeSlotInline(admin.TabularInline):
    model = TimeSlot
    extra = 1
    fields = ("day_of_week", "start_time", "end_time", "is_active")


@admin.register(ServiceProvider)
class ServiceProviderAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "is_available", "created_at")
    list_filter = ("is_available",)
    search_fields = ("name", "phone")
    readonly_fields = ("created_at", "updated_at")
    inlines = [TimeSlotInline]


@admin.register(TimeSlot)
class TimeSlotAdmin(admin.ModelAdmin):
    list_display = (
        "service_provider",
        "day_of_week",
        "start_time",
        "end_time",
        "get_duration",
        "is_active",
    )
    list_filter = ("day_of_week", "is_active")
    search_fields = ("service_provider__name",)

    def get_duration(self, obj):
        return obj.duration_minutes

    get_duration.short_description = _("Minutes")
