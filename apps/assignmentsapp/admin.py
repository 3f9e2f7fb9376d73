from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from apps.assignmentsapp.models import Assignment, TimeExtensionRequest


class TimeExtensionRequestInline(admin.TabularInline):
    model = TimeExtensionRequest
    extra = 0
    fields = ("requested_minutes", "reason", "status", "admin_notes", "requested_at")
    readonly_fields = ("requested_at",)


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "service_provider",
        "scheduled_date",
        "assigned_start_time",
        "assigned_end_time",
        "status",
    )
    list_filter = ("status", "scheduled_date")
    search_fields = ("title", "service_provider__name")
    filter_horizontal = ("time_slots",)
    readonly_fields = (
        "started_at",
        "held_at",
        "resumed_at",
        "finished_at",
        "completed_at",
        "created_at",
        "updated_at",
    )
    fieldsets = (
        (None, {"fields": ("title", "service_provider", "status", "notes")}),
        (
            _("Schedule"),
            {
                "fields": (
                    "scheduled_date",
                    "scheduled_end_date",
                    "time_slots",
                    "assigned_start_time",
                    "assigned_end_time",
                    "allocated_duration_minutes",
                )
            },
        ),
        (
            _("Lifecycle"),
            {
                "fields": (
                    "started_at",
                    "held_at",
                    "resumed_at",
                    "finished_at",
                    "completed_at",
                ),
                "classes": ("collapse",),
            },
        ),
    )
    inlines = [TimeExtensionRequestInline]


@admin.register(TimeExtensionRequest)
class TimeExtensionRequestAdmin(admin.ModelAdmin):
    list_display = ("assignment", "requested_minutes", "status", "requested_at", "responded_at")
    list_filter = ("status",)
    readonly_fields = ("requested_at", "responded_at")

    def has_change_permission(self, request, obj=None):
        """Decisions go through the approve/reject endpoints"""
        if obj and not obj.is_pending():
            return False
        return super().has_change_permission(request, obj)
