import django_filters
from django.utils.translation import gettext_lazy as _

from apps.assignmentsapp.enums import ExtensionStatus
from apps.assignmentsapp.models import TimeExtensionRequest


class TimeExtensionRequestFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=ExtensionStatus.choices)
    assignment = django_filters.UUIDFilter(field_name="assignment")
    service_provider = django_filters.UUIDFilter(field_name="assignment__service_provider")
    requested_after = django_filters.DateTimeFilter(field_name="requested_at", lookup_expr="gte")
    requested_before = django_filters.DateTimeFilter(field_name="requested_at", lookup_expr="lte")
    ordering = django_filters.OrderingFilter(
        fields=(
            ("requested_at", "requested"),
            ("requested_minutes", "minutes"),
        ),
        field_labels={
            "requested_at": _("Request Date"),
            "requested_minutes": _("Requested Minutes"),
        },
    )

    class Meta:
        model = TimeExtensionRequest
        fields = [
            "status",
            "assignment",
            "service_provider",
            "requested_after",
            "requested_before",
            "ordering",
        ]
