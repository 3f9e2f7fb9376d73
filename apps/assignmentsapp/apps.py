from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AssignmentsAppConfig(AppConfig):
    name = "apps.assignmentsapp"
    verbose_name = _("Assignments")
