from django.db import models
from django.utils.translation import gettext_lazy as _


class AssignmentStatus(models.TextChoices):
    """Assignment lifecycle status"""

    ASSIGNED = "assigned", _("Assigned")
    IN_PROGRESS = "in_progress", _("In Progress")
    ON_HOLD = "on_hold", _("On Hold")
    FINISHED = "finished", _("Finished")
    COMPLETED = "completed", _("Completed")


class ExtensionStatus(models.TextChoices):
    """Time extension request status"""

    PENDING = "pending", _("Pending")
    APPROVED = "approved", _("Approved")
    REJECTED = "rejected", _("Rejected")
