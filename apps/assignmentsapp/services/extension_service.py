"""
Time extension requests: providers ask for more time, admins adjudicate.

Approval is the only path that moves an assignment's end time, so it re-runs
the overlap check against the extended window under the provider's schedule
lock before anything is written.
"""

import logging

from django.db import transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from algorithms.availability.time_range import InvalidIntervalError, add_minutes
from apps.assignmentsapp.constants import (
    EXTENSION_CONFLICT_MESSAGE,
    MAX_EXTENSION_MINUTES,
    MAX_REJECTION_NOTES_LENGTH,
    MIN_EXTENSION_MINUTES,
    MIN_EXTENSION_REASON_LENGTH,
    MIN_REJECTION_NOTES_LENGTH,
)
from apps.assignmentsapp.enums import ExtensionStatus
from apps.assignmentsapp.models import Assignment, TimeExtensionRequest
from apps.providersapp.services.availability_service import AvailabilityService
from core.exceptions import (
    InvalidStateTransitionError,
    SchedulingConflictError,
    ValidationError,
)
from utils.distributed_locks import schedule_lock

logger = logging.getLogger(__name__)


class ExtensionService:
    @staticmethod
    def request_extension(assignment, requested_by, requested_minutes, reason):
        """
        File a provider's request for more time on an assignment in progress.

        Raises:
            ValidationError: for out of range minutes or a too short reason
            InvalidStateTransitionError: if the assignment is not in progress
                or already has a pending request
        """
        if not MIN_EXTENSION_MINUTES <= requested_minutes <= MAX_EXTENSION_MINUTES:
            raise ValidationError(
                _("Requested minutes must be between {min} and {max}.").format(
                    min=MIN_EXTENSION_MINUTES, max=MAX_EXTENSION_MINUTES
                ),
                detail={"requested_minutes": requested_minutes},
            )

        reason = (reason or "").strip()
        if len(reason) < MIN_EXTENSION_REASON_LENGTH:
            raise ValidationError(
                _("Reason must be at least {length} characters.").format(
                    length=MIN_EXTENSION_REASON_LENGTH
                )
            )

        with transaction.atomic():
            locked = Assignment.objects.select_for_update().get(pk=assignment.pk)

            if not locked.can_request_extension():
                raise InvalidStateTransitionError(
                    _(
                        "Extensions can only be requested for assignments in "
                        "progress without a pending request."
                    ),
                    detail={
                        "status": locked.status,
                        "has_pending_request": locked.has_pending_extension_request(),
                    },
                )

            extension = TimeExtensionRequest.objects.create(
                assignment=locked,
                requested_by=requested_by,
                requested_minutes=requested_minutes,
                reason=reason,
            )

        logger.info(
            "Extension %s requested: +%s min on assignment %s",
            extension.pk,
            requested_minutes,
            locked.pk,
        )
        return extension

    @staticmethod
    def approve(extension, responded_by, admin_notes=None):
        """
        Approve a pending extension and push the assignment's end time.

        For a time-boxed assignment the window between the current end and
        the extended end is checked against the provider's other work on the
        date the assignment ends. A conflict leaves both rows untouched.

        Raises:
            InvalidStateTransitionError: if the request is no longer pending
            ValidationError: if the extended end would pass midnight
            SchedulingConflictError: if the extended window overlaps other work
            ScheduleLockError: if the provider's schedule is busy
        """
        assignment = extension.assignment
        check_date = assignment.get_check_date()

        with schedule_lock(assignment.service_provider_id, check_date):
            with transaction.atomic():
                extension = TimeExtensionRequest.objects.select_for_update().get(
                    pk=extension.pk
                )
                if not extension.can_be_approved():
                    raise InvalidStateTransitionError(
                        _("Only pending extension requests can be approved."),
                        detail={"status": extension.status},
                    )

                assignment = Assignment.objects.select_for_update().get(
                    pk=extension.assignment_id
                )

                if assignment.is_time_boxed:
                    current_end = assignment.assigned_end_time
                    try:
                        new_end = add_minutes(current_end, extension.requested_minutes)
                    except InvalidIntervalError as e:
                        raise ValidationError(
                            _("The extended end time would pass midnight."),
                            detail={"requested_minutes": extension.requested_minutes},
                        ) from e

                    availability = AvailabilityService()
                    if availability.has_overlap(
                        assignment.service_provider_id,
                        check_date,
                        current_end,
                        new_end,
                        exclude_assignment_id=assignment.pk,
                    ):
                        logger.warning(
                            "Extension %s refused: +%s min on assignment %s conflicts",
                            extension.pk,
                            extension.requested_minutes,
                            assignment.pk,
                        )
                        raise SchedulingConflictError(
                            EXTENSION_CONFLICT_MESSAGE.format(
                                minutes=extension.requested_minutes
                            ),
                            detail={"requested_minutes": extension.requested_minutes},
                        )

                    assignment.assigned_end_time = new_end
                    assignment.save(update_fields=["assigned_end_time", "updated_at"])

                extension.status = ExtensionStatus.APPROVED
                extension.responded_by = responded_by
                extension.admin_notes = admin_notes or ""
                extension.responded_at = timezone.now()
                extension.save(
                    update_fields=["status", "responded_by", "admin_notes", "responded_at"]
                )

        logger.info(
            "Extension %s approved: assignment %s now ends at %s",
            extension.pk,
            assignment.pk,
            assignment.assigned_end_time,
        )
        return extension

    @staticmethod
    def reject(extension, responded_by, admin_notes):
        """
        Reject a pending extension. No time changes, so no overlap check.

        Raises:
            ValidationError: if the notes are missing, too short or too long
            InvalidStateTransitionError: if the request is no longer pending
        """
        admin_notes = (admin_notes or "").strip()
        if not MIN_REJECTION_NOTES_LENGTH <= len(admin_notes) <= MAX_REJECTION_NOTES_LENGTH:
            raise ValidationError(
                _("Rejection notes must be between {min} and {max} characters.").format(
                    min=MIN_REJECTION_NOTES_LENGTH, max=MAX_REJECTION_NOTES_LENGTH
                ),
                detail={"admin_notes": len(admin_notes)},
            )

        with transaction.atomic():
            extension = TimeExtensionRequest.objects.select_for_update().get(pk=extension.pk)
            if not extension.can_be_rejected():
                raise InvalidStateTransitionError(
                    _("Only pending extension requests can be rejected."),
                    detail={"status": extension.status},
                )

            extension.status = ExtensionStatus.REJECTED
            extension.responded_by = responded_by
            extension.admin_notes = admin_notes
            extension.responded_at = timezone.now()
            extension.save(
                update_fields=["status", "responded_by", "admin_notes", "responded_at"]
            )

        logger.info("Extension %s rejected", extension.pk)
        return extension
