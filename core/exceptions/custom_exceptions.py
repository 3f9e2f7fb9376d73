"""
Custom exceptions for the FacilityHub platform.

Every exception carries a message, optional structured detail and the HTTP
status code the API layer should answer with, so services can raise them
without knowing anything about requests or responses.
"""

from typing import Any

from django.utils.translation import gettext_lazy as _
from rest_framework import status


class FacilityHubError(Exception):
    """
    Base exception for all FacilityHub custom exceptions.

    Attributes:
        message: Error message
        detail: Additional error details
        status_code: HTTP status code for API responses
    """

    error_code = "error"

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        self.message = message if message else _("An error occurred")
        self.detail = detail
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self):
        return str(self.message)


class ValidationError(FacilityHubError):
    """
    Exception for data validation errors.
    """

    error_code = "validation_error"

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        message = message if message else _("Validation error")
        super().__init__(message, detail, status_code)


class PermissionDeniedError(FacilityHubError):
    """
    Exception for permission denied errors.
    """

    error_code = "permission_denied"

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_403_FORBIDDEN,
    ):
        message = message if message else _("Permission denied")
        super().__init__(message, detail, status_code)


class ResourceNotFoundError(FacilityHubError):
    """
    Exception for resource not found errors.
    """

    error_code = "not_found"

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_404_NOT_FOUND,
    ):
        message = message if message else _("Resource not found")
        super().__init__(message, detail, status_code)


class SchedulingConflictError(FacilityHubError):
    """
    Raised by workflows that refuse a write because the requested time
    collides with another assignment of the same provider.
    """

    error_code = "scheduling_conflict"

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_409_CONFLICT,
    ):
        message = message if message else _("Scheduling conflict detected")
        super().__init__(message, detail, status_code)


class InvalidStateTransitionError(FacilityHubError):
    """
    Exception for actions that are not allowed in the record's current status.
    """

    error_code = "invalid_state"

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
    ):
        message = message if message else _("Action not allowed in the current state")
        super().__init__(message, detail, status_code)


class ServiceUnavailableError(FacilityHubError):
    """
    Exception for service unavailable errors.
    """

    error_code = "service_unavailable"

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE,
    ):
        message = message if message else _("Service unavailable")
        super().__init__(message, detail, status_code)


class ScheduleLockError(ServiceUnavailableError):
    """
    Raised when the per-provider schedule lock could not be acquired in time.
    """

    error_code = "schedule_locked"

    def __init__(
        self,
        message: str = None,
        detail: Any = None,
        status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE,
    ):
        message = message if message else _(
            "The provider's schedule is being updated, please try again"
        )
        super().__init__(message, detail, status_code)
