"""
Global exception handler for the FacilityHub platform.

This module provides a custom exception handler for DRF that handles
custom exceptions and provides consistent error responses.
"""

import logging
from typing import Any, Dict, Optional

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.utils import DatabaseError, IntegrityError
from django.http import Http404
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from algorithms.availability.time_range import InvalidIntervalError

from .custom_exceptions import FacilityHubError

logger = logging.getLogger(__name__)


def get_error_code(exception: Exception) -> str:
    """
    Get standardized error code from exception.

    Args:
        exception: The exception to get code for

    Returns:
        str: Standardized error code
    """
    if isinstance(exception, FacilityHubError):
        return exception.error_code
    elif isinstance(exception, InvalidIntervalError):
        return "invalid_interval"
    elif isinstance(exception, ValidationError):
        return "validation_error"
    elif isinstance(exception, PermissionDenied):
        return "permission_denied"
    elif isinstance(exception, (Http404, NotFound, ObjectDoesNotExist)):
        return "not_found"
    elif isinstance(exception, IntegrityError):
        return "integrity_error"
    elif isinstance(exception, DatabaseError):
        return "database_error"
    elif isinstance(exception, NotAuthenticated):
        return "authentication_required"
    else:
        # Convert exception class name to snake case
        return (
            exception.__class__.__name__.lower()
            .replace("error", "")
            .replace("exception", "")
        )


def get_error_message(exception: Exception) -> str:
    """
    Get a user facing message for an exception.

    Args:
        exception: The exception

    Returns:
        str: Error message
    """
    if isinstance(exception, FacilityHubError):
        return str(exception.message)

    if isinstance(exception, InvalidIntervalError):
        return str(exception)

    if hasattr(exception, "detail") and isinstance(exception.detail, str):
        return exception.detail

    if isinstance(exception, IntegrityError):
        return _("A conflict occurred with existing data.")
    elif isinstance(exception, DatabaseError):
        return _("A database error occurred. Please try again later.")
    elif isinstance(exception, ObjectDoesNotExist):
        return _("The requested resource was not found.")

    if hasattr(exception, "__module__") and "django" in exception.__module__:
        return _("An error occurred processing your request.")

    return str(exception)


def get_error_details(exception: Exception) -> Optional[Any]:
    """
    Get detailed error information from exception.

    Args:
        exception: The exception

    Returns:
        Error details if available
    """
    if isinstance(exception, FacilityHubError):
        return exception.detail

    # For validation errors, return formatted validation details
    if (
        isinstance(exception, ValidationError)
        and hasattr(exception, "detail")
        and not isinstance(exception.detail, str)
    ):
        if isinstance(exception.detail, list):
            return {"validation_errors": exception.detail}
        return exception.detail

    if isinstance(exception, IntegrityError):
        error_str = str(exception)
        if "unique constraint" in error_str.lower():
            return {"type": "unique_constraint_violation"}
        elif "check constraint" in error_str.lower():
            return {"type": "check_constraint_violation"}

    return None


def _error_body(error_code: str, message: str, details: Optional[Any]) -> Dict[str, Any]:
    return {"error": error_code, "message": message, "details": details}


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    Custom exception handler for DRF views.

    Handles both DRF and custom exceptions, providing consistent response format.

    Args:
        exc: The exception
        context: The exception context

    Returns:
        Response: Consistent error response
    """
    # Handle Django ValidationError by converting to DRF ValidationError
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, "message_dict"):
            exc = ValidationError(detail=exc.message_dict)
        else:
            exc = ValidationError(detail=exc.messages)

    error_code = get_error_code(exc)
    error_message = get_error_message(exc)
    error_details = get_error_details(exc)
    view = context.get("view")

    if isinstance(exc, FacilityHubError):
        logger.warning(
            "Request refused by %s: %s - %s", view.__class__.__name__, error_code, error_message
        )
        return Response(
            _error_body(error_code, error_message, error_details),
            status=exc.status_code,
        )

    if isinstance(exc, InvalidIntervalError):
        logger.warning("Invalid time interval in %s: %s", view.__class__.__name__, exc)
        return Response(
            _error_body(error_code, error_message, error_details),
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = drf_exception_handler(exc, context)

    if isinstance(exc, (ValidationError, Http404, NotFound, NotAuthenticated, PermissionDenied)):
        logger.warning("Exception: %s - %s (details: %s)", error_code, error_message, error_details)
    else:
        logger.error("Exception: %s - %s", error_code, error_message, exc_info=exc)

    if isinstance(exc, IntegrityError):
        return Response(
            _error_body(error_code, _("A conflict occurred with the existing data"), error_details),
            status=status.HTTP_409_CONFLICT,
        )

    if response is not None:
        response.data = _error_body(error_code, error_message, error_details)
        return response

    # Handle unhandled exceptions
    return Response(
        _error_body(error_code, error_message, error_details),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
