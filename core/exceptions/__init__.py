"""
FacilityHub – centralised custom exceptions.

Import these from `core.exceptions` across the project instead of redefining
ad-hoc `Exception` subclasses in each app.
"""

from __future__ import annotations

from .custom_exceptions import (
    FacilityHubError,
    InvalidStateTransitionError,
    PermissionDeniedError,
    ResourceNotFoundError,
    ScheduleLockError,
    SchedulingConflictError,
    ServiceUnavailableError,
    ValidationError,
)

__all__ = [
    "FacilityHubError",
    "InvalidStateTransitionError",
    "PermissionDeniedError",
    "ResourceNotFoundError",
    "ScheduleLockError",
    "SchedulingConflictError",
    "ServiceUnavailableError",
    "ValidationError",
]
