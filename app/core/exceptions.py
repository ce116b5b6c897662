"""
Attendance error taxonomy on top of the atams exception hierarchy.

Every class here is an AppException, so the handlers registered by
setup_exception_handlers render them as {"success": false, "message", "details"}.
"""
from typing import Optional, Dict, Any

from atams.exceptions import (
    BadRequestException,
    NotFoundException,
    ConflictException,
    ForbiddenException,
    InternalServerException,
)


class ValidationError(BadRequestException):
    """400 - missing employee ID, missing GPS, missing base coordinates"""


class NotFoundError(NotFoundException):
    """404 - unknown employee or record"""


class ConflictError(ConflictException):
    """409 - external employee ID is not unique"""


class TimeWindowError(ForbiddenException):
    """403 - scan outside the allowed clock window"""


class GeofenceError(ForbiddenException):
    """403 - scan farther from base than the allowed radius"""

    def __init__(self, message: str, distance: int, allowed_radius: int):
        self.distance = distance
        self.allowed_radius = allowed_radius
        super().__init__(message, {"distance": distance, "allowedRadius": allowed_radius})


class PersistenceError(InternalServerException):
    """500 - storage failure; the client decides whether to retry"""

    def __init__(
        self,
        message: str = "Failed to record attendance",
        retryable: bool = True,
        details: Optional[Dict[str, Any]] = None
    ):
        self.retryable = retryable
        payload = {"retryable": retryable}
        payload.update(details or {})
        super().__init__(message, payload)
