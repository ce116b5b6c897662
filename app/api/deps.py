"""
API Dependencies
Provides authentication, clock and service dependencies
"""
from fastapi import Depends

from atams.sso import create_atlas_client, create_auth_dependencies
from app.core.clock import Clock, SystemClock
from app.core.config import settings
from app.services.attendance_service import AttendanceService
from app.services.status_service import StatusService

# Initialize Atlas SSO client using factory
atlas_client = create_atlas_client(settings)

# Create auth dependencies using factory
get_current_user, require_auth, require_min_role_level, require_role_level = create_auth_dependencies(atlas_client)


def get_clock() -> Clock:
    """Wall clock in APP_TIMEZONE; overridden in tests"""
    return SystemClock(settings.APP_TIMEZONE)


def get_attendance_service(clock: Clock = Depends(get_clock)) -> AttendanceService:
    return AttendanceService(clock)


def get_status_service(clock: Clock = Depends(get_clock)) -> StatusService:
    return StatusService(clock)


__all__ = [
    "atlas_client",
    "get_current_user",
    "require_auth",
    "require_min_role_level",
    "require_role_level",
    "get_clock",
    "get_attendance_service",
    "get_status_service",
]
