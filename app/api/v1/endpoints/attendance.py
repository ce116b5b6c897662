"""
Attendance Endpoints - Public kiosk Time In / Time Out
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.attendance_service import AttendanceService
from app.schemas import (
    ClockInRequest,
    ClockInResult,
    LastAttendanceResponse,
    DataResponse
)
from app.api.deps import get_attendance_service
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()


@router.post(
    "/clock-in",
    response_model=DataResponse[ClockInResult],
    status_code=status.HTTP_201_CREATED
)
async def clock_in(
    request: ClockInRequest,
    db: Session = Depends(get_db),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    """
    Record a Time In / Time Out from a kiosk QR scan

    **Authentication:**
    - Public (kiosk device)

    **Admission:**
    1. Resolve employee by scanned ID
    2. Time window check for the requested type
    3. GPS and registered coordinates required
    4. Geofence: distance must be within the employee radius

    **Errors:**
    - 400: Missing employee ID, GPS or registered coordinates
    - 403: Outside the time window, or out of range (details carry distance/allowedRadius)
    - 404: Employee not found
    - 409: Employee ID is not unique
    - 500: Attendance could not be stored (details.retryable)
    """
    result = attendance_service.clock_in(db, request)

    return DataResponse(
        success=True,
        message=f"{result.type} recorded successfully",
        data=result
    )


@router.get(
    "/last/{employee_id}",
    response_model=DataResponse[LastAttendanceResponse],
    status_code=status.HTTP_200_OK
)
async def get_last_attendance(
    employee_id: str,
    db: Session = Depends(get_db),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    """
    Get an employee's most recent attendance event

    **Authentication:**
    - Public (kiosk confirmation screen)
    """
    last = attendance_service.get_last_attendance(db, employee_id)

    response = DataResponse(
        success=True,
        message="Last attendance retrieved successfully",
        data=last
    )

    return encrypt_response_data(response, settings)
