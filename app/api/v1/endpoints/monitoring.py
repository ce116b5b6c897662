"""
Monitoring Endpoints - Supervisor scans, on-duty list, daily map and history
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.attendance_service import AttendanceService
from app.services.status_service import StatusService
from app.schemas import (
    MonitoringScanRequest,
    ScanResult,
    EmployeeEvent,
    DailyMapResponse,
    DataResponse
)
from app.api.deps import (
    require_auth,
    require_min_role_level,
    get_attendance_service,
    get_status_service
)
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()

SOURCE_PATTERN = "^(employee_attendance|kiosk_monitoring)$"


@router.post(
    "/scan",
    response_model=DataResponse[ScanResult],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(1))]
)
async def monitoring_scan(
    request: MonitoringScanRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    """
    Record a supervisor monitoring scan

    **Authentication:**
    - Requires valid user authentication (role level >= 1)

    **Behavior:**
    - No time window
    - Out-of-range, missing GPS and missing registered coordinates are
      recorded as alerts instead of rejected
    """
    user_id = current_user["user_id"]

    result = attendance_service.monitoring_scan(db, user_id, request)

    message = "Scan recorded successfully"
    if result.alert:
        message = f"Scan recorded with alert: {result.alert}"

    return DataResponse(
        success=True,
        message=message,
        data=result
    )


@router.get(
    "/on-duty",
    response_model=DataResponse[List[EmployeeEvent]],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_on_duty(
    source: Optional[str] = Query(None, pattern=SOURCE_PATTERN, description="Filter by scan source"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth),
    status_service: StatusService = Depends(get_status_service)
):
    """
    Latest event per employee within the on-duty window

    **Authentication:**
    - Requires valid user authentication (role level >= 1)
    """
    events = status_service.get_on_duty(db, source=source)

    response = DataResponse(
        success=True,
        message="On-duty employees retrieved successfully",
        data=events
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/daily-map",
    response_model=DataResponse[DailyMapResponse],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_daily_map(
    source: Optional[str] = Query(None, pattern=SOURCE_PATTERN, description="Filter by scan source"),
    include_pending: bool = Query(False, description="Also list employees without a scan today"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth),
    status_service: StatusService = Depends(get_status_service)
):
    """
    Today's latest location per employee with map status

    **Map status:**
    - active: latest scan is Active and recent
    - inactive: latest scan is Inactive
    - today: latest scan is Active but older than the active threshold
    - pending: no scan today (only with include_pending)
    """
    daily_map = status_service.get_daily_map(db, source=source, include_pending=include_pending)

    response = DataResponse(
        success=True,
        message="Daily map retrieved successfully",
        data=daily_map
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/history",
    response_model=DataResponse[List[EmployeeEvent]],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_history(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum records to return"),
    source: Optional[str] = Query(None, pattern=SOURCE_PATTERN, description="Filter by scan source"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth),
    status_service: StatusService = Depends(get_status_service)
):
    """
    Most recent scans across all employees, newest first
    """
    events = status_service.get_history(db, limit=limit, source=source)

    response = DataResponse(
        success=True,
        message="Scan history retrieved successfully",
        data=events
    )

    return encrypt_response_data(response, settings)
