"""
Audit Endpoints - Audit trail browsing and maintenance
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.audit_service import AuditService
from app.schemas import AuditLog, AuditClearResult, DataResponse, PaginationResponse
from app.api.deps import require_auth, require_min_role_level
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
audit_service = AuditService()


@router.get(
    "/",
    response_model=PaginationResponse[AuditLog],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def list_audit_logs(
    action: Optional[str] = Query(None, description="Filter by action, e.g. SCAN_ALERT"),
    user_id: Optional[int] = Query(None, description="Filter by acting user"),
    limit: int = Query(50, ge=1, le=500, description="Maximum records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get audit logs, newest first

    **Authorization:**
    - Requires role level >= 50 (Admin or above)
    """
    logs = audit_service.list_logs(db, action=action, user_id=user_id, skip=offset, limit=limit)
    total = audit_service.count_logs(db, action=action, user_id=user_id)

    response = PaginationResponse(
        success=True,
        message="Audit logs retrieved successfully",
        data=logs,
        total=total,
        page=offset // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/{al_id}",
    response_model=DataResponse[AuditLog],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def get_audit_log(
    al_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """Get single audit log entry"""
    entry = audit_service.get_log(db, al_id)

    response = DataResponse(
        success=True,
        message="Audit log retrieved successfully",
        data=entry
    )

    return encrypt_response_data(response, settings)


@router.delete(
    "/",
    response_model=DataResponse[AuditClearResult],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(100))]
)
async def clear_audit_logs(
    older_than_days: Optional[int] = Query(None, ge=1, description="Only delete entries older than this many days"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Clear audit logs

    **Authorization:**
    - Requires role level >= 100 (Super admin)

    **Note:**
    - Attendance events are never deleted
    """
    deleted_count = audit_service.clear_logs(
        db, user_id=current_user["user_id"], older_than_days=older_than_days
    )

    scope = f" older than {older_than_days} days" if older_than_days else ""
    result = AuditClearResult(
        deleted_count=deleted_count,
        message=f"Successfully deleted {deleted_count} audit logs{scope}"
    )

    return DataResponse(
        success=True,
        message="Audit logs cleared",
        data=result
    )
