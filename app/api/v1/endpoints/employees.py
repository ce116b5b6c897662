"""
Employees Endpoints - CRUD operations for the employee registry
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.employee_service import EmployeeService
from app.schemas import (
    Employee,
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeStats,
    DataResponse,
    PaginationResponse
)
from app.api.deps import require_auth, require_min_role_level
from app.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
employee_service = EmployeeService()


@router.get(
    "/",
    response_model=PaginationResponse[Employee],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def list_employees(
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(Active|Deactive|all)$"),
    search: str = Query("", description="Search by name or employee ID"),
    sort_by: str = Query("created_at", description="created_at, full_name, employee_id, role or area"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Get list of employees with filtering, search, sorting and pagination

    **Authorization:**
    - Requires role level >= 1
    """
    employees = employee_service.list_employees(
        db, status=status_filter, search=search, sort_by=sort_by,
        sort_order=sort_order, skip=skip, limit=limit
    )
    total = employee_service.count_employees(db, status=status_filter, search=search)

    response = PaginationResponse(
        success=True,
        message="Employees retrieved successfully",
        data=employees,
        total=total,
        page=skip // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/stats/summary",
    response_model=DataResponse[EmployeeStats],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_employee_stats(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """Employee counters: total, active, inactive and with registered GPS"""
    stats = employee_service.get_stats(db)

    response = DataResponse(
        success=True,
        message="Employee stats retrieved successfully",
        data=stats
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/{em_id}",
    response_model=DataResponse[Employee],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(1))]
)
async def get_employee(
    em_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """Get single employee by ID"""
    employee = employee_service.get_employee(db, em_id)

    response = DataResponse(
        success=True,
        message="Employee retrieved successfully",
        data=employee
    )

    return encrypt_response_data(response, settings)


@router.post(
    "/",
    response_model=DataResponse[Employee],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_min_role_level(50))]
)
async def create_employee(
    employee: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Create new employee

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Validation:**
    - em_employee_id: required, unique, max 50 characters
    - em_full_name, em_role: required
    - Defaults: area LDN, status Active, radius 200m
    """
    new_employee = employee_service.create_employee(db, employee, user_id=current_user["user_id"])

    return DataResponse(
        success=True,
        message="Employee created successfully",
        data=new_employee
    )


@router.put(
    "/{em_id}",
    response_model=DataResponse[Employee],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_min_role_level(50))]
)
async def update_employee(
    em_id: int,
    employee: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Update existing employee

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Note:**
    - em_employee_id cannot be changed
    """
    updated_employee = employee_service.update_employee(db, em_id, employee, user_id=current_user["user_id"])

    return DataResponse(
        success=True,
        message="Employee updated successfully",
        data=updated_employee
    )


@router.delete(
    "/{em_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_min_role_level(50))]
)
async def delete_employee(
    em_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_auth)
):
    """
    Delete employee

    **Authorization:**
    - Requires role level >= 50 (Admin or above)

    **Note:**
    - Attendance events of the employee are kept
    """
    employee_service.delete_employee(db, em_id, user_id=current_user["user_id"])

    # 204 returns no content
    return None
