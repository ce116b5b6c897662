"""
Employee Service - Business logic for the employee registry
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from atams.logging import get_logger
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.employee import EmployeeCreate, EmployeeUpdate, Employee, EmployeeStats
from app.services.audit_service import AuditService
from app.core.exceptions import NotFoundError, ValidationError, ConflictError

logger = get_logger(__name__)

AUDIT_TABLE = "employees"


def _snapshot(obj) -> dict:
    return Employee.model_validate(obj).model_dump(mode="json")


class EmployeeService:
    def __init__(self) -> None:
        self.repo = EmployeeRepository()
        self.audit_service = AuditService()

    def list_employees(
        self,
        db: Session,
        status: str = None,
        search: str = "",
        sort_by: str = "created_at",
        sort_order: str = "desc",
        skip: int = 0,
        limit: int = 100
    ) -> List[Employee]:
        employees = self.repo.get_employees_with_filters(
            db, status=status, search=search, sort_by=sort_by,
            sort_order=sort_order, skip=skip, limit=limit
        )
        return [Employee.model_validate(e) for e in employees]

    def count_employees(self, db: Session, status: str = None, search: str = "") -> int:
        return self.repo.count_employees_with_filters(db, status=status, search=search)

    def get_employee(self, db: Session, em_id: int) -> Employee:
        employee = self.repo.get_by_id(db, em_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return Employee.model_validate(employee)

    def create_employee(self, db: Session, payload: EmployeeCreate, user_id: Optional[int] = None) -> Employee:
        if self.repo.check_employee_id_exists(db, payload.em_employee_id):
            raise ConflictError(f"Employee ID already exists: {payload.em_employee_id}")

        data = payload.model_dump()
        data["em_created_by"] = user_id
        obj = self.repo.create(db, data)

        self.audit_service.record(
            db, action="CREATE", table_name=AUDIT_TABLE, record_id=obj.em_id,
            changes=_snapshot(obj), user_id=user_id
        )
        logger.info(f"Employee created: {obj.em_employee_id}", extra={'extra_data': {'em_id': obj.em_id}})
        return Employee.model_validate(obj)

    def update_employee(
        self,
        db: Session,
        em_id: int,
        payload: EmployeeUpdate,
        user_id: Optional[int] = None
    ) -> Employee:
        obj = self.repo.get_by_id(db, em_id)
        if not obj:
            raise NotFoundError("Employee not found")

        update_data = payload.model_dump(exclude_unset=True)
        # The external ID is printed on QR badges and cannot change
        new_external_id = update_data.pop("em_employee_id", None)
        if new_external_id is not None and new_external_id.strip() != obj.em_employee_id:
            raise ValidationError("Employee ID cannot be changed")

        before = _snapshot(obj)
        obj = self.repo.update(db, obj, update_data)

        self.audit_service.record(
            db, action="UPDATE", table_name=AUDIT_TABLE, record_id=obj.em_id,
            changes={"before": before, "after": _snapshot(obj)}, user_id=user_id
        )
        return Employee.model_validate(obj)

    def delete_employee(self, db: Session, em_id: int, user_id: Optional[int] = None) -> None:
        obj = self.repo.get_by_id(db, em_id)
        if not obj:
            raise NotFoundError("Employee not found")

        # Attendance events keep their employee reference for history
        snapshot = _snapshot(obj)
        self.repo.delete_by_id(db, em_id)

        self.audit_service.record(
            db, action="DELETE", table_name=AUDIT_TABLE, record_id=em_id,
            changes=snapshot, user_id=user_id
        )
        logger.info(f"Employee deleted: {snapshot['em_employee_id']}", extra={'extra_data': {'em_id': em_id}})
        return None

    def get_stats(self, db: Session) -> EmployeeStats:
        stats = self.repo.get_stats(db)
        return EmployeeStats(
            total=int(stats["total"] or 0),
            active=int(stats["active"] or 0),
            inactive=int(stats["inactive"] or 0),
            withGPS=int(stats["with_gps"] or 0)
        )
