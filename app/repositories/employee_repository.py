"""
Employee Repository - Data access layer for employees
"""
from typing import Optional, List, Iterable
from sqlalchemy.orm import Session
from sqlalchemy import or_

from atams.db import BaseRepository
from app.models.employee import Employee

SORTABLE_FIELDS = {
    "created_at": Employee.em_created_at,
    "full_name": Employee.em_full_name,
    "employee_id": Employee.em_employee_id,
    "role": Employee.em_role,
    "area": Employee.em_area,
}


class EmployeeRepository(BaseRepository[Employee]):
    def __init__(self):
        super().__init__(Employee)

    def get_by_id(self, db: Session, em_id: int) -> Optional[Employee]:
        """Get employee by surrogate ID using ORM"""
        return db.query(Employee).filter(Employee.em_id == em_id).first()

    def find_by_employee_id(self, db: Session, employee_id: str) -> List[Employee]:
        """
        Find employees by external (QR) ID using ORM

        At most two rows are fetched: one is a match, two is a uniqueness
        violation the caller must report.
        """
        return (
            db.query(Employee)
            .filter(Employee.em_employee_id == employee_id)
            .order_by(Employee.em_id.asc())
            .limit(2)
            .all()
        )

    def get_by_ids(self, db: Session, em_ids: Iterable[int]) -> List[Employee]:
        """Get employees for a set of surrogate IDs using ORM"""
        ids = list(set(em_ids))
        if not ids:
            return []
        return db.query(Employee).filter(Employee.em_id.in_(ids)).all()

    def get_all(self, db: Session) -> List[Employee]:
        return db.query(Employee).order_by(Employee.em_full_name.asc()).all()

    def _filtered_query(self, db: Session, status: str = None, search: str = ""):
        query = db.query(Employee)

        if status and status != "all":
            query = query.filter(Employee.em_status == status)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Employee.em_full_name.ilike(pattern),
                Employee.em_employee_id.ilike(pattern)
            ))

        return query

    def get_employees_with_filters(
        self,
        db: Session,
        status: str = None,
        search: str = "",
        sort_by: str = "created_at",
        sort_order: str = "desc",
        skip: int = 0,
        limit: int = 100
    ) -> List[Employee]:
        """Get employees with status filter, search and sorting using ORM"""
        query = self._filtered_query(db, status, search)

        column = SORTABLE_FIELDS.get(sort_by, Employee.em_created_at)
        if sort_order.lower() == "asc":
            query = query.order_by(column.asc(), Employee.em_id.asc())
        else:
            query = query.order_by(column.desc(), Employee.em_id.desc())

        return query.offset(skip).limit(limit).all()

    def count_employees_with_filters(self, db: Session, status: str = None, search: str = "") -> int:
        """Count employees matching the list filters using ORM"""
        return self._filtered_query(db, status, search).count()

    def check_employee_id_exists(self, db: Session, employee_id: str) -> bool:
        """Check if external ID is taken using native SQL"""
        query = "SELECT 1 FROM kiosk.employees WHERE em_employee_id = :employee_id LIMIT 1"
        result = self.execute_raw_sql_scalar(db, query, {"employee_id": employee_id})
        return result is not None

    def get_stats(self, db: Session) -> dict:
        """Employee counters for the dashboard using native SQL"""
        query = """
            SELECT
                COUNT(*) AS total,
                COALESCE(SUM(CASE WHEN em_status = 'Active' THEN 1 ELSE 0 END), 0) AS active,
                COALESCE(SUM(CASE WHEN em_status = 'Deactive' THEN 1 ELSE 0 END), 0) AS inactive,
                COALESCE(SUM(CASE WHEN em_latitude IS NOT NULL AND em_longitude IS NOT NULL
                                  THEN 1 ELSE 0 END), 0) AS with_gps
            FROM kiosk.employees
        """
        rows = self.execute_raw_sql_dict(db, query)
        return rows[0] if rows else {"total": 0, "active": 0, "inactive": 0, "with_gps": 0}

    def delete_by_id(self, db: Session, em_id: int) -> bool:
        """Delete employee by ID and return success status"""
        employee = self.get_by_id(db, em_id)
        if employee:
            db.delete(employee)
            db.commit()
            return True
        return False
