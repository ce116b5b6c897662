from .employee_repository import EmployeeRepository
from .attendance_event_repository import AttendanceEventRepository
from .audit_log_repository import AuditLogRepository

__all__ = [
    "EmployeeRepository",
    "AttendanceEventRepository",
    "AuditLogRepository"
]
