from .employee import Employee
from .attendance_event import AttendanceEvent
from .audit_log import AuditLog

__all__ = [
    "Employee",
    "AttendanceEvent",
    "AuditLog"
]
