from .admission_policy import AdmissionPolicy
from .attendance_service import AttendanceService
from .status_service import StatusService
from .employee_service import EmployeeService
from .audit_service import AuditService

__all__ = [
    "AdmissionPolicy",
    "AttendanceService",
    "StatusService",
    "EmployeeService",
    "AuditService"
]
