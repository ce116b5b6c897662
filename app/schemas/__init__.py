from .employee import (
    Employee,
    EmployeeCreate,
    EmployeeUpdate,
    EmployeePublic,
    EmployeeLocated,
    EmployeeStats
)
from .attendance import (
    AttendanceEvent,
    ClockInRequest,
    MonitoringScanRequest,
    ScanResult,
    ClockInResult,
    LastAttendanceResponse,
    EmployeeEvent,
    MapLocation,
    PendingEmployee,
    DailyMapResponse
)
from .audit import AuditLog, AuditClearResult
from .common import DataResponse, PaginationResponse

__all__ = [
    # Employee schemas
    "Employee",
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeePublic",
    "EmployeeLocated",
    "EmployeeStats",
    # Attendance schemas
    "AttendanceEvent",
    "ClockInRequest",
    "MonitoringScanRequest",
    "ScanResult",
    "ClockInResult",
    "LastAttendanceResponse",
    "EmployeeEvent",
    "MapLocation",
    "PendingEmployee",
    "DailyMapResponse",
    # Audit schemas
    "AuditLog",
    "AuditClearResult",
    # Common schemas
    "DataResponse",
    "PaginationResponse"
]
