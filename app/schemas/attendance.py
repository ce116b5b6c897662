"""
Attendance Schemas for scans, events and monitoring projections
"""
from typing import Optional, Literal, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import fix_datetime_timezone
from app.schemas.employee import EmployeePublic, EmployeeLocated

ClockType = Literal["Time In", "Time Out"]
MapStatus = Literal["active", "inactive", "today", "pending"]


class AttendanceEventBase(BaseModel):
    ae_employee_id: int
    ae_scanned_at: datetime
    ae_lat: Optional[float] = None
    ae_lon: Optional[float] = None
    ae_distance_m: Optional[int] = None
    ae_alert_type: Optional[str] = None
    ae_status: Literal["Active", "Inactive"]
    ae_clock_state: Optional[Literal["In", "Out"]] = None
    ae_duty_state: Optional[Literal["OnDuty", "OffDuty"]] = None
    ae_remarks: Optional[str] = None
    ae_scan_source: str


class AttendanceEventInDB(AttendanceEventBase):
    model_config = ConfigDict(from_attributes=True)

    ae_id: int
    ae_created_at: Optional[datetime] = None

    @field_validator('ae_scanned_at', 'ae_created_at', mode='before')
    @classmethod
    def fix_timezone(cls, v):
        return fix_datetime_timezone(v)


class AttendanceEvent(AttendanceEventInDB):
    pass


# Request/Response schemas for API endpoints
class ClockInRequest(BaseModel):
    """Request schema for the public Time In / Time Out endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    employee_id: Optional[str] = Field(None, alias="employeeId")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    type: ClockType = "Time In"


class MonitoringScanRequest(BaseModel):
    """Request schema for supervisor kiosk-monitoring scans"""
    model_config = ConfigDict(populate_by_name=True)

    employee_id: Optional[str] = Field(None, alias="employeeId")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    status: Optional[str] = None  # free-form: 'Active', 'Inactive', 'On Duty', 'Off Duty'
    remarks: Optional[str] = Field(None, max_length=500)


class ScanResult(BaseModel):
    """Response schema for a recorded monitoring scan"""
    employee: EmployeePublic
    attendance: AttendanceEvent
    alert: Optional[str] = None
    distance: Optional[int] = None


class ClockInResult(ScanResult):
    """Response schema for a recorded Time In / Time Out"""
    type: ClockType


class LastAttendanceResponse(BaseModel):
    employee: EmployeePublic
    attendance: AttendanceEvent


class EmployeeEvent(AttendanceEvent):
    """Event joined with the scanned employee (None when the employee was deleted)"""
    employee: Optional[EmployeeLocated] = None


class MapLocation(EmployeeEvent):
    map_status: MapStatus


class PendingEmployee(BaseModel):
    employee: EmployeeLocated
    map_status: MapStatus = "pending"


class DailyMapResponse(BaseModel):
    locations: List[MapLocation]
    pending: List[PendingEmployee] = []
