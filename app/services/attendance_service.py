"""
Attendance Service - Main business logic for recording scans
"""
import re
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from atams.logging import get_logger
from app.core.clock import Clock, SystemClock, to_utc
from app.core.config import settings
from app.core.exceptions import ValidationError, NotFoundError, ConflictError, PersistenceError
from app.models.employee import Employee
from app.models.attendance_event import AttendanceEvent as AttendanceEventModel
from app.repositories.employee_repository import EmployeeRepository
from app.repositories.attendance_event_repository import AttendanceEventRepository
from app.services.admission_policy import AdmissionPolicy, STRICT, LENIENT, TIME_OUT
from app.services.audit_service import AuditService
from app.schemas.attendance import (
    AttendanceEvent,
    ClockInRequest,
    ClockInResult,
    MonitoringScanRequest,
    ScanResult,
    LastAttendanceResponse
)
from app.schemas.employee import EmployeePublic

logger = get_logger(__name__)

SOURCE_EMPLOYEE_ATTENDANCE = "employee_attendance"
SOURCE_KIOSK_MONITORING = "kiosk_monitoring"

STATUS_ACTIVE = "Active"
STATUS_INACTIVE = "Inactive"

# Monitoring clients send their own vocabulary for going off duty
OFF_DUTY_STATUSES = {"inactive", "off duty", "off-duty", "offduty", "time out"}

# QR payloads may carry a templated card: "ID: <value>\nName: ..."
QR_ID_PATTERN = re.compile(r"^\s*ID\s*:\s*([^\n\r]+)", re.IGNORECASE | re.MULTILINE)


def normalize_employee_id(raw: Optional[str]) -> str:
    """Trim the scanned value and unwrap an 'ID: <value>' payload"""
    if raw is None:
        return ""
    value = raw.strip()
    match = QR_ID_PATTERN.search(value)
    if match:
        value = match.group(1).strip()
    return value


def resolve_duty_status(status: Optional[str]) -> Tuple[str, str]:
    """Map a monitoring client's status onto (stored status, duty state)"""
    if status and status.strip().lower() in OFF_DUTY_STATUSES:
        return STATUS_INACTIVE, "OffDuty"
    return STATUS_ACTIVE, "OnDuty"


class AttendanceService:
    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock or SystemClock(settings.APP_TIMEZONE)
        self.employee_repo = EmployeeRepository()
        self.event_repo = AttendanceEventRepository()
        self.audit_service = AuditService()
        self.strict_policy = AdmissionPolicy(STRICT)
        self.lenient_policy = AdmissionPolicy(LENIENT)

    def resolve_employee(self, db: Session, raw_employee_id: Optional[str]) -> Employee:
        """
        Resolve the scanned external ID to exactly one employee

        Raises:
            ValidationError: Empty ID
            NotFoundError: No employee with this ID
            ConflictError: External ID is not unique
            PersistenceError: Lookup failed
        """
        employee_id = normalize_employee_id(raw_employee_id)
        if not employee_id:
            raise ValidationError("Employee ID is required")

        try:
            matches = self.employee_repo.find_by_employee_id(db, employee_id)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Employee lookup failed for {employee_id}: {str(e)}", exc_info=True)
            raise PersistenceError("Database error") from e

        if not matches:
            logger.info(f"Employee not found: {employee_id}")
            raise NotFoundError(f"Employee not found: {employee_id}")
        if len(matches) > 1:
            logger.warning(
                f"Duplicate employee ID: {employee_id}",
                extra={'extra_data': {'em_ids': [m.em_id for m in matches]}}
            )
            raise ConflictError(f"Employee ID is not unique: {employee_id}")

        return matches[0]

    def _persist_event(self, db: Session, event_data: dict) -> AttendanceEventModel:
        try:
            return self.event_repo.create_event(db, event_data)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"Attendance insert failed: {str(e)}",
                exc_info=True,
                extra={'extra_data': {'em_id': event_data.get("ae_employee_id")}}
            )
            raise PersistenceError("Failed to record attendance") from e

    def clock_in(self, db: Session, request: ClockInRequest) -> ClockInResult:
        """
        Process a public Time In / Time Out scan with strict admission

        Args:
            db: Database session
            request: Clock-in request data

        Returns:
            ClockInResult: Created event with employee snapshot

        Raises:
            ValidationError: Missing ID, GPS or base coordinates
            NotFoundError: Unknown employee
            TimeWindowError: Outside the action's clock window
            GeofenceError: Farther than the allowed radius
            PersistenceError: Event could not be stored
        """
        now = self.clock.now()
        employee = self.resolve_employee(db, request.employee_id)

        decision = self.strict_policy.evaluate(
            employee, request.type, now, request.latitude, request.longitude
        )
        if not decision.accepted:
            logger.info(
                f"{request.type} rejected for {employee.em_employee_id}: {decision.reason}",
                extra={'extra_data': {'rejection': decision.rejection, 'distance': decision.distance}}
            )
        decision.raise_for_rejection()

        is_time_out = request.type == TIME_OUT
        event = self._persist_event(db, {
            "ae_employee_id": employee.em_id,
            "ae_scanned_at": to_utc(now),
            "ae_lat": decision.latitude,
            "ae_lon": decision.longitude,
            "ae_distance_m": decision.distance,
            "ae_alert_type": decision.alert_type,
            "ae_status": STATUS_INACTIVE if is_time_out else STATUS_ACTIVE,
            "ae_clock_state": "Out" if is_time_out else "In",
            "ae_remarks": request.type,
            "ae_scan_source": SOURCE_EMPLOYEE_ATTENDANCE,
        })

        action = "PUBLIC_TIMEOUT" if is_time_out else "PUBLIC_TIMEIN"
        self.audit_service.record(
            db,
            action=f"{action}_ALERT" if decision.alert_type else action,
            table_name="attendance_events",
            record_id=event.ae_id,
            changes={
                "employee_id": employee.em_id,
                "name": employee.em_full_name,
                "type": request.type,
                "distance": decision.distance,
                "alert": decision.alert_type,
                "source": SOURCE_EMPLOYEE_ATTENDANCE,
            },
            user_id=None
        )

        logger.info(f"{request.type} recorded for {employee.em_employee_id}: event {event.ae_id}")

        return ClockInResult(
            employee=EmployeePublic.model_validate(employee),
            attendance=AttendanceEvent.model_validate(event),
            alert=decision.alert_type,
            distance=decision.distance,
            type=request.type
        )

    def monitoring_scan(self, db: Session, user_id: Optional[int], request: MonitoringScanRequest) -> ScanResult:
        """
        Process a supervisor monitoring scan with lenient admission

        Location problems never block the scan; they are stored as alerts.
        """
        now = self.clock.now()
        employee = self.resolve_employee(db, request.employee_id)

        decision = self.lenient_policy.evaluate(
            employee, request.status, now, request.latitude, request.longitude
        )
        decision.raise_for_rejection()

        status, duty_state = resolve_duty_status(request.status)
        event = self._persist_event(db, {
            "ae_employee_id": employee.em_id,
            "ae_scanned_at": to_utc(now),
            "ae_lat": decision.latitude,
            "ae_lon": decision.longitude,
            "ae_distance_m": decision.distance,
            "ae_alert_type": decision.alert_type,
            "ae_status": status,
            "ae_duty_state": duty_state,
            "ae_remarks": request.remarks,
            "ae_scan_source": SOURCE_KIOSK_MONITORING,
        })

        self.audit_service.record(
            db,
            action="SCAN_ALERT" if decision.alert_type else "SCAN",
            table_name="attendance_events",
            record_id=event.ae_id,
            changes={
                "employee_id": employee.em_id,
                "name": employee.em_full_name,
                "distance": decision.distance,
                "alert": decision.alert_type,
                "remarks": request.remarks,
            },
            user_id=user_id
        )

        if decision.alert_type:
            logger.warning(
                f"Scan recorded with alert for {employee.em_employee_id}: {decision.alert_type}",
                extra={'extra_data': {'event_id': event.ae_id, 'distance': decision.distance}}
            )

        return ScanResult(
            employee=EmployeePublic.model_validate(employee),
            attendance=AttendanceEvent.model_validate(event),
            alert=decision.alert_type,
            distance=decision.distance
        )

    def get_last_attendance(self, db: Session, employee_id: str) -> LastAttendanceResponse:
        """Get the most recent event of one employee by external ID"""
        employee = self.resolve_employee(db, employee_id)

        event = self.event_repo.get_latest_for_employee(db, employee.em_id)
        if not event:
            raise NotFoundError(f"No attendance record found for: {employee.em_employee_id}")

        return LastAttendanceResponse(
            employee=EmployeePublic.model_validate(employee),
            attendance=AttendanceEvent.model_validate(event)
        )
