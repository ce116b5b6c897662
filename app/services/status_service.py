"""
Status Service - Derives per-employee status from the attendance log

Nothing here is stored; every read recomputes the latest state from events.
"""
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from atams.logging import get_logger
from app.core.clock import Clock, SystemClock, to_utc
from app.core.config import settings
from app.models.attendance_event import AttendanceEvent as AttendanceEventModel
from app.repositories.employee_repository import EmployeeRepository
from app.repositories.attendance_event_repository import AttendanceEventRepository
from app.schemas.attendance import (
    AttendanceEvent,
    EmployeeEvent,
    MapLocation,
    PendingEmployee,
    DailyMapResponse
)
from app.schemas.employee import EmployeeLocated

logger = get_logger(__name__)

MAP_ACTIVE = "active"
MAP_INACTIVE = "inactive"
MAP_TODAY = "today"
MAP_PENDING = "pending"


def latest_per_employee(events: Iterable[AttendanceEventModel]) -> List[AttendanceEventModel]:
    """
    Keep the newest event of each employee.

    Ties on timestamp go to the highest event id. Result is newest first.
    """
    latest: Dict[int, AttendanceEventModel] = {}
    for event in events:
        current = latest.get(event.ae_employee_id)
        if current is None or _event_key(event) > _event_key(current):
            latest[event.ae_employee_id] = event
    return sorted(latest.values(), key=_event_key, reverse=True)


def classify_status(
    event: Optional[AttendanceEventModel],
    now: datetime,
    active_window: timedelta
) -> str:
    """Map an employee's latest event onto the map vocabulary"""
    if event is None:
        return MAP_PENDING
    if event.ae_status == "Inactive":
        return MAP_INACTIVE
    if to_utc(now) - to_utc(event.ae_scanned_at) < active_window:
        return MAP_ACTIVE
    return MAP_TODAY


def _event_key(event: AttendanceEventModel):
    return (to_utc(event.ae_scanned_at), event.ae_id)


class StatusService:
    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock or SystemClock(settings.APP_TIMEZONE)
        self.employee_repo = EmployeeRepository()
        self.event_repo = AttendanceEventRepository()

    def _employees_for(self, db: Session, events: List[AttendanceEventModel]) -> Dict[int, EmployeeLocated]:
        employees = self.employee_repo.get_by_ids(db, [e.ae_employee_id for e in events])
        return {emp.em_id: EmployeeLocated.model_validate(emp) for emp in employees}

    def _join(self, db: Session, events: List[AttendanceEventModel]) -> List[EmployeeEvent]:
        employees = self._employees_for(db, events)
        return [
            EmployeeEvent(
                **AttendanceEvent.model_validate(event).model_dump(),
                employee=employees.get(event.ae_employee_id)
            )
            for event in events
        ]

    def get_on_duty(self, db: Session, source: Optional[str] = None) -> List[EmployeeEvent]:
        """Latest event per employee within the on-duty window"""
        now = self.clock.now()
        since = to_utc(now) - timedelta(hours=settings.ON_DUTY_WINDOW_HOURS)

        events = self.event_repo.get_recent_events(db, since, scan_source=source)
        return self._join(db, latest_per_employee(events))

    def get_daily_map(
        self,
        db: Session,
        source: Optional[str] = None,
        include_pending: bool = False
    ) -> DailyMapResponse:
        """
        Latest event per employee since local midnight, with map status

        Args:
            db: Database session
            source: Restrict to one scan source
            include_pending: Also list employees without any event today

        Returns:
            DailyMapResponse: located events plus optional pending employees
        """
        now = self.clock.now()
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        active_window = timedelta(hours=settings.ACTIVE_THRESHOLD_HOURS)

        latest = latest_per_employee(
            self.event_repo.get_recent_events(db, to_utc(midnight), scan_source=source)
        )
        employees = self._employees_for(db, latest)

        locations = [
            MapLocation(
                **AttendanceEvent.model_validate(event).model_dump(),
                employee=employees.get(event.ae_employee_id),
                map_status=classify_status(event, now, active_window)
            )
            for event in latest
        ]

        pending = []
        if include_pending:
            seen = {event.ae_employee_id for event in latest}
            pending = [
                PendingEmployee(employee=EmployeeLocated.model_validate(emp))
                for emp in self.employee_repo.get_all(db)
                if emp.em_id not in seen
            ]

        logger.debug(
            "Daily map computed",
            extra={'extra_data': {'locations': len(locations), 'pending': len(pending), 'source': source}}
        )
        return DailyMapResponse(locations=locations, pending=pending)

    def get_history(self, db: Session, limit: Optional[int] = None, source: Optional[str] = None) -> List[EmployeeEvent]:
        """Most recent events across all employees, newest first"""
        events = self.event_repo.get_history(
            db, limit=limit or settings.HISTORY_DEFAULT_LIMIT, scan_source=source
        )
        return self._join(db, events)
