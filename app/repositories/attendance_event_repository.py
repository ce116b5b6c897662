"""
Attendance Event Repository - Data access layer for attendance events
"""
from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.attendance_event import AttendanceEvent


class AttendanceEventRepository(BaseRepository[AttendanceEvent]):
    def __init__(self):
        super().__init__(AttendanceEvent)

    def create_event(self, db: Session, event_data: dict) -> AttendanceEvent:
        """Create attendance event and return the created object"""
        db_event = AttendanceEvent(**event_data)
        db.add(db_event)
        db.commit()
        db.refresh(db_event)
        return db_event

    def get_latest_for_employee(self, db: Session, em_id: int) -> Optional[AttendanceEvent]:
        """Get employee's most recent event using ORM"""
        return (
            db.query(AttendanceEvent)
            .filter(AttendanceEvent.ae_employee_id == em_id)
            .order_by(AttendanceEvent.ae_scanned_at.desc(), AttendanceEvent.ae_id.desc())
            .first()
        )

    def get_recent_events(
        self,
        db: Session,
        since: datetime,
        scan_source: str = None
    ) -> List[AttendanceEvent]:
        """Get events newer than `since`, newest first, using ORM"""
        query = db.query(AttendanceEvent).filter(AttendanceEvent.ae_scanned_at > since)

        if scan_source:
            query = query.filter(AttendanceEvent.ae_scan_source == scan_source)

        return query.order_by(
            AttendanceEvent.ae_scanned_at.desc(),
            AttendanceEvent.ae_id.desc()
        ).all()

    def get_history(self, db: Session, limit: int = 50, scan_source: str = None) -> List[AttendanceEvent]:
        """Get latest events across all employees using ORM"""
        query = db.query(AttendanceEvent)

        if scan_source:
            query = query.filter(AttendanceEvent.ae_scan_source == scan_source)

        return query.order_by(
            AttendanceEvent.ae_scanned_at.desc(),
            AttendanceEvent.ae_id.desc()
        ).limit(limit).all()
