"""
Attendance Event Model - Append-only log of admitted scans
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Float
from sqlalchemy.sql import func
from atams.db import Base

from app.models.employee import PrimaryKey


class AttendanceEvent(Base):
    """Attendance Event model for kiosk schema - Table: kiosk.attendance_events"""
    __tablename__ = "attendance_events"
    __table_args__ = {"schema": "kiosk"}

    ae_id = Column(PrimaryKey, primary_key=True, index=True, autoincrement=True)
    ae_employee_id = Column(BigInteger, nullable=False, index=True)  # References kiosk.employees(em_id), no FK
    ae_scanned_at = Column(DateTime(timezone=True), nullable=False, index=True)
    ae_lat = Column(Float, nullable=True)
    ae_lon = Column(Float, nullable=True)
    ae_distance_m = Column(Integer, nullable=True)
    ae_alert_type = Column(String(50), nullable=True)  # 'Location Alert', 'No GPS', 'No Base Location'
    ae_status = Column(String(10), nullable=False, default="Active")  # 'Active' or 'Inactive'
    ae_clock_state = Column(String(5), nullable=True)  # 'In' or 'Out' (kiosk clock-in)
    ae_duty_state = Column(String(10), nullable=True)  # 'OnDuty' or 'OffDuty' (monitoring)
    ae_remarks = Column(String(500), nullable=True)
    ae_scan_source = Column(String(30), nullable=False, index=True)  # 'employee_attendance' or 'kiosk_monitoring'
    ae_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
