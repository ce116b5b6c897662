"""
Employee Model - Identity and geofence base for attendance scans
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Float
from sqlalchemy.sql import func
from atams.db import Base

# SQLite only autoincrements INTEGER primary keys
PrimaryKey = BigInteger().with_variant(Integer, "sqlite")


class Employee(Base):
    """Employee model for kiosk schema - Table: kiosk.employees"""
    __tablename__ = "employees"
    __table_args__ = {"schema": "kiosk"}

    em_id = Column(PrimaryKey, primary_key=True, index=True, autoincrement=True)
    em_employee_id = Column(String(50), nullable=False, unique=True, index=True)  # Value encoded in the QR
    em_full_name = Column(String(255), nullable=False)
    em_role = Column(String(100), nullable=False)
    em_franchise = Column(String(255), nullable=True)
    em_area = Column(String(100), nullable=True, default="LDN")
    em_spvr = Column(String(255), nullable=True)  # Supervisor name
    em_address = Column(String(500), nullable=True)
    em_latitude = Column(Float, nullable=True)
    em_longitude = Column(Float, nullable=True)
    em_radius_meters = Column(Integer, nullable=True, default=200)
    em_status = Column(String(20), nullable=False, default="Active")  # 'Active' or 'Deactive'
    em_photo_url = Column(String(500), nullable=True)
    em_qr_code = Column(String(500), nullable=True)
    em_created_by = Column(BigInteger, nullable=True)  # Atlas SSO user id
    em_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    em_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
