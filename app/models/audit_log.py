"""
Audit Log Model - Privileged actions on attendance and employees
"""
from sqlalchemy import Column, BigInteger, String, DateTime, JSON
from sqlalchemy.sql import func
from atams.db import Base

from app.models.employee import PrimaryKey


class AuditLog(Base):
    """Audit Log model for kiosk schema - Table: kiosk.audit_logs"""
    __tablename__ = "audit_logs"
    __table_args__ = {"schema": "kiosk"}

    al_id = Column(PrimaryKey, primary_key=True, index=True, autoincrement=True)
    al_user_id = Column(BigInteger, nullable=True, index=True)  # NULL for system/public actions
    al_action = Column(String(50), nullable=False, index=True)
    al_table_name = Column(String(50), nullable=False)
    al_record_id = Column(String(50), nullable=True)
    al_changes = Column(JSON, nullable=True)
    al_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
