"""
Audit Log Repository - Data access layer for the audit trail
"""
from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import text, bindparam, DateTime

from atams.db import BaseRepository
from app.models.audit_log import AuditLog


class AuditLogRepository(BaseRepository[AuditLog]):
    def __init__(self):
        super().__init__(AuditLog)

    def create_entry(self, db: Session, entry_data: dict) -> AuditLog:
        """Create audit entry and return the created object"""
        db_entry = AuditLog(**entry_data)
        db.add(db_entry)
        db.commit()
        db.refresh(db_entry)
        return db_entry

    def get_by_id(self, db: Session, al_id: int) -> Optional[AuditLog]:
        return db.query(AuditLog).filter(AuditLog.al_id == al_id).first()

    def _filtered_query(self, db: Session, action: str = None, user_id: int = None):
        query = db.query(AuditLog)
        if action:
            query = query.filter(AuditLog.al_action == action)
        if user_id is not None:
            query = query.filter(AuditLog.al_user_id == user_id)
        return query

    def get_logs_with_filters(
        self,
        db: Session,
        action: str = None,
        user_id: int = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[AuditLog]:
        """Get audit logs newest first using ORM"""
        return (
            self._filtered_query(db, action, user_id)
            .order_by(AuditLog.al_created_at.desc(), AuditLog.al_id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_logs_with_filters(self, db: Session, action: str = None, user_id: int = None) -> int:
        return self._filtered_query(db, action, user_id).count()

    def delete_logs(self, db: Session, older_than: Optional[datetime] = None) -> int:
        """
        Delete audit logs using native SQL.

        Deletes everything when `older_than` is None. Returns count of deleted records.
        """
        if older_than is None:
            result = db.execute(text("DELETE FROM kiosk.audit_logs"))
        else:
            query = text("DELETE FROM kiosk.audit_logs WHERE al_created_at < :cutoff").bindparams(
                bindparam("cutoff", type_=DateTime(timezone=True))
            )
            result = db.execute(query, {"cutoff": older_than})
        db.commit()

        return result.rowcount
