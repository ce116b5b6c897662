"""
Audit Service - Append-only audit trail and its maintenance
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from atams.logging import get_logger
from app.models.audit_log import AuditLog as AuditLogModel
from app.repositories.audit_log_repository import AuditLogRepository
from app.schemas.audit import AuditLog
from app.core.exceptions import NotFoundError

logger = get_logger(__name__)


class AuditService:
    def __init__(self) -> None:
        self.repo = AuditLogRepository()

    def record(
        self,
        db: Session,
        action: str,
        table_name: str,
        record_id: Any,
        changes: Optional[Dict[str, Any]] = None,
        user_id: Optional[int] = None
    ) -> Optional[AuditLogModel]:
        """
        Write one audit entry without failing the caller

        The audited write has already been committed, so a failure here is
        rolled back and logged and the primary operation still succeeds.

        Returns:
            AuditLog model, or None when the write failed
        """
        try:
            return self.repo.create_entry(db, {
                "al_user_id": user_id,
                "al_action": action,
                "al_table_name": table_name,
                "al_record_id": str(record_id) if record_id is not None else None,
                "al_changes": changes,
            })
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"Audit log write failed for {table_name}/{record_id}: {str(e)}",
                exc_info=True,
                extra={'extra_data': {
                    'action': action,
                    'table_name': table_name,
                    'record_id': str(record_id),
                }}
            )
            return None

    def list_logs(
        self,
        db: Session,
        action: str = None,
        user_id: int = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[AuditLog]:
        logs = self.repo.get_logs_with_filters(db, action, user_id, skip, limit)
        return [AuditLog.model_validate(entry) for entry in logs]

    def count_logs(self, db: Session, action: str = None, user_id: int = None) -> int:
        return self.repo.count_logs_with_filters(db, action, user_id)

    def get_log(self, db: Session, al_id: int) -> AuditLog:
        entry = self.repo.get_by_id(db, al_id)
        if not entry:
            raise NotFoundError("Audit log not found")
        return AuditLog.model_validate(entry)

    def clear_logs(self, db: Session, user_id: Optional[int] = None, older_than_days: Optional[int] = None) -> int:
        """
        Delete audit logs (attendance events are never touched)

        Args:
            db: Database session
            user_id: Admin performing the clear
            older_than_days: Only delete entries older than this many days

        Returns:
            int: Number of records deleted
        """
        cutoff = None
        if older_than_days is not None:
            cutoff = datetime.now(timezone.utc) - timedelta(days=older_than_days)

        deleted = self.repo.delete_logs(db, older_than=cutoff)
        logger.info(
            f"Audit logs cleared: {deleted} deleted",
            extra={'extra_data': {'user_id': user_id, 'older_than_days': older_than_days}}
        )
        return deleted
