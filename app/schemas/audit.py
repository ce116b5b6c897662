"""
Audit Log Schemas
"""
from typing import Optional, Any, Dict
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator

from app.schemas.common import fix_datetime_timezone


class AuditLog(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    al_id: int
    al_user_id: Optional[int] = None
    al_action: str
    al_table_name: str
    al_record_id: Optional[str] = None
    al_changes: Optional[Dict[str, Any]] = None
    al_created_at: Optional[datetime] = None

    @field_validator('al_created_at', mode='before')
    @classmethod
    def fix_timezone(cls, v):
        return fix_datetime_timezone(v)


class AuditClearResult(BaseModel):
    """Audit clear operation result"""
    deleted_count: int
    message: str
