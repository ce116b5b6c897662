"""
Common Response Schemas and shared field helpers
"""
import re
from datetime import datetime, timezone

from atams.schemas import DataResponse, PaginationResponse

__all__ = ["DataResponse", "PaginationResponse", "fix_datetime_timezone"]


def fix_datetime_timezone(v):
    """
    Fix datetime timezone format from the database

    PostgreSQL returns: '2025-10-01 09:17:39.587802+00'
    Pydantic expects: '2025-10-01 09:17:39.587802+00:00'

    SQLite returns naive datetimes; those are stored as UTC.
    """
    if v == '' or v is None:
        return None

    if isinstance(v, str):
        # Match timezone like +00, +07, -05 at the end
        pattern = r'([+-]\d{2})$'
        match = re.search(pattern, v)
        if match:
            v = v + ':00'
    elif isinstance(v, datetime) and v.tzinfo is None:
        v = v.replace(tzinfo=timezone.utc)

    return v
