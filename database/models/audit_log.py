from datetime import datetime
from typing import Optional

from sqlalchemy import JSON
from sqlmodel import SQLModel, Field

from database.models.base import UtcDateTime, new_id, utcnow


class AuditLog(SQLModel, table=True):
    """Append-only trail of mutations; never soft-deleted."""
    __tablename__ = "audit_logs"

    id: str = Field(default_factory=new_id, primary_key=True)
    organization_id: str = Field(foreign_key="organizations.id", index=True)
    user_id: Optional[str] = Field(default=None, max_length=36, index=True)
    action: str = Field(max_length=50)
    resource: str = Field(max_length=50, index=True)
    resource_id: Optional[str] = Field(default=None, max_length=36)
    # {"before": {...}, "after": {...}, "metadata": {...}}
    details: Optional[dict] = Field(default=None, sa_type=JSON)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime, index=True)
