import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, DateTime, TypeDecorator
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime; convert an aware one to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UtcDateTime(TypeDecorator):
    """Timezone-aware UTC timestamps, also on backends that store them naive (SQLite)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return as_utc(value)

    def process_result_value(self, value, dialect):
        return as_utc(value)


def new_id() -> str:
    return str(uuid.uuid4())


# Fields every record carries besides its own payload; updates must not touch them
PROTECTED_FIELDS = frozenset({
    "id",
    "organization_id",
    "del_flag",
    "deleted_at",
    "deleted_by",
    "deletion_reason",
    "deletion_metadata",
    "mod_flag",
    "created_by",
    "modified_by",
    "created_at",
    "updated_at",
})


class RecordBase(SQLModel):
    """Tenant partition, soft-delete state and audit stamps shared by all records."""

    organization_id: str = Field(foreign_key="organizations.id", index=True)

    # Soft delete
    del_flag: bool = Field(default=False, index=True)
    deleted_at: Optional[datetime] = Field(default=None, sa_type=UtcDateTime)
    deleted_by: Optional[str] = Field(default=None, max_length=36)
    deletion_reason: Optional[str] = Field(default=None, max_length=500)
    deletion_metadata: Optional[dict] = Field(default=None, sa_type=JSON)

    # Audit
    mod_flag: bool = Field(default=False)
    created_by: Optional[str] = Field(default=None, max_length=36)
    modified_by: Optional[str] = Field(default=None, max_length=36)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
