from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from database.models.base import RecordBase, UtcDateTime, new_id


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class User(RecordBase, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True)
    role_id: Optional[str] = Field(default=None, foreign_key="roles.id", index=True)
    email: str = Field(index=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    status: str = Field(default=UserStatus.ACTIVE.value, max_length=20)
    last_login_at: Optional[datetime] = Field(default=None, sa_type=UtcDateTime)
