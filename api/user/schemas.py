from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from database.models.user import UserStatus


class UserWithDetails(BaseModel):
    id: str
    email: str
    name: Optional[str]
    status: str
    last_login_at: Optional[datetime]
    created_at: datetime
    role_id: Optional[str]
    role_name: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    users: list[UserWithDetails]
    total: int


class UserRoleUpdate(BaseModel):
    role_id: str


class UserStatusUpdate(BaseModel):
    status: UserStatus

    model_config = ConfigDict(use_enum_values=True)
