from typing import Optional

from sqlalchemy import JSON
from sqlmodel import Field

from database.models.base import RecordBase, new_id


class Role(RecordBase, table=True):
    """A named bundle of permission flags, scoped to one organization."""
    __tablename__ = "roles"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(index=True, max_length=50)
    display_name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    # permission key -> granted; a missing key means denied
    permissions: dict = Field(default_factory=dict, sa_type=JSON)
