from pydantic import BaseModel, Field
from typing import Optional


class RoleCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    display_name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    permissions: dict[str, bool] = Field(default_factory=dict)


class RoleUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    permissions: Optional[dict[str, bool]] = None


class RoleFromPreset(BaseModel):
    preset: str
