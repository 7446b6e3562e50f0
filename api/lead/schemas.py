from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from database.models.crm import LeadRating, LeadStatus


class LeadCreate(BaseModel):
    name: str = Field(min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None
    industry: Optional[str] = None
    source: Optional[str] = None
    rating: LeadRating = LeadRating.WARM
    value: float = Field(default=0, ge=0)
    assigned_to: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class LeadUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None
    industry: Optional[str] = None
    source: Optional[str] = None
    rating: Optional[LeadRating] = None
    value: Optional[float] = Field(default=None, ge=0)
    assigned_to: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class LeadStatusUpdate(BaseModel):
    status: LeadStatus

    model_config = ConfigDict(use_enum_values=True)
