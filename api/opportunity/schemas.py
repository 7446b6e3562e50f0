from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from database.models.crm import OpportunityStage


class OpportunityCreate(BaseModel):
    name: str = Field(min_length=1)
    customer_id: Optional[str] = None
    lead_id: Optional[str] = None
    amount: float = Field(default=0, ge=0)
    probability: int = Field(default=50, ge=0, le=100)
    expected_close_date: date
    source: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = None


class OpportunityUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    customer_id: Optional[str] = None
    lead_id: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    probability: Optional[int] = Field(default=None, ge=0, le=100)
    expected_close_date: Optional[date] = None
    source: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = None


class StageUpdate(BaseModel):
    stage: OpportunityStage

    model_config = ConfigDict(use_enum_values=True)
