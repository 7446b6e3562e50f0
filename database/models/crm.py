from datetime import date
from enum import Enum
from typing import Optional

from sqlmodel import Field

from database.models.base import RecordBase, new_id


class LeadStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    UNQUALIFIED = "unqualified"
    CONVERTED = "converted"


class LeadRating(str, Enum):
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


class OpportunityStage(str, Enum):
    PROSPECTING = "prospecting"
    QUALIFICATION = "qualification"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed_won"
    CLOSED_LOST = "closed_lost"


CLOSED_STAGES = (OpportunityStage.CLOSED_WON.value, OpportunityStage.CLOSED_LOST.value)


class Lead(RecordBase, table=True):
    __tablename__ = "leads"

    id: str = Field(default_factory=new_id, primary_key=True)
    lead_number: str = Field(index=True, max_length=50)
    name: str = Field(index=True, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    company: Optional[str] = Field(default=None, max_length=255)
    title: Optional[str] = Field(default=None, max_length=100)
    industry: Optional[str] = Field(default=None, max_length=100)
    source: Optional[str] = Field(default=None, max_length=100)
    status: str = Field(default=LeadStatus.NEW.value, max_length=20)
    rating: str = Field(default=LeadRating.WARM.value, max_length=10)
    value: float = Field(default=0)
    assigned_to: Optional[str] = Field(default=None, foreign_key="users.id")
    notes: Optional[str] = Field(default=None)


class Opportunity(RecordBase, table=True):
    __tablename__ = "opportunities"

    id: str = Field(default_factory=new_id, primary_key=True)
    opportunity_number: str = Field(index=True, max_length=50)
    name: str = Field(max_length=255)
    customer_id: Optional[str] = Field(default=None, foreign_key="customers.id", index=True)
    lead_id: Optional[str] = Field(default=None, foreign_key="leads.id", index=True)
    amount: float = Field(default=0)
    probability: int = Field(default=50)
    stage: str = Field(default=OpportunityStage.PROSPECTING.value, max_length=20)
    expected_close_date: date
    actual_close_date: Optional[date] = Field(default=None)
    source: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None)
    assigned_to: Optional[str] = Field(default=None, foreign_key="users.id")
