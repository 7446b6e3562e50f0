from enum import Enum
from typing import Optional

from sqlalchemy import JSON
from sqlmodel import Field

from config.settings import DEFAULT_CURRENCY
from database.models.base import RecordBase, new_id


class ContactStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Customer(RecordBase, table=True):
    __tablename__ = "customers"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(index=True, max_length=255)
    email: str = Field(max_length=255)
    phone: str = Field(max_length=50)
    company: Optional[str] = Field(default=None, max_length=255)
    website: Optional[str] = Field(default=None, max_length=255)
    # {"street", "city", "state", "country", "postal_code"}
    address: Optional[dict] = Field(default=None, sa_type=JSON)
    tax_id: Optional[str] = Field(default=None, max_length=50)
    currency: str = Field(default=DEFAULT_CURRENCY, max_length=3)
    payment_terms: str = Field(default="net-30", max_length=20)
    credit_limit: float = Field(default=0)
    opening_balance: float = Field(default=0)
    notes: Optional[str] = Field(default=None)
    status: str = Field(default=ContactStatus.ACTIVE.value, max_length=20)
