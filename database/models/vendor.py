from typing import Optional

from sqlalchemy import JSON
from sqlmodel import Field

from config.settings import DEFAULT_CURRENCY
from database.models.base import RecordBase, new_id
from database.models.customer import ContactStatus


class Vendor(RecordBase, table=True):
    __tablename__ = "vendors"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(index=True, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    company: Optional[str] = Field(default=None, max_length=255)
    address: Optional[dict] = Field(default=None, sa_type=JSON)
    tax_id: Optional[str] = Field(default=None, max_length=50)
    currency: str = Field(default=DEFAULT_CURRENCY, max_length=3)
    payment_terms: str = Field(default="net-30", max_length=20)
    notes: Optional[str] = Field(default=None)
    status: str = Field(default=ContactStatus.ACTIVE.value, max_length=20)
