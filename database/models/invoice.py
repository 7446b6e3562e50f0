from datetime import date
from enum import Enum
from typing import Optional

from sqlalchemy import JSON
from sqlmodel import Field

from config.settings import DEFAULT_CURRENCY
from database.models.base import RecordBase, new_id


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Invoice(RecordBase, table=True):
    __tablename__ = "invoices"

    id: str = Field(default_factory=new_id, primary_key=True)
    invoice_number: str = Field(index=True, max_length=50)
    customer_id: str = Field(foreign_key="customers.id", index=True)
    issue_date: date
    due_date: date
    status: str = Field(default=InvoiceStatus.DRAFT.value, max_length=20)

    # [{"description", "quantity", "unit_price", "tax_rate", "amount", "tax_amount"}]
    line_items: list = Field(default_factory=list, sa_type=JSON)
    subtotal: float = Field(default=0)
    tax_amount: float = Field(default=0)
    total: float = Field(default=0)
    amount_paid: float = Field(default=0)

    currency: str = Field(default=DEFAULT_CURRENCY, max_length=3)
    notes: Optional[str] = Field(default=None)
