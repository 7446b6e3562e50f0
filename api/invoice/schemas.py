from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from database.models.invoice import InvoiceStatus


class LineItem(BaseModel):
    description: str
    quantity: float = Field(gt=0)
    unit_price: float = Field(ge=0)
    tax_rate: Optional[float] = Field(default=None, ge=0)


class InvoiceCreate(BaseModel):
    customer_id: str
    issue_date: date
    due_date: Optional[date] = None
    line_items: list[LineItem] = Field(min_length=1)
    status: Optional[InvoiceStatus] = None
    currency: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class InvoiceUpdate(BaseModel):
    customer_id: Optional[str] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    line_items: Optional[list[LineItem]] = None
    status: Optional[InvoiceStatus] = None
    amount_paid: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)
