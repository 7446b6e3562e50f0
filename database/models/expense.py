from datetime import date
from enum import Enum
from typing import Optional

from sqlmodel import Field

from database.models.base import RecordBase, new_id


class ExpenseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"


class Expense(RecordBase, table=True):
    __tablename__ = "expenses"

    id: str = Field(default_factory=new_id, primary_key=True)
    expense_number: str = Field(index=True, max_length=50)
    vendor_id: Optional[str] = Field(default=None, foreign_key="vendors.id", index=True)
    category: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    expense_date: date
    amount: float
    is_taxable: bool = Field(default=False)
    tax_rate: float = Field(default=0)
    tax_amount: float = Field(default=0)
    status: str = Field(default=ExpenseStatus.PENDING.value, max_length=20)
    notes: Optional[str] = Field(default=None)
