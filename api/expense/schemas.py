from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from database.models.expense import ExpenseStatus


class ExpenseCreate(BaseModel):
    category: str
    expense_date: date
    amount: float = Field(gt=0)
    vendor_id: Optional[str] = None
    description: Optional[str] = None
    is_taxable: bool = False
    tax_rate: float = Field(default=0, ge=0)
    status: Optional[ExpenseStatus] = None
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class ExpenseUpdate(BaseModel):
    category: Optional[str] = None
    expense_date: Optional[date] = None
    amount: Optional[float] = Field(default=None, gt=0)
    vendor_id: Optional[str] = None
    description: Optional[str] = None
    is_taxable: Optional[bool] = None
    tax_rate: Optional[float] = Field(default=None, ge=0)
    status: Optional[ExpenseStatus] = None
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)
