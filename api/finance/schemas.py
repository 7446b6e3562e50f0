from datetime import date
from pydantic import BaseModel, Field
from typing import Optional

from services.finance import DepreciationMethod


class DepreciationRequest(BaseModel):
    purchase_price: float = Field(ge=0)
    salvage_value: float = Field(default=0, ge=0)
    useful_life: float = Field(gt=0)
    purchase_date: date
    method: DepreciationMethod = DepreciationMethod.STRAIGHT_LINE
    as_of: Optional[date] = None


class LoanRequest(BaseModel):
    principal: float = Field(gt=0)
    annual_rate: float = Field(ge=0)
    term_months: int = Field(gt=0)
    include_schedule: bool = False


class LoanPaymentSplitRequest(BaseModel):
    outstanding_balance: float = Field(ge=0)
    annual_rate: float = Field(ge=0)
    payment: float = Field(gt=0)


class BudgetLine(BaseModel):
    account_code: Optional[str] = None
    account_name: Optional[str] = None
    budgeted: float
    actual: float


class BudgetVarianceRequest(BaseModel):
    lines: list[BudgetLine]
