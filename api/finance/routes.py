"""
Stateless calculators behind the assets, loans and budgeting screens.
"""
from fastapi import APIRouter, Depends

from api.finance.schemas import (
    BudgetVarianceRequest,
    DepreciationRequest,
    LoanPaymentSplitRequest,
    LoanRequest,
)
from auth.guards import require_permission
from core.permissions import Permission
from database.models import User
from services.finance import (
    amortization_schedule,
    budget_variance,
    calculate_depreciation,
    calculate_loan_payment,
    split_loan_payment,
)

router = APIRouter()


@router.post("/depreciation")
def depreciation(
    data: DepreciationRequest,
    current_user: User = Depends(require_permission(Permission.FIXED_ASSETS_VIEW)),
):
    return calculate_depreciation(
        data.purchase_price,
        data.salvage_value,
        data.useful_life,
        data.purchase_date,
        data.method.value,
        data.as_of,
    )


@router.post("/loan-payment")
def loan_payment(
    data: LoanRequest,
    current_user: User = Depends(require_permission(Permission.LOANS_VIEW)),
):
    result = {
        "payment_amount": calculate_loan_payment(data.principal, data.annual_rate, data.term_months)
    }
    if data.include_schedule:
        result["schedule"] = amortization_schedule(data.principal, data.annual_rate, data.term_months)
    return result


@router.post("/loan-payment/split")
def loan_payment_split(
    data: LoanPaymentSplitRequest,
    current_user: User = Depends(require_permission(Permission.LOANS_VIEW)),
):
    return split_loan_payment(data.outstanding_balance, data.annual_rate, data.payment)


@router.post("/budget-variance")
def variance(
    data: BudgetVarianceRequest,
    current_user: User = Depends(require_permission(Permission.BUDGETS_VIEW)),
):
    return budget_variance([line.model_dump() for line in data.lines])
