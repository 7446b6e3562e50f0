from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from api.expense import actions
from api.expense.schemas import ExpenseCreate, ExpenseUpdate
from api.responses import unwrap
from api.schemas import DeleteRequest
from auth.context import RequestContext, get_request_context

router = APIRouter()


@router.get("")
def list_expenses(
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None,
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.list_expenses(ctx, skip, limit, category))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_expense(data: ExpenseCreate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.create_expense(ctx, data.model_dump(exclude_none=True)))


@router.get("/{expense_id}")
def get_expense(expense_id: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.get_expense(ctx, expense_id))


@router.put("/{expense_id}")
def update_expense(expense_id: str, data: ExpenseUpdate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.update_expense(ctx, expense_id, data.model_dump(exclude_unset=True)))


@router.delete("/{expense_id}")
def delete_expense(
    expense_id: str,
    data: Optional[DeleteRequest] = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    reason = data.reason if data else None
    return unwrap(actions.delete_expense(ctx, expense_id, reason))
