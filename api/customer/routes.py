from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from api.customer import actions
from api.customer.schemas import CustomerCreate, CustomerUpdate
from api.responses import unwrap
from api.schemas import DeleteRequest
from auth.context import RequestContext, get_request_context

router = APIRouter()


@router.get("")
def list_customers(
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
    ctx: RequestContext = Depends(get_request_context),
):
    """List active customers of the caller's organization."""
    return unwrap(actions.list_customers(ctx, skip, limit, status))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_customer(
    data: CustomerCreate,
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.create_customer(ctx, data.model_dump(exclude_none=True)))


@router.get("/{customer_id}")
def get_customer(customer_id: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.get_customer(ctx, customer_id))


@router.put("/{customer_id}")
def update_customer(
    customer_id: str,
    data: CustomerUpdate,
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.update_customer(ctx, customer_id, data.model_dump(exclude_unset=True)))


@router.delete("/{customer_id}")
def delete_customer(
    customer_id: str,
    data: Optional[DeleteRequest] = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    """Move a customer to the recycle bin."""
    reason = data.reason if data else None
    return unwrap(actions.delete_customer(ctx, customer_id, reason))
