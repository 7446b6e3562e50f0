from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from api.invoice import actions
from api.invoice.schemas import InvoiceCreate, InvoiceUpdate
from api.responses import unwrap
from api.schemas import DeleteRequest
from auth.context import RequestContext, get_request_context

router = APIRouter()


@router.get("")
def list_invoices(
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
    customer_id: Optional[str] = None,
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.list_invoices(ctx, skip, limit, status, customer_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_invoice(data: InvoiceCreate, ctx: RequestContext = Depends(get_request_context)):
    """Create an invoice; number and totals are computed server-side."""
    return unwrap(actions.create_invoice(ctx, data.model_dump(exclude_none=True)))


@router.get("/{invoice_id}")
def get_invoice(invoice_id: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.get_invoice(ctx, invoice_id))


@router.put("/{invoice_id}")
def update_invoice(invoice_id: str, data: InvoiceUpdate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.update_invoice(ctx, invoice_id, data.model_dump(exclude_unset=True)))


@router.delete("/{invoice_id}")
def delete_invoice(
    invoice_id: str,
    data: Optional[DeleteRequest] = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    reason = data.reason if data else None
    return unwrap(actions.delete_invoice(ctx, invoice_id, reason))
