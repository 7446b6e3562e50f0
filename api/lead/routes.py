from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from api.lead import actions
from api.lead.schemas import LeadCreate, LeadStatusUpdate, LeadUpdate
from api.responses import unwrap
from api.schemas import DeleteRequest
from auth.context import RequestContext, get_request_context

router = APIRouter()


@router.get("")
def list_leads(
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.list_leads(ctx, skip, limit, status))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_lead(data: LeadCreate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.create_lead(ctx, data.model_dump(exclude_none=True)))


@router.get("/{lead_id}")
def get_lead(lead_id: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.get_lead(ctx, lead_id))


@router.put("/{lead_id}")
def update_lead(lead_id: str, data: LeadUpdate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.update_lead(ctx, lead_id, data.model_dump(exclude_unset=True)))


@router.patch("/{lead_id}/status")
def update_lead_status(lead_id: str, data: LeadStatusUpdate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.update_lead_status(ctx, lead_id, data.status))


@router.delete("/{lead_id}")
def delete_lead(
    lead_id: str,
    data: Optional[DeleteRequest] = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    reason = data.reason if data else None
    return unwrap(actions.delete_lead(ctx, lead_id, reason))
