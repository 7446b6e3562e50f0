from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from api.opportunity import actions
from api.opportunity.schemas import OpportunityCreate, OpportunityUpdate, StageUpdate
from api.responses import unwrap
from api.schemas import DeleteRequest
from auth.context import RequestContext, get_request_context

router = APIRouter()


@router.get("")
def list_opportunities(
    skip: int = 0,
    limit: int = 100,
    stage: Optional[str] = None,
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.list_opportunities(ctx, skip, limit, stage))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_opportunity(data: OpportunityCreate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.create_opportunity(ctx, data.model_dump(exclude_none=True)))


@router.get("/{opportunity_id}")
def get_opportunity(opportunity_id: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.get_opportunity(ctx, opportunity_id))


@router.put("/{opportunity_id}")
def update_opportunity(
    opportunity_id: str, data: OpportunityUpdate, ctx: RequestContext = Depends(get_request_context)
):
    return unwrap(actions.update_opportunity(ctx, opportunity_id, data.model_dump(exclude_unset=True)))


@router.patch("/{opportunity_id}/stage")
def update_opportunity_stage(
    opportunity_id: str, data: StageUpdate, ctx: RequestContext = Depends(get_request_context)
):
    return unwrap(actions.update_opportunity_stage(ctx, opportunity_id, data.stage))


@router.delete("/{opportunity_id}")
def delete_opportunity(
    opportunity_id: str,
    data: Optional[DeleteRequest] = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    reason = data.reason if data else None
    return unwrap(actions.delete_opportunity(ctx, opportunity_id, reason))
