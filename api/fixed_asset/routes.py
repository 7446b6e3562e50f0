from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from api.fixed_asset import actions
from api.fixed_asset.schemas import DepreciationRunRequest, DisposeRequest, FixedAssetCreate, FixedAssetUpdate
from api.responses import unwrap
from api.schemas import DeleteRequest
from auth.context import RequestContext, get_request_context

router = APIRouter()


@router.get("")
def list_fixed_assets(
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.list_fixed_assets(ctx, skip, limit, status))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_fixed_asset(data: FixedAssetCreate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.create_fixed_asset(ctx, data.model_dump(exclude_none=True)))


@router.post("/depreciation")
def run_depreciation(
    data: Optional[DepreciationRunRequest] = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.run_depreciation(ctx, data.as_of if data else None))


@router.get("/{asset_id}")
def get_fixed_asset(asset_id: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.get_fixed_asset(ctx, asset_id))


@router.put("/{asset_id}")
def update_fixed_asset(asset_id: str, data: FixedAssetUpdate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.update_fixed_asset(ctx, asset_id, data.model_dump(exclude_unset=True)))


@router.post("/{asset_id}/dispose")
def dispose_fixed_asset(asset_id: str, data: DisposeRequest, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.dispose_fixed_asset(ctx, asset_id, data.disposal_date, data.disposal_amount))


@router.delete("/{asset_id}")
def delete_fixed_asset(
    asset_id: str,
    data: Optional[DeleteRequest] = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    reason = data.reason if data else None
    return unwrap(actions.delete_fixed_asset(ctx, asset_id, reason))
