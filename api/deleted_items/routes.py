from fastapi import APIRouter, Depends

from api.deleted_items import actions
from api.responses import unwrap
from auth.context import RequestContext, get_request_context
from config.settings import DELETED_ITEMS_PAGE_SIZE

router = APIRouter()


@router.get("")
def get_deleted_items_summary(ctx: RequestContext = Depends(get_request_context)):
    """Count of deleted records per type."""
    return unwrap(actions.get_deleted_items_summary(ctx))


@router.get("/{model_type}")
def list_deleted_items(
    model_type: str,
    page: int = 1,
    limit: int = DELETED_ITEMS_PAGE_SIZE,
    ctx: RequestContext = Depends(get_request_context),
):
    return unwrap(actions.get_deleted_items_by_type(ctx, model_type, page, limit))


@router.post("/{model_type}/{item_id}/restore")
def restore_deleted_item(model_type: str, item_id: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.restore_deleted_item(ctx, model_type, item_id))


@router.delete("/{model_type}/{item_id}")
def permanently_delete_item(model_type: str, item_id: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.permanently_delete_item(ctx, model_type, item_id))
