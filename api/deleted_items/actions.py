"""
Recycle bin for administrators: browse, restore or purge soft-deleted
records of the caller's organization.
"""
import math

from sqlmodel import select

from api.role.actions import DUPLICATE_NAME, role_name_taken
from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import is_admin
from config.settings import DELETED_ITEMS_PAGE_SIZE
from core.results import ADMIN_REQUIRED, failure, success, to_data
from database.models import Customer, Expense, FixedAsset, Invoice, Lead, Opportunity, Role, User, Vendor
from services.audit import log_audit
from services.soft_delete import count_deleted, get_deleted_items, permanent_delete, restore_deleted
from services.subscription import check_write_access
from utils.logger import get_logger

logger = get_logger(__name__)

MODEL_MAP = {
    "customers": Customer,
    "vendors": Vendor,
    "invoices": Invoice,
    "expenses": Expense,
    "roles": Role,
    "fixed_assets": FixedAsset,
    "leads": Lead,
    "opportunities": Opportunity,
}

INVALID_TYPE = "Invalid model type"
ITEM_NOT_FOUND = "Item not found"


def _restore_would_duplicate_role(ctx: RequestContext, organization_id: str, role_id: str) -> bool:
    """An active role may have taken the deleted role's name in the meantime."""
    role = ctx.session.exec(
        select(Role).where(Role.id == role_id, Role.organization_id == organization_id)
    ).first()
    return role is not None and role_name_taken(ctx, organization_id, role.name, exclude_id=role.id)


@with_auth
def get_deleted_items_by_type(
    ctx: RequestContext,
    principal: User,
    model_type: str,
    page: int = 1,
    limit: int = DELETED_ITEMS_PAGE_SIZE,
) -> dict:
    if not is_admin(ctx):
        return failure(ADMIN_REQUIRED)

    model = MODEL_MAP.get(model_type)
    if model is None:
        return failure(INVALID_TYPE)

    page = max(page, 1)
    limit = max(limit, 1)
    result = get_deleted_items(
        ctx.session, model, principal.organization_id, limit=limit, skip=(page - 1) * limit
    )
    return success(
        items=[to_data(item) for item in result["items"]],
        total=result["total"],
        page=page,
        total_pages=math.ceil(result["total"] / limit),
    )


@with_auth
def restore_deleted_item(ctx: RequestContext, principal: User, model_type: str, item_id: str) -> dict:
    if not is_admin(ctx):
        return failure(ADMIN_REQUIRED)

    model = MODEL_MAP.get(model_type)
    if model is None:
        return failure(INVALID_TYPE)

    check_write_access(ctx.session, principal.organization_id)

    if model is Role and _restore_would_duplicate_role(ctx, principal.organization_id, item_id):
        return failure(DUPLICATE_NAME)

    restored = restore_deleted(ctx.session, model, item_id, organization_id=principal.organization_id)
    if not restored:
        return failure(ITEM_NOT_FOUND)

    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "restore", model_type, item_id, {"metadata": {"restored_by": principal.email}},
    )
    return success(item=to_data(restored))


@with_auth
def permanently_delete_item(ctx: RequestContext, principal: User, model_type: str, item_id: str) -> dict:
    """Purge a record for good. There is no way back from this."""
    if not is_admin(ctx):
        return failure(ADMIN_REQUIRED)

    model = MODEL_MAP.get(model_type)
    if model is None:
        return failure(INVALID_TYPE)

    check_write_access(ctx.session, principal.organization_id)

    if not permanent_delete(ctx.session, model, item_id, organization_id=principal.organization_id):
        return failure(ITEM_NOT_FOUND)

    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "permanent_delete", model_type, item_id,
        {"metadata": {"warning": "PERMANENT_DELETE", "deleted_by": principal.email}},
    )
    logger.warning(f"{principal.email} permanently deleted {model_type}/{item_id}")
    return success()


@with_auth
def get_deleted_items_summary(ctx: RequestContext, principal: User) -> dict:
    if not is_admin(ctx):
        return failure(ADMIN_REQUIRED)

    return success(
        summary=[
            {"type": key, "count": count_deleted(ctx.session, model, principal.organization_id)}
            for key, model in MODEL_MAP.items()
        ]
    )
