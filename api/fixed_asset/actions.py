"""
Fixed asset register.

Book values (accumulated depreciation, current value, status) are always
derived from the purchase terms through calculate_depreciation.
"""
from datetime import date
from typing import Optional

from api.common import soft_delete_record
from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import check_permission
from core.permissions import Permission
from core.results import PERMISSION_DENIED, failure, not_found, success, to_data
from database.models import AssetStatus, FixedAsset, User
from services import records
from services.audit import log_audit
from services.finance.depreciation import calculate_depreciation
from services.subscription import check_write_access
from utils.logger import get_logger

logger = get_logger(__name__)

RESOURCE = "fixed_assets"
ALREADY_DISPOSED = "Asset is already disposed"
DEPRECIATION_TERMS = ("purchase_date", "purchase_price", "salvage_value", "useful_life", "depreciation_method")


def book_values(terms: dict, as_of: Optional[date] = None) -> dict:
    """Accumulated depreciation, current value and status for the given purchase terms."""
    result = calculate_depreciation(
        terms["purchase_price"],
        terms.get("salvage_value") or 0,
        terms["useful_life"],
        terms["purchase_date"],
        terms.get("depreciation_method") or "straight_line",
        as_of=as_of,
    )
    current_value = result["current_value"]
    fully_depreciated = current_value <= (terms.get("salvage_value") or 0)
    return {
        "accumulated_depreciation": terms["purchase_price"] - current_value,
        "current_value": current_value,
        "status": AssetStatus.FULLY_DEPRECIATED.value if fully_depreciated else AssetStatus.ACTIVE.value,
    }


def _terms_of(asset: FixedAsset) -> dict:
    return {field: getattr(asset, field) for field in DEPRECIATION_TERMS}


@with_auth
def create_fixed_asset(ctx: RequestContext, principal: User, data: dict) -> dict:
    if not check_permission(ctx, Permission.FIXED_ASSETS_CREATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    sequence = records.take_next_number(ctx.session, principal.organization_id, "next_asset_number")
    payload = dict(data)
    payload["asset_number"] = f"FA-{sequence:05d}"
    payload.update(book_values(payload))

    asset = records.create_record(ctx.session, FixedAsset, principal.organization_id, principal.id, payload)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "create", RESOURCE, asset.id, {"after": to_data(asset)},
    )
    return success(to_data(asset))


@with_auth
def list_fixed_assets(
    ctx: RequestContext,
    principal: User,
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
) -> dict:
    if not check_permission(ctx, Permission.FIXED_ASSETS_VIEW):
        return failure(PERMISSION_DENIED)

    assets = records.list_active(ctx.session, FixedAsset, principal.organization_id, skip, limit, status=status)
    return success(
        [to_data(a) for a in assets],
        total=records.count_active(ctx.session, FixedAsset, principal.organization_id),
    )


@with_auth
def get_fixed_asset(ctx: RequestContext, principal: User, asset_id: str) -> dict:
    if not check_permission(ctx, Permission.FIXED_ASSETS_VIEW):
        return failure(PERMISSION_DENIED)

    asset = records.get_active(ctx.session, FixedAsset, principal.organization_id, asset_id)
    if not asset:
        return not_found("Asset")
    return success(to_data(asset))


@with_auth
def update_fixed_asset(ctx: RequestContext, principal: User, asset_id: str, data: dict) -> dict:
    if not check_permission(ctx, Permission.FIXED_ASSETS_UPDATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    asset = records.get_active(ctx.session, FixedAsset, principal.organization_id, asset_id)
    if not asset:
        return not_found("Asset")

    changes = {
        k: v for k, v in data.items()
        if k not in ("asset_number", "accumulated_depreciation", "current_value", "status")
    }
    if asset.status != AssetStatus.DISPOSED.value and any(k in changes for k in DEPRECIATION_TERMS):
        changes.update(book_values({**_terms_of(asset), **changes}))

    before = to_data(asset)
    asset = records.update_record(ctx.session, asset, principal.id, changes)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "update", RESOURCE, asset.id, {"before": before, "after": to_data(asset)},
    )
    return success(to_data(asset))


@with_auth
def dispose_fixed_asset(
    ctx: RequestContext,
    principal: User,
    asset_id: str,
    disposal_date: date,
    disposal_amount: float = 0,
) -> dict:
    """Take an asset out of service. The result carries the gain (or loss) against book value."""
    if not check_permission(ctx, Permission.FIXED_ASSETS_UPDATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    asset = records.get_active(ctx.session, FixedAsset, principal.organization_id, asset_id)
    if not asset:
        return not_found("Asset")
    if asset.status == AssetStatus.DISPOSED.value:
        return failure(ALREADY_DISPOSED)

    changes = book_values(_terms_of(asset), as_of=disposal_date)
    changes.update(
        status=AssetStatus.DISPOSED.value,
        disposal_date=disposal_date,
        disposal_amount=disposal_amount,
    )
    gain = disposal_amount - changes["current_value"]

    before = to_data(asset)
    asset = records.update_record(ctx.session, asset, principal.id, changes)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "dispose", RESOURCE, asset.id, {"before": before, "after": to_data(asset)},
    )
    return success(to_data(asset), gain_on_disposal=gain)


@with_auth
def run_depreciation(ctx: RequestContext, principal: User, as_of: Optional[date] = None) -> dict:
    """Recompute book values of every active asset of the organization."""
    if not check_permission(ctx, Permission.FIXED_ASSETS_UPDATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    as_of = as_of or date.today()
    assets = ctx.session.exec(
        records.active_query(FixedAsset, principal.organization_id)
        .where(FixedAsset.status == AssetStatus.ACTIVE.value)
    ).all()

    processed = 0
    for asset in assets:
        for field, value in book_values(_terms_of(asset), as_of=as_of).items():
            setattr(asset, field, value)
        ctx.session.add(asset)
        processed += 1
    ctx.session.commit()

    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "depreciate", RESOURCE, None, {"as_of": as_of.isoformat(), "processed": processed},
    )
    logger.info(f"Depreciation run for {principal.organization_id} as of {as_of}: {processed} assets")
    return success({"processed": processed, "as_of": as_of.isoformat()})


@with_auth
def delete_fixed_asset(ctx: RequestContext, principal: User, asset_id: str, reason: Optional[str] = None) -> dict:
    if not check_permission(ctx, Permission.FIXED_ASSETS_DELETE):
        return failure(PERMISSION_DENIED)

    return soft_delete_record(ctx, principal, FixedAsset, asset_id, RESOURCE, "Asset", reason)
