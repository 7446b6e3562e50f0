"""
Sales opportunities. An opportunity may point at a customer, a lead or
neither; both must belong to the caller's organization.
"""
from datetime import date
from typing import Optional

from api.common import soft_delete_record
from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import check_permission
from core.permissions import Permission
from core.results import PERMISSION_DENIED, failure, not_found, success, to_data
from database.models import CLOSED_STAGES, Customer, Lead, Opportunity, OpportunityStage, User
from services import records
from services.audit import log_audit
from services.subscription import check_write_access

RESOURCE = "opportunities"
INVALID_STAGE = "Invalid opportunity stage"


def _missing_link(ctx: RequestContext, organization_id: str, data: dict) -> Optional[dict]:
    if data.get("customer_id") and not records.get_active(
        ctx.session, Customer, organization_id, data["customer_id"]
    ):
        return not_found("Customer")
    if data.get("lead_id") and not records.get_active(ctx.session, Lead, organization_id, data["lead_id"]):
        return not_found("Lead")
    return None


@with_auth
def create_opportunity(ctx: RequestContext, principal: User, data: dict) -> dict:
    if not check_permission(ctx, Permission.OPPORTUNITIES_CREATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    missing = _missing_link(ctx, principal.organization_id, data)
    if missing:
        return missing

    sequence = records.take_next_number(ctx.session, principal.organization_id, "next_opportunity_number")
    payload = {k: v for k, v in data.items() if k not in ("stage", "actual_close_date")}
    payload["opportunity_number"] = f"OPP-{sequence:05d}"

    opportunity = records.create_record(
        ctx.session, Opportunity, principal.organization_id, principal.id, payload
    )
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "create", RESOURCE, opportunity.id, {"after": to_data(opportunity)},
    )
    return success(to_data(opportunity))


@with_auth
def list_opportunities(
    ctx: RequestContext,
    principal: User,
    skip: int = 0,
    limit: int = 100,
    stage: Optional[str] = None,
) -> dict:
    if not check_permission(ctx, Permission.OPPORTUNITIES_VIEW):
        return failure(PERMISSION_DENIED)

    opportunities = records.list_active(
        ctx.session, Opportunity, principal.organization_id, skip, limit, stage=stage
    )
    return success(
        [to_data(o) for o in opportunities],
        total=records.count_active(ctx.session, Opportunity, principal.organization_id),
    )


@with_auth
def get_opportunity(ctx: RequestContext, principal: User, opportunity_id: str) -> dict:
    if not check_permission(ctx, Permission.OPPORTUNITIES_VIEW):
        return failure(PERMISSION_DENIED)

    opportunity = records.get_active(ctx.session, Opportunity, principal.organization_id, opportunity_id)
    if not opportunity:
        return not_found("Opportunity")
    return success(to_data(opportunity))


def _update(ctx: RequestContext, principal: User, opportunity_id: str, changes: dict) -> dict:
    check_write_access(ctx.session, principal.organization_id)

    opportunity = records.get_active(ctx.session, Opportunity, principal.organization_id, opportunity_id)
    if not opportunity:
        return not_found("Opportunity")

    missing = _missing_link(ctx, principal.organization_id, changes)
    if missing:
        return missing

    before = to_data(opportunity)
    opportunity = records.update_record(ctx.session, opportunity, principal.id, changes)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "update", RESOURCE, opportunity.id, {"before": before, "after": to_data(opportunity)},
    )
    return success(to_data(opportunity))


@with_auth
def update_opportunity(ctx: RequestContext, principal: User, opportunity_id: str, data: dict) -> dict:
    if not check_permission(ctx, Permission.OPPORTUNITIES_UPDATE):
        return failure(PERMISSION_DENIED)

    changes = {
        k: v for k, v in data.items()
        if k not in ("opportunity_number", "stage", "actual_close_date")
    }
    return _update(ctx, principal, opportunity_id, changes)


@with_auth
def update_opportunity_stage(ctx: RequestContext, principal: User, opportunity_id: str, stage: str) -> dict:
    """Move an opportunity through the pipeline; a closing stage stamps the close date."""
    if not check_permission(ctx, Permission.OPPORTUNITIES_UPDATE):
        return failure(PERMISSION_DENIED)

    if stage not in {s.value for s in OpportunityStage}:
        return failure(INVALID_STAGE)

    changes: dict = {"stage": stage}
    if stage in CLOSED_STAGES:
        changes["actual_close_date"] = date.today()
    return _update(ctx, principal, opportunity_id, changes)


@with_auth
def delete_opportunity(
    ctx: RequestContext, principal: User, opportunity_id: str, reason: Optional[str] = None
) -> dict:
    if not check_permission(ctx, Permission.OPPORTUNITIES_DELETE):
        return failure(PERMISSION_DENIED)

    return soft_delete_record(ctx, principal, Opportunity, opportunity_id, RESOURCE, "Opportunity", reason)
