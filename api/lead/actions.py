from typing import Optional

from api.common import soft_delete_record
from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import check_permission
from core.permissions import Permission
from core.results import PERMISSION_DENIED, failure, not_found, success, to_data
from database.models import Lead, LeadStatus, User
from services import records
from services.audit import log_audit
from services.subscription import check_write_access

RESOURCE = "leads"
INVALID_STATUS = "Invalid lead status"


@with_auth
def create_lead(ctx: RequestContext, principal: User, data: dict) -> dict:
    if not check_permission(ctx, Permission.LEADS_CREATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    sequence = records.take_next_number(ctx.session, principal.organization_id, "next_lead_number")
    payload = {k: v for k, v in data.items() if k != "status"}
    payload["lead_number"] = f"LEAD-{sequence:05d}"

    lead = records.create_record(ctx.session, Lead, principal.organization_id, principal.id, payload)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "create", RESOURCE, lead.id, {"after": to_data(lead)},
    )
    return success(to_data(lead))


@with_auth
def list_leads(
    ctx: RequestContext,
    principal: User,
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
) -> dict:
    if not check_permission(ctx, Permission.LEADS_VIEW):
        return failure(PERMISSION_DENIED)

    leads = records.list_active(ctx.session, Lead, principal.organization_id, skip, limit, status=status)
    return success(
        [to_data(lead) for lead in leads],
        total=records.count_active(ctx.session, Lead, principal.organization_id),
    )


@with_auth
def get_lead(ctx: RequestContext, principal: User, lead_id: str) -> dict:
    if not check_permission(ctx, Permission.LEADS_VIEW):
        return failure(PERMISSION_DENIED)

    lead = records.get_active(ctx.session, Lead, principal.organization_id, lead_id)
    if not lead:
        return not_found("Lead")
    return success(to_data(lead))


def _update(ctx: RequestContext, principal: User, lead_id: str, changes: dict) -> dict:
    check_write_access(ctx.session, principal.organization_id)

    lead = records.get_active(ctx.session, Lead, principal.organization_id, lead_id)
    if not lead:
        return not_found("Lead")

    before = to_data(lead)
    lead = records.update_record(ctx.session, lead, principal.id, changes)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "update", RESOURCE, lead.id, {"before": before, "after": to_data(lead)},
    )
    return success(to_data(lead))


@with_auth
def update_lead(ctx: RequestContext, principal: User, lead_id: str, data: dict) -> dict:
    if not check_permission(ctx, Permission.LEADS_UPDATE):
        return failure(PERMISSION_DENIED)

    changes = {k: v for k, v in data.items() if k not in ("lead_number", "status")}
    return _update(ctx, principal, lead_id, changes)


@with_auth
def update_lead_status(ctx: RequestContext, principal: User, lead_id: str, status: str) -> dict:
    if not check_permission(ctx, Permission.LEADS_UPDATE):
        return failure(PERMISSION_DENIED)

    if status not in {s.value for s in LeadStatus}:
        return failure(INVALID_STATUS)
    return _update(ctx, principal, lead_id, {"status": status})


@with_auth
def delete_lead(ctx: RequestContext, principal: User, lead_id: str, reason: Optional[str] = None) -> dict:
    if not check_permission(ctx, Permission.LEADS_DELETE):
        return failure(PERMISSION_DENIED)

    return soft_delete_record(ctx, principal, Lead, lead_id, RESOURCE, "Lead", reason)
