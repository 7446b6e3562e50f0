from typing import Optional

from api.common import soft_delete_record
from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import check_permission
from core.permissions import Permission
from core.results import PERMISSION_DENIED, failure, not_found, success, to_data
from database.models import Customer, User
from services import records
from services.audit import log_audit
from services.subscription import check_write_access
from utils.logger import get_logger

logger = get_logger(__name__)

RESOURCE = "customers"


@with_auth
def create_customer(ctx: RequestContext, principal: User, data: dict) -> dict:
    if not check_permission(ctx, Permission.CUSTOMERS_CREATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    customer = records.create_record(
        ctx.session, Customer, principal.organization_id, principal.id, data
    )
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "create", RESOURCE, customer.id, {"after": to_data(customer)},
    )
    logger.info(f"Customer {customer.id} created in {principal.organization_id}")
    return success(to_data(customer))


@with_auth
def list_customers(
    ctx: RequestContext,
    principal: User,
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
) -> dict:
    if not check_permission(ctx, Permission.CUSTOMERS_VIEW):
        return failure(PERMISSION_DENIED)

    customers = records.list_active(
        ctx.session, Customer, principal.organization_id, skip, limit, status=status
    )
    return success(
        [to_data(c) for c in customers],
        total=records.count_active(ctx.session, Customer, principal.organization_id),
    )


@with_auth
def get_customer(ctx: RequestContext, principal: User, customer_id: str) -> dict:
    if not check_permission(ctx, Permission.CUSTOMERS_VIEW):
        return failure(PERMISSION_DENIED)

    customer = records.get_active(ctx.session, Customer, principal.organization_id, customer_id)
    if not customer:
        return not_found("Customer")
    return success(to_data(customer))


@with_auth
def update_customer(ctx: RequestContext, principal: User, customer_id: str, data: dict) -> dict:
    if not check_permission(ctx, Permission.CUSTOMERS_UPDATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    customer = records.get_active(ctx.session, Customer, principal.organization_id, customer_id)
    if not customer:
        return not_found("Customer")

    before = to_data(customer)
    customer = records.update_record(ctx.session, customer, principal.id, data)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "update", RESOURCE, customer.id, {"before": before, "after": to_data(customer)},
    )
    return success(to_data(customer))


@with_auth
def delete_customer(
    ctx: RequestContext,
    principal: User,
    customer_id: str,
    reason: Optional[str] = None,
) -> dict:
    if not check_permission(ctx, Permission.CUSTOMERS_DELETE):
        return failure(PERMISSION_DENIED)

    return soft_delete_record(
        ctx, principal, Customer, customer_id, RESOURCE, "Customer", reason
    )
