from typing import Optional

from api.common import soft_delete_record
from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import check_permission
from core.permissions import Permission
from core.results import PERMISSION_DENIED, failure, not_found, success, to_data
from database.models import Expense, User, Vendor
from services import records
from services.audit import log_audit
from services.subscription import check_write_access

RESOURCE = "expenses"


def _expense_tax(amount: float, is_taxable: bool, tax_rate: float) -> float:
    return amount * tax_rate / 100 if is_taxable else 0


@with_auth
def create_expense(ctx: RequestContext, principal: User, data: dict) -> dict:
    if not check_permission(ctx, Permission.EXPENSES_CREATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    if data.get("vendor_id") and not records.get_active(
        ctx.session, Vendor, principal.organization_id, data["vendor_id"]
    ):
        return not_found("Vendor")

    sequence = records.take_next_number(ctx.session, principal.organization_id, "next_expense_number")
    payload = dict(data)
    payload["expense_number"] = f"EXP-{payload['expense_date'].year}-{sequence:04d}"
    payload["tax_amount"] = _expense_tax(
        payload["amount"], payload.get("is_taxable", False), payload.get("tax_rate", 0)
    )

    expense = records.create_record(ctx.session, Expense, principal.organization_id, principal.id, payload)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "create", RESOURCE, expense.id, {"after": to_data(expense)},
    )
    return success(to_data(expense))


@with_auth
def list_expenses(
    ctx: RequestContext,
    principal: User,
    skip: int = 0,
    limit: int = 100,
    category: Optional[str] = None,
) -> dict:
    if not check_permission(ctx, Permission.EXPENSES_VIEW):
        return failure(PERMISSION_DENIED)

    expenses = records.list_active(
        ctx.session, Expense, principal.organization_id, skip, limit, category=category
    )
    return success(
        [to_data(e) for e in expenses],
        total=records.count_active(ctx.session, Expense, principal.organization_id),
    )


@with_auth
def get_expense(ctx: RequestContext, principal: User, expense_id: str) -> dict:
    if not check_permission(ctx, Permission.EXPENSES_VIEW):
        return failure(PERMISSION_DENIED)

    expense = records.get_active(ctx.session, Expense, principal.organization_id, expense_id)
    if not expense:
        return not_found("Expense")
    return success(to_data(expense))


@with_auth
def update_expense(ctx: RequestContext, principal: User, expense_id: str, data: dict) -> dict:
    if not check_permission(ctx, Permission.EXPENSES_UPDATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    expense = records.get_active(ctx.session, Expense, principal.organization_id, expense_id)
    if not expense:
        return not_found("Expense")

    changes = {k: v for k, v in data.items() if k not in ("expense_number", "tax_amount")}
    changes["tax_amount"] = _expense_tax(
        changes.get("amount", expense.amount),
        changes.get("is_taxable", expense.is_taxable),
        changes.get("tax_rate", expense.tax_rate),
    )

    before = to_data(expense)
    expense = records.update_record(ctx.session, expense, principal.id, changes)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "update", RESOURCE, expense.id, {"before": before, "after": to_data(expense)},
    )
    return success(to_data(expense))


@with_auth
def delete_expense(ctx: RequestContext, principal: User, expense_id: str, reason: Optional[str] = None) -> dict:
    if not check_permission(ctx, Permission.EXPENSES_DELETE):
        return failure(PERMISSION_DENIED)

    return soft_delete_record(ctx, principal, Expense, expense_id, RESOURCE, "Expense", reason)
