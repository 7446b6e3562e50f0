"""
Invoice actions.

Totals are always derived from the line items; callers never send
subtotal, tax or total themselves.
"""
from typing import Optional

from api.common import soft_delete_record
from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import check_permission
from core.permissions import Permission
from core.results import PERMISSION_DENIED, failure, not_found, success, to_data
from database.models import Customer, Invoice, Organization, User
from services import records
from services.audit import log_audit
from services.finance import calculate_invoice_totals, generate_invoice_number, payment_due_date
from services.subscription import check_write_access
from utils.logger import get_logger

logger = get_logger(__name__)

RESOURCE = "invoices"
DERIVED_FIELDS = ("invoice_number", "subtotal", "tax_amount", "total")


def _with_default_rate(line_items: list[dict], tax_settings: dict) -> list[dict]:
    """Lines without their own rate take the organization rate when tax is on."""
    default_rate = 0
    if tax_settings.get("enable_tax_calculation"):
        default_rate = tax_settings.get("tax_rate") or 0
    return [
        {**item, "tax_rate": default_rate if item.get("tax_rate") is None else item["tax_rate"]}
        for item in line_items
    ]


@with_auth
def create_invoice(ctx: RequestContext, principal: User, data: dict) -> dict:
    if not check_permission(ctx, Permission.INVOICES_CREATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    customer = records.get_active(ctx.session, Customer, principal.organization_id, data.get("customer_id"))
    if not customer:
        return not_found("Customer")

    organization = ctx.session.get(Organization, principal.organization_id)
    payload = {k: v for k, v in data.items() if k not in DERIVED_FIELDS}
    payload.update(
        calculate_invoice_totals(
            _with_default_rate(data.get("line_items") or [], organization.tax_settings or {})
        )
    )
    sequence = records.take_next_number(ctx.session, organization.id, "next_invoice_number")
    payload["invoice_number"] = generate_invoice_number(
        sequence - 1, organization.invoice_settings, payload["issue_date"].year
    )
    if not payload.get("due_date"):
        payload["due_date"] = payment_due_date(payload["issue_date"], organization.payment_settings)
    payload.setdefault("currency", customer.currency)

    invoice = records.create_record(ctx.session, Invoice, principal.organization_id, principal.id, payload)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "create", RESOURCE, invoice.id, {"after": to_data(invoice)},
    )
    logger.info(f"Invoice {invoice.invoice_number} created for customer {customer.id}")
    return success(to_data(invoice))


@with_auth
def list_invoices(
    ctx: RequestContext,
    principal: User,
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
    customer_id: Optional[str] = None,
) -> dict:
    if not check_permission(ctx, Permission.INVOICES_VIEW):
        return failure(PERMISSION_DENIED)

    invoices = records.list_active(
        ctx.session, Invoice, principal.organization_id, skip, limit,
        status=status, customer_id=customer_id,
    )
    return success(
        [to_data(i) for i in invoices],
        total=records.count_active(ctx.session, Invoice, principal.organization_id),
    )


@with_auth
def get_invoice(ctx: RequestContext, principal: User, invoice_id: str) -> dict:
    if not check_permission(ctx, Permission.INVOICES_VIEW):
        return failure(PERMISSION_DENIED)

    invoice = records.get_active(ctx.session, Invoice, principal.organization_id, invoice_id)
    if not invoice:
        return not_found("Invoice")
    return success(to_data(invoice))


@with_auth
def update_invoice(ctx: RequestContext, principal: User, invoice_id: str, data: dict) -> dict:
    if not check_permission(ctx, Permission.INVOICES_UPDATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    invoice = records.get_active(ctx.session, Invoice, principal.organization_id, invoice_id)
    if not invoice:
        return not_found("Invoice")

    if data.get("customer_id") and not records.get_active(
        ctx.session, Customer, principal.organization_id, data["customer_id"]
    ):
        return not_found("Customer")

    changes = {k: v for k, v in data.items() if k not in DERIVED_FIELDS}
    if changes.get("line_items") is not None:
        organization = ctx.session.get(Organization, principal.organization_id)
        changes.update(
            calculate_invoice_totals(
                _with_default_rate(changes["line_items"], organization.tax_settings or {})
            )
        )

    before = to_data(invoice)
    invoice = records.update_record(ctx.session, invoice, principal.id, changes)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "update", RESOURCE, invoice.id, {"before": before, "after": to_data(invoice)},
    )
    return success(to_data(invoice))


@with_auth
def delete_invoice(ctx: RequestContext, principal: User, invoice_id: str, reason: Optional[str] = None) -> dict:
    if not check_permission(ctx, Permission.INVOICES_DELETE):
        return failure(PERMISSION_DENIED)

    return soft_delete_record(ctx, principal, Invoice, invoice_id, RESOURCE, "Invoice", reason)
