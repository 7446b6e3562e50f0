from datetime import date
from typing import Optional

from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import check_permission
from core.permissions import Permission
from core.results import PERMISSION_DENIED, failure, success
from database.models import Expense, Invoice, InvoiceStatus, User
from services import records
from services.finance import summarize_vat


@with_auth
def get_vat_return_data(
    ctx: RequestContext,
    principal: User,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> dict:
    """VAT return figures; the date range applies only when both ends are given."""
    if not check_permission(ctx, Permission.TAX_REPORTS_VIEW):
        return failure(PERMISSION_DENIED)

    invoice_query = records.active_query(Invoice, principal.organization_id).where(
        Invoice.status.in_([InvoiceStatus.SENT.value, InvoiceStatus.PAID.value])
    )
    expense_query = records.active_query(Expense, principal.organization_id).where(
        Expense.is_taxable == True  # noqa: E712
    )

    if start_date and end_date:
        invoice_query = invoice_query.where(Invoice.issue_date >= start_date, Invoice.issue_date <= end_date)
        expense_query = expense_query.where(Expense.expense_date >= start_date, Expense.expense_date <= end_date)

    invoices = ctx.session.exec(invoice_query).all()
    expenses = ctx.session.exec(expense_query).all()
    return success(summarize_vat(invoices, expenses))
