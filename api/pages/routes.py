"""
Page-data routes for the dashboard shell.

Each route guards its page first; a denied guard becomes a redirect to
the caller's dashboard home (or the sign-in page for the home itself).
Allowed routes return the data the page renders.
"""
from datetime import date
from typing import Iterable, Optional

from fastapi import APIRouter, Depends

from api.customer.actions import list_customers
from api.deleted_items.actions import get_deleted_items_summary
from api.expense.actions import list_expenses
from api.invoice.actions import list_invoices
from api.report.actions import get_vat_return_data
from auth.context import RequestContext, get_request_context
from auth.guards import GuardResult, protect_page, redirect_for
from auth.permissions import check_permission, get_accessible_modules, get_resource_permissions
from config.settings import LOGIN_URL
from core.permissions import Permission
from database.models import Organization
from services.subscription import get_subscription_warning
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def dashboard_path(organization_id: str, user_id: str) -> str:
    return f"/{organization_id}/dashboard/{user_id}"


def guard_page(
    ctx: RequestContext,
    organization_id: str,
    user_id: str,
    permission: Optional[Permission] = None,
    any_permissions: Optional[Iterable[Permission]] = None,
    redirect_to: Optional[str] = None,
) -> GuardResult:
    """protect_page plus a check that the URL belongs to the caller."""
    redirect_to = redirect_to or dashboard_path(organization_id, user_id)
    result = protect_page(ctx, permission=permission, any_permissions=any_permissions, redirect_to=redirect_to)
    if result.denied:
        return result

    principal = result.principal
    if principal.organization_id != organization_id or principal.id != user_id:
        logger.info(f"User {principal.id} tried to open a page under {organization_id}/{user_id}")
        return GuardResult(
            allowed=False,
            redirect_to=dashboard_path(principal.organization_id, principal.id),
        )
    return result


@router.get("/{organization_id}/dashboard/{user_id}")
def dashboard_page(organization_id: str, user_id: str, ctx: RequestContext = Depends(get_request_context)):
    result = guard_page(ctx, organization_id, user_id, Permission.DASHBOARD_VIEW, redirect_to=LOGIN_URL)
    if result.denied:
        return redirect_for(result)

    return {
        "user": {"id": result.principal.id, "name": result.principal.name, "email": result.principal.email},
        "modules": get_accessible_modules(ctx),
        "subscription_warning": get_subscription_warning(ctx.session, organization_id),
    }


@router.get("/{organization_id}/dashboard/{user_id}/sales/invoices")
def invoices_page(organization_id: str, user_id: str, ctx: RequestContext = Depends(get_request_context)):
    result = guard_page(ctx, organization_id, user_id, Permission.INVOICES_VIEW)
    if result.denied:
        return redirect_for(result)

    invoices = list_invoices(ctx)
    return {
        "invoices": invoices.get("data", []),
        "total": invoices.get("total", 0),
        "permissions": get_resource_permissions(ctx, "invoices"),
    }


@router.get("/{organization_id}/dashboard/{user_id}/sales/invoices/new")
def new_invoice_page(organization_id: str, user_id: str, ctx: RequestContext = Depends(get_request_context)):
    result = guard_page(ctx, organization_id, user_id, Permission.INVOICES_CREATE)
    if result.denied:
        return redirect_for(result)

    # Customer picker is empty for roles that cannot read customers
    customers = list_customers(ctx)
    return {"customers": customers.get("data", [])}


@router.get("/{organization_id}/dashboard/{user_id}/sales/customers")
def customers_page(organization_id: str, user_id: str, ctx: RequestContext = Depends(get_request_context)):
    result = guard_page(ctx, organization_id, user_id, Permission.CUSTOMERS_VIEW)
    if result.denied:
        return redirect_for(result)

    customers = list_customers(ctx)
    return {
        "customers": customers.get("data", []),
        "total": customers.get("total", 0),
        "permissions": get_resource_permissions(ctx, "customers"),
    }


@router.get("/{organization_id}/dashboard/{user_id}/expenses/all")
def expenses_page(organization_id: str, user_id: str, ctx: RequestContext = Depends(get_request_context)):
    result = guard_page(ctx, organization_id, user_id, Permission.EXPENSES_VIEW)
    if result.denied:
        return redirect_for(result)

    expenses = list_expenses(ctx)
    return {
        "expenses": expenses.get("data", []),
        "total": expenses.get("total", 0),
        "permissions": get_resource_permissions(ctx, "expenses"),
    }


@router.get("/{organization_id}/dashboard/{user_id}/tax/vat-returns")
def vat_returns_page(
    organization_id: str,
    user_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    ctx: RequestContext = Depends(get_request_context),
):
    result = guard_page(ctx, organization_id, user_id, Permission.TAX_REPORTS_VIEW)
    if result.denied:
        return redirect_for(result)

    return get_vat_return_data(ctx, start_date, end_date)


@router.get("/{organization_id}/dashboard/{user_id}/tax/settings")
def tax_settings_page(organization_id: str, user_id: str, ctx: RequestContext = Depends(get_request_context)):
    result = guard_page(
        ctx, organization_id, user_id,
        any_permissions=[Permission.TAX_VIEW, Permission.TAX_SETTINGS_VIEW],
    )
    if result.denied:
        return redirect_for(result)

    organization = ctx.session.get(Organization, result.principal.organization_id)
    return {
        "tax_settings": organization.tax_settings or {},
        "can_edit": check_permission(ctx, Permission.TAX_SETTINGS_UPDATE),
    }


@router.get("/{organization_id}/dashboard/{user_id}/settings/deleted-items")
def deleted_items_page(organization_id: str, user_id: str, ctx: RequestContext = Depends(get_request_context)):
    result = guard_page(ctx, organization_id, user_id, Permission.SETTINGS_VIEW)
    if result.denied:
        return redirect_for(result)

    # Non-admins see the page with the action's error instead of data
    return get_deleted_items_summary(ctx)
