from fastapi import APIRouter

from api.auth.routes import router as auth_router
from api.customer.routes import router as customer_router
from api.vendor.routes import router as vendor_router
from api.invoice.routes import router as invoice_router
from api.expense.routes import router as expense_router
from api.role.routes import router as role_router
from api.user.routes import router as user_router
from api.deleted_items.routes import router as deleted_items_router
from api.audit.routes import router as audit_router
from api.report.routes import router as report_router
from api.finance.routes import router as finance_router
from api.fixed_asset.routes import router as fixed_asset_router
from api.lead.routes import router as lead_router
from api.opportunity.routes import router as opportunity_router
from api.pages.routes import router as pages_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(customer_router, prefix="/customers", tags=["customers"])
api_router.include_router(vendor_router, prefix="/vendors", tags=["vendors"])
api_router.include_router(invoice_router, prefix="/invoices", tags=["invoices"])
api_router.include_router(expense_router, prefix="/expenses", tags=["expenses"])
api_router.include_router(role_router, prefix="/roles", tags=["roles"])
api_router.include_router(user_router, prefix="/users", tags=["users"])
api_router.include_router(deleted_items_router, prefix="/deleted-items", tags=["deleted-items"])
api_router.include_router(audit_router, prefix="/audit-logs", tags=["audit-logs"])
api_router.include_router(report_router, prefix="/reports", tags=["reports"])
api_router.include_router(finance_router, prefix="/finance", tags=["finance"])
api_router.include_router(fixed_asset_router, prefix="/fixed-assets", tags=["fixed-assets"])
api_router.include_router(lead_router, prefix="/leads", tags=["leads"])
api_router.include_router(opportunity_router, prefix="/opportunities", tags=["opportunities"])

__all__ = ["api_router", "pages_router"]
