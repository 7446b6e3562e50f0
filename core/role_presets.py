"""
Built-in roles seeded for every new organization.
"""
from core.permissions import Permission


def _grant(*permissions: Permission) -> dict[str, bool]:
    return {p.value: True for p in permissions}


ROLE_PRESETS = {
    "ADMIN": {
        "name": "admin",
        "display_name": "Administrator",
        "description": "Full access to all features",
        "permissions": _grant(*Permission),
    },
    "ACCOUNTANT": {
        "name": "accountant",
        "display_name": "Accountant",
        "description": "Full accounting access, read-only for other modules",
        "permissions": _grant(
            Permission.DASHBOARD_VIEW,
            # Full accounting access
            Permission.ACCOUNTING_VIEW,
            Permission.CHART_OF_ACCOUNTS_CREATE,
            Permission.CHART_OF_ACCOUNTS_VIEW,
            Permission.CHART_OF_ACCOUNTS_UPDATE,
            Permission.JOURNAL_ENTRIES_CREATE,
            Permission.JOURNAL_ENTRIES_VIEW,
            Permission.JOURNAL_ENTRIES_UPDATE,
            Permission.GENERAL_LEDGER_VIEW,
            Permission.PERIOD_CLOSE_CREATE,
            Permission.PERIOD_CLOSE_VIEW,
            # Banking view only
            Permission.BANKING_VIEW,
            Permission.BANK_ACCOUNTS_VIEW,
            Permission.TRANSACTIONS_VIEW,
            Permission.RECONCILIATION_VIEW,
            # Reports
            Permission.REPORTS_VIEW,
            Permission.PROFIT_LOSS_VIEW,
            Permission.BALANCE_SHEET_VIEW,
            Permission.CASH_FLOW_VIEW,
            Permission.TRIAL_BALANCE_VIEW,
            # Tax
            Permission.TAX_VIEW,
            Permission.TAX_SETTINGS_VIEW,
            Permission.TAX_REPORTS_VIEW,
            # Fixed assets
            Permission.ASSETS_VIEW,
            Permission.FIXED_ASSETS_CREATE,
            Permission.FIXED_ASSETS_VIEW,
            Permission.FIXED_ASSETS_UPDATE,
        ),
    },
    "BOOKKEEPER": {
        "name": "bookkeeper",
        "display_name": "Bookkeeper",
        "description": "Day-to-day transaction entry",
        "permissions": _grant(
            Permission.DASHBOARD_VIEW,
            Permission.BANKING_VIEW,
            Permission.TRANSACTIONS_CREATE,
            Permission.TRANSACTIONS_VIEW,
            Permission.TRANSACTIONS_UPDATE,
            Permission.RECONCILIATION_CREATE,
            Permission.RECONCILIATION_VIEW,
            Permission.SALES_VIEW,
            Permission.INVOICES_CREATE,
            Permission.INVOICES_VIEW,
            Permission.INVOICES_UPDATE,
            Permission.CUSTOMERS_VIEW,
            Permission.EXPENSES_VIEW,
            Permission.EXPENSES_CREATE,
            Permission.EXPENSES_UPDATE,
            Permission.BILLS_CREATE,
            Permission.BILLS_VIEW,
            Permission.VENDORS_VIEW,
            Permission.REPORTS_VIEW,
            Permission.PROFIT_LOSS_VIEW,
            Permission.BALANCE_SHEET_VIEW,
        ),
    },
    "SALES_MANAGER": {
        "name": "sales_manager",
        "display_name": "Sales Manager",
        "description": "Full sales and customer management",
        "permissions": _grant(
            Permission.DASHBOARD_VIEW,
            Permission.SALES_VIEW,
            Permission.INVOICES_CREATE,
            Permission.INVOICES_VIEW,
            Permission.INVOICES_UPDATE,
            Permission.INVOICES_DELETE,
            Permission.ESTIMATES_CREATE,
            Permission.ESTIMATES_VIEW,
            Permission.ESTIMATES_UPDATE,
            Permission.CUSTOMERS_CREATE,
            Permission.CUSTOMERS_VIEW,
            Permission.CUSTOMERS_UPDATE,
            Permission.PAYMENTS_RECEIVED_CREATE,
            Permission.PAYMENTS_RECEIVED_VIEW,
            Permission.CRM_VIEW,
            Permission.LEADS_CREATE,
            Permission.LEADS_VIEW,
            Permission.LEADS_UPDATE,
            Permission.LEADS_DELETE,
            Permission.OPPORTUNITIES_CREATE,
            Permission.OPPORTUNITIES_VIEW,
            Permission.OPPORTUNITIES_UPDATE,
            Permission.OPPORTUNITIES_DELETE,
            Permission.REPORTS_VIEW,
            Permission.AR_AGING_VIEW,
        ),
    },
    "VIEWER": {
        "name": "viewer",
        "display_name": "Viewer",
        "description": "Read-only access to reports and data",
        "permissions": _grant(
            Permission.DASHBOARD_VIEW,
            Permission.BANKING_VIEW,
            Permission.BANK_ACCOUNTS_VIEW,
            Permission.TRANSACTIONS_VIEW,
            Permission.SALES_VIEW,
            Permission.INVOICES_VIEW,
            Permission.CUSTOMERS_VIEW,
            Permission.EXPENSES_VIEW,
            Permission.BILLS_VIEW,
            Permission.VENDORS_VIEW,
            Permission.ACCOUNTING_VIEW,
            Permission.CHART_OF_ACCOUNTS_VIEW,
            Permission.GENERAL_LEDGER_VIEW,
            Permission.REPORTS_VIEW,
            Permission.PROFIT_LOSS_VIEW,
            Permission.BALANCE_SHEET_VIEW,
            Permission.CASH_FLOW_VIEW,
        ),
    },
    "EMPLOYEE": {
        "name": "employee",
        "display_name": "Employee",
        "description": "Limited access for regular employees",
        "permissions": _grant(
            Permission.DASHBOARD_VIEW,
            Permission.EXPENSES_CREATE,
            Permission.EXPENSES_VIEW,
            Permission.TIME_TRACKING_CREATE,
            Permission.TIME_TRACKING_VIEW,
            Permission.EMPLOYEE_PORTAL_VIEW,
            Permission.LEAVE_MANAGEMENT_CREATE,
            Permission.LEAVE_MANAGEMENT_VIEW,
        ),
    },
}


def get_role_preset(preset_name: str) -> dict:
    """Look up a preset by key (case-insensitive), e.g. "viewer"."""
    preset = ROLE_PRESETS.get(preset_name.upper())
    if preset is None:
        raise ValueError(f"Unknown role preset '{preset_name}'")
    return preset


def get_role_preset_names() -> list[str]:
    return list(ROLE_PRESETS.keys())
