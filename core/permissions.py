"""
Centralized permission definitions.
All permission keys should be referenced from here.

A key is "<resource>_<action>" and lives only inside a role's
permission mapping; a key missing from the mapping is denied.
"""
from enum import Enum


class Permission(str, Enum):
    # Core access
    DASHBOARD_VIEW = "dashboard_view"

    # Banking
    BANKING_VIEW = "banking_view"
    BANK_ACCOUNTS_CREATE = "bankAccounts_create"
    BANK_ACCOUNTS_VIEW = "bankAccounts_view"
    BANK_ACCOUNTS_UPDATE = "bankAccounts_update"
    BANK_ACCOUNTS_DELETE = "bankAccounts_delete"
    TRANSACTIONS_CREATE = "transactions_create"
    TRANSACTIONS_VIEW = "transactions_view"
    TRANSACTIONS_UPDATE = "transactions_update"
    TRANSACTIONS_DELETE = "transactions_delete"
    RECONCILIATION_CREATE = "reconciliation_create"
    RECONCILIATION_VIEW = "reconciliation_view"

    # Sales & invoicing
    SALES_VIEW = "sales_view"
    INVOICES_CREATE = "invoices_create"
    INVOICES_VIEW = "invoices_view"
    INVOICES_UPDATE = "invoices_update"
    INVOICES_DELETE = "invoices_delete"
    CUSTOMERS_CREATE = "customers_create"
    CUSTOMERS_VIEW = "customers_view"
    CUSTOMERS_UPDATE = "customers_update"
    CUSTOMERS_DELETE = "customers_delete"
    ESTIMATES_CREATE = "estimates_create"
    ESTIMATES_VIEW = "estimates_view"
    ESTIMATES_UPDATE = "estimates_update"
    ESTIMATES_DELETE = "estimates_delete"
    PAYMENTS_RECEIVED_CREATE = "paymentsReceived_create"
    PAYMENTS_RECEIVED_VIEW = "paymentsReceived_view"

    # Expenses & bills
    EXPENSES_VIEW = "expenses_view"
    EXPENSES_CREATE = "expenses_create"
    EXPENSES_UPDATE = "expenses_update"
    EXPENSES_DELETE = "expenses_delete"
    BILLS_CREATE = "bills_create"
    BILLS_VIEW = "bills_view"
    BILLS_UPDATE = "bills_update"
    BILLS_DELETE = "bills_delete"
    VENDORS_CREATE = "vendors_create"
    VENDORS_VIEW = "vendors_view"
    VENDORS_UPDATE = "vendors_update"
    VENDORS_DELETE = "vendors_delete"

    # Payroll
    PAYROLL_VIEW = "payroll_view"
    EMPLOYEES_CREATE = "employees_create"
    EMPLOYEES_VIEW = "employees_view"
    EMPLOYEES_UPDATE = "employees_update"
    EMPLOYEES_DELETE = "employees_delete"
    RUN_PAYROLL_CREATE = "runPayroll_create"
    RUN_PAYROLL_VIEW = "runPayroll_view"
    TIME_TRACKING_CREATE = "timeTracking_create"
    TIME_TRACKING_VIEW = "timeTracking_view"
    LEAVE_MANAGEMENT_CREATE = "leaveManagement_create"
    LEAVE_MANAGEMENT_VIEW = "leaveManagement_view"
    EMPLOYEE_PORTAL_VIEW = "employeePortal_view"

    # Accounting
    ACCOUNTING_VIEW = "accounting_view"
    CHART_OF_ACCOUNTS_CREATE = "chartOfAccounts_create"
    CHART_OF_ACCOUNTS_VIEW = "chartOfAccounts_view"
    CHART_OF_ACCOUNTS_UPDATE = "chartOfAccounts_update"
    JOURNAL_ENTRIES_CREATE = "journalEntries_create"
    JOURNAL_ENTRIES_VIEW = "journalEntries_view"
    JOURNAL_ENTRIES_UPDATE = "journalEntries_update"
    GENERAL_LEDGER_VIEW = "generalLedger_view"
    PERIOD_CLOSE_CREATE = "periodClose_create"
    PERIOD_CLOSE_VIEW = "periodClose_view"

    # Tax
    TAX_VIEW = "tax_view"
    TAX_SETTINGS_VIEW = "taxSettings_view"
    TAX_SETTINGS_UPDATE = "taxSettings_update"
    TAX_REPORTS_VIEW = "taxReports_view"

    # Products
    PRODUCTS_CREATE = "products_create"
    PRODUCTS_VIEW = "products_view"
    PRODUCTS_UPDATE = "products_update"
    PRODUCTS_DELETE = "products_delete"

    # Reports
    REPORTS_VIEW = "reports_view"
    PROFIT_LOSS_VIEW = "profitLoss_view"
    BALANCE_SHEET_VIEW = "balanceSheet_view"
    CASH_FLOW_VIEW = "cashFlow_view"
    AR_AGING_VIEW = "arAging_view"
    TRIAL_BALANCE_VIEW = "trialBalance_view"

    # CRM
    CRM_VIEW = "crm_view"
    LEADS_CREATE = "leads_create"
    LEADS_VIEW = "leads_view"
    LEADS_UPDATE = "leads_update"
    LEADS_DELETE = "leads_delete"
    OPPORTUNITIES_CREATE = "opportunities_create"
    OPPORTUNITIES_VIEW = "opportunities_view"
    OPPORTUNITIES_UPDATE = "opportunities_update"
    OPPORTUNITIES_DELETE = "opportunities_delete"

    # Budgeting, assets, loans
    BUDGETING_VIEW = "budgeting_view"
    BUDGETS_CREATE = "budgets_create"
    BUDGETS_VIEW = "budgets_view"
    ASSETS_VIEW = "assets_view"
    FIXED_ASSETS_CREATE = "fixedAssets_create"
    FIXED_ASSETS_VIEW = "fixedAssets_view"
    FIXED_ASSETS_UPDATE = "fixedAssets_update"
    FIXED_ASSETS_DELETE = "fixedAssets_delete"
    LOANS_CREATE = "loans_create"
    LOANS_VIEW = "loans_view"

    # Settings
    SETTINGS_VIEW = "settings_view"
    COMPANY_SETTINGS_VIEW = "companySettings_view"
    COMPANY_SETTINGS_UPDATE = "companySettings_update"
    USER_MANAGEMENT_CREATE = "userManagement_create"
    USER_MANAGEMENT_VIEW = "userManagement_view"
    USER_MANAGEMENT_UPDATE = "userManagement_update"
    USER_MANAGEMENT_DELETE = "userManagement_delete"
    AUDIT_LOGS_VIEW = "auditLogs_view"


PERMISSION_KEYS = frozenset(p.value for p in Permission)

# Modules gated by "<module>_view"
MODULES = [
    "dashboard", "banking", "sales", "expenses", "payroll",
    "accounting", "tax", "products", "reports", "settings",
    "projects", "crm", "budgeting", "assets", "equity", "ai",
]

RESOURCE_ACTIONS = ("create", "view", "update", "delete")

# Role names treated as administrators
ADMIN_ROLE_NAMES = ("admin", "owner")


def permission_key(resource: str, action: str) -> str:
    """Build the mapping key for a resource action, e.g. invoices_create."""
    if action not in RESOURCE_ACTIONS:
        raise ValueError(f"Unknown action '{action}'")
    return f"{resource}_{action}"


def normalize_permissions(mapping: dict | None) -> dict[str, bool]:
    """Keep only known keys, coerced to real booleans.

    Anything not in the Permission enum is dropped so a stored mapping
    can never carry a key that no call site checks.
    """
    normalized: dict[str, bool] = {}
    for key, value in (mapping or {}).items():
        key = key.value if isinstance(key, Permission) else key
        if key in PERMISSION_KEYS:
            normalized[key] = value is True
    return normalized


def permission_catalog() -> dict[str, list[str]]:
    """Group permission keys by the resource they belong to."""
    catalog: dict[str, list[str]] = {}
    for permission in Permission:
        resource, _, _ = permission.value.rpartition("_")
        catalog.setdefault(resource, []).append(permission.value)
    return catalog
