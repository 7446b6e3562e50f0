from database.models.base import RecordBase, PROTECTED_FIELDS, utcnow
from database.models.organization import Organization, SubscriptionStatus
from database.models.role import Role
from database.models.user import User, UserStatus
from database.models.customer import Customer, ContactStatus
from database.models.vendor import Vendor
from database.models.invoice import Invoice, InvoiceStatus
from database.models.expense import Expense, ExpenseStatus
from database.models.fixed_asset import AssetStatus, AssetType, FixedAsset
from database.models.crm import (
    CLOSED_STAGES,
    Lead,
    LeadRating,
    LeadStatus,
    Opportunity,
    OpportunityStage,
)
from database.models.audit_log import AuditLog

__all__ = [
    "RecordBase",
    "PROTECTED_FIELDS",
    "utcnow",
    "Organization",
    "SubscriptionStatus",
    "Role",
    "User",
    "UserStatus",
    "Customer",
    "ContactStatus",
    "Vendor",
    "Invoice",
    "InvoiceStatus",
    "Expense",
    "ExpenseStatus",
    "FixedAsset",
    "AssetStatus",
    "AssetType",
    "Lead",
    "LeadStatus",
    "LeadRating",
    "Opportunity",
    "OpportunityStage",
    "CLOSED_STAGES",
    "AuditLog",
]
