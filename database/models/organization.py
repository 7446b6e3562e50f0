from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import JSON
from sqlmodel import SQLModel, Field

from config.settings import DEFAULT_CURRENCY
from database.models.base import UtcDateTime, new_id, utcnow


class SubscriptionStatus(str, Enum):
    TRIAL = "trial"
    ACTIVE = "active"
    GRACE_PERIOD = "grace_period"
    SUSPENDED = "suspended"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class Organization(SQLModel, table=True):
    """A tenant. Every record in the system belongs to exactly one."""
    __tablename__ = "organizations"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(index=True, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    currency: str = Field(default=DEFAULT_CURRENCY, max_length=3)

    # Subscription
    subscription_status: str = Field(default=SubscriptionStatus.TRIAL.value, max_length=20)
    subscription_expiry: Optional[datetime] = Field(default=None, sa_type=UtcDateTime)
    grace_period_end: Optional[datetime] = Field(default=None, sa_type=UtcDateTime)

    # {"enable_tax_calculation": bool, "tax_rate": float}
    tax_settings: dict = Field(default_factory=dict, sa_type=JSON)
    # {"invoice_prefix": str, "invoice_number_format": str}
    invoice_settings: dict = Field(default_factory=dict, sa_type=JSON)
    # {"payment_terms": int, "late_fee_percentage": float, "early_payment_discount": float}
    payment_settings: dict = Field(default_factory=dict, sa_type=JSON)

    # Document sequences; only ever incremented
    next_invoice_number: int = Field(default=1)
    next_expense_number: int = Field(default=1)
    next_asset_number: int = Field(default=1)
    next_lead_number: int = Field(default=1)
    next_opportunity_number: int = Field(default=1)

    created_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
