"""
Subscription state and the read-only gate for lapsed organizations.

Status walk: active until expiry, then a grace period, then suspended.
Suspended organizations can still read everything but cannot write.
"""
import math
from datetime import datetime, timedelta
from typing import Optional

from sqlmodel import Session

from config.settings import SUBSCRIPTION_GRACE_DAYS
from database.models import Organization, SubscriptionStatus
from database.models.base import as_utc, utcnow
from utils.logger import get_logger

logger = get_logger(__name__)


class ReadOnlyOrganizationError(Exception):
    """Raised when a write is attempted on a suspended or cancelled organization."""


class OrganizationNotFoundError(ValueError):
    """Raised when a write names an organization that does not exist."""


def _days_until(moment: datetime, now: datetime) -> int:
    return math.ceil((moment - now).total_seconds() / 86400)


def _set_status(session: Session, organization: Organization, new_status: SubscriptionStatus) -> None:
    if organization.subscription_status == new_status.value:
        return
    logger.info(
        f"[Subscription] {organization.id}: {organization.subscription_status} -> {new_status.value}"
    )
    organization.subscription_status = new_status.value
    organization.updated_at = utcnow()
    session.add(organization)
    session.commit()


def check_subscription_status(
    session: Session,
    organization_id: str,
    now: Optional[datetime] = None,
) -> Optional[dict]:
    """Classify the organization's subscription, persisting any transition.

    Returns None when the organization does not exist.
    """
    organization = session.get(Organization, organization_id)
    if not organization:
        return None

    now = as_utc(now) if now else utcnow()
    expiry = as_utc(organization.subscription_expiry)
    current = organization.subscription_status

    if current in (SubscriptionStatus.TRIAL.value, SubscriptionStatus.CANCELLED.value):
        result = {
            "status": current,
            "is_accessible": current == SubscriptionStatus.TRIAL.value,
            "is_read_only": False,
            "message": None,
        }
        if expiry and expiry > now:
            result["days_until_expiry"] = _days_until(expiry, now)
        return result

    if expiry is None and current == SubscriptionStatus.ACTIVE.value:
        # Open-ended plan
        return {"status": current, "is_accessible": True, "is_read_only": False, "message": None}

    if expiry and now < expiry:
        _set_status(session, organization, SubscriptionStatus.ACTIVE)
        return {
            "status": SubscriptionStatus.ACTIVE.value,
            "is_accessible": True,
            "is_read_only": False,
            "message": None,
            "days_until_expiry": _days_until(expiry, now),
        }

    grace_end = as_utc(organization.grace_period_end)
    if grace_end is None and expiry is not None:
        grace_end = expiry + timedelta(days=SUBSCRIPTION_GRACE_DAYS)

    if grace_end and now < grace_end:
        _set_status(session, organization, SubscriptionStatus.GRACE_PERIOD)
        days_left = _days_until(grace_end, now)
        plural = "s" if days_left > 1 else ""
        return {
            "status": SubscriptionStatus.GRACE_PERIOD.value,
            "is_accessible": True,
            "is_read_only": False,
            "message": (
                f"Your subscription has expired. You have {days_left} day{plural} "
                "left to renew before your account is suspended."
            ),
            "days_left": days_left,
        }

    if current != SubscriptionStatus.EXPIRED.value:
        _set_status(session, organization, SubscriptionStatus.SUSPENDED)

    return {
        "status": SubscriptionStatus.SUSPENDED.value,
        "is_accessible": True,
        "is_read_only": True,
        "message": "Your subscription has been suspended. Please renew to regain full access.",
    }


def get_subscription_warning(session: Session, organization_id: str) -> Optional[dict]:
    """Banner payload for the dashboard, or None when nothing needs saying."""
    status = check_subscription_status(session, organization_id)
    if not status:
        return None

    days = status.get("days_until_expiry")
    if status["status"] in (SubscriptionStatus.TRIAL.value, SubscriptionStatus.ACTIVE.value) and days and days <= 7:
        return {
            "type": "warning",
            "message": f"Your subscription expires in {days} day{'s' if days > 1 else ''}. Renew now to avoid interruption.",
            "days_left": days,
        }

    if status["status"] == SubscriptionStatus.GRACE_PERIOD.value:
        return {"type": "error", "message": status["message"], "days_left": status["days_left"]}

    if status["status"] == SubscriptionStatus.SUSPENDED.value:
        return {"type": "critical", "message": status["message"]}

    return None


def check_write_access(session: Session, organization_id: str) -> None:
    """Raise ReadOnlyOrganizationError unless the organization may write."""
    status = check_subscription_status(session, organization_id)
    if status is None:
        raise OrganizationNotFoundError("Organization not found")

    if status["is_read_only"] or not status["is_accessible"]:
        raise ReadOnlyOrganizationError(
            status["message"] or "Your subscription is not active. Please renew to make changes."
        )
