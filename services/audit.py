from typing import Any, Optional

from sqlmodel import Session, select

from database.models import AuditLog
from utils.logger import get_logger

logger = get_logger(__name__)


def log_audit(
    session: Session,
    organization_id: str,
    user_id: Optional[str],
    action: str,
    resource: str,
    resource_id: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
) -> AuditLog:
    """Append an audit entry and commit it."""
    entry = AuditLog(
        organization_id=organization_id,
        user_id=user_id,
        action=action,
        resource=resource,
        resource_id=resource_id,
        details=details,
    )
    session.add(entry)
    session.commit()
    session.refresh(entry)
    logger.debug(f"[Audit] {action} {resource}/{resource_id} by {user_id}")
    return entry


def list_audit_logs(
    session: Session,
    organization_id: str,
    resource: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> list[AuditLog]:
    query = select(AuditLog).where(AuditLog.organization_id == organization_id)
    if resource:
        query = query.where(AuditLog.resource == resource)
    query = query.order_by(AuditLog.created_at.desc()).offset(skip).limit(limit)
    return list(session.exec(query).all())
