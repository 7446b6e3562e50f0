from typing import Optional

from fastapi import APIRouter, Depends

from auth.guards import require_permission
from core.permissions import Permission
from database.connection import get_session
from database.models import User
from services.audit import list_audit_logs
from sqlmodel import Session

router = APIRouter()


@router.get("")
def get_audit_logs(
    resource: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(require_permission(Permission.AUDIT_LOGS_VIEW)),
    session: Session = Depends(get_session),
):
    """Recent audit entries for the caller's organization."""
    logs = list_audit_logs(session, current_user.organization_id, resource, skip, limit)
    return {"logs": [log.model_dump(mode="json") for log in logs]}
