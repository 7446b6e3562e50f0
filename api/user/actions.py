from typing import Optional

from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import check_permission
from core.permissions import Permission
from core.results import PERMISSION_DENIED, failure, not_found, success
from database.models import Role, User, UserStatus
from services import records
from services.audit import log_audit
from services.subscription import check_write_access

RESOURCE = "users"


def user_with_details(ctx: RequestContext, user: User, role: Optional[Role] = None) -> dict:
    """User fields plus the name of the role they hold."""
    if role is None and user.role_id:
        role = records.get_active(ctx.session, Role, user.organization_id, user.role_id)

    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "status": user.status,
        "last_login_at": user.last_login_at.isoformat() if user.last_login_at else None,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "role_id": user.role_id,
        "role_name": role.name if role else None,
    }


@with_auth
def list_users(ctx: RequestContext, principal: User, skip: int = 0, limit: int = 100) -> dict:
    if not check_permission(ctx, Permission.USER_MANAGEMENT_VIEW):
        return failure(PERMISSION_DENIED)

    users = records.list_active(ctx.session, User, principal.organization_id, skip, limit)
    return success(
        [user_with_details(ctx, u) for u in users],
        total=records.count_active(ctx.session, User, principal.organization_id),
    )


@with_auth
def change_user_role(ctx: RequestContext, principal: User, user_id: str, role_id: str) -> dict:
    if not check_permission(ctx, Permission.USER_MANAGEMENT_UPDATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    target = records.get_active(ctx.session, User, principal.organization_id, user_id)
    if not target:
        return not_found("User")

    role = records.get_active(ctx.session, Role, principal.organization_id, role_id)
    if not role:
        return not_found("Role")

    previous_role_id = target.role_id
    target = records.update_record(ctx.session, target, principal.id, {"role_id": role.id})
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "change_role", RESOURCE, target.id,
        {"before": {"role_id": previous_role_id}, "after": {"role_id": role.id}},
    )
    return success(user_with_details(ctx, target, role))


@with_auth
def set_user_status(ctx: RequestContext, principal: User, user_id: str, status: str) -> dict:
    """Activate or deactivate an account. Nobody can deactivate themselves."""
    if not check_permission(ctx, Permission.USER_MANAGEMENT_UPDATE):
        return failure(PERMISSION_DENIED)

    if status not in (UserStatus.ACTIVE.value, UserStatus.INACTIVE.value):
        return failure(f"Invalid status '{status}'")

    if user_id == principal.id and status == UserStatus.INACTIVE.value:
        return failure("Cannot deactivate your own account")

    check_write_access(ctx.session, principal.organization_id)

    target = records.get_active(ctx.session, User, principal.organization_id, user_id)
    if not target:
        return not_found("User")

    previous = target.status
    target = records.update_record(ctx.session, target, principal.id, {"status": status})
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "change_status", RESOURCE, target.id,
        {"before": {"status": previous}, "after": {"status": status}},
    )
    return success(user_with_details(ctx, target))
