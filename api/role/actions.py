"""
Role management. Roles are organization-scoped; names are unique among
the organization's non-deleted roles.
"""
from typing import Optional

from sqlmodel import select

from api.common import soft_delete_record
from auth.context import RequestContext
from auth.guards import with_auth
from auth.permissions import check_permission
from core.permissions import Permission, normalize_permissions
from core.results import PERMISSION_DENIED, failure, not_found, success, to_data
from core.role_presets import get_role_preset
from database.models import Role, User
from services import records
from services.audit import log_audit
from services.subscription import check_write_access
from utils.logger import get_logger

logger = get_logger(__name__)

RESOURCE = "roles"
DUPLICATE_NAME = "Role with this name already exists"


def role_name_taken(ctx: RequestContext, organization_id: str, name: str, exclude_id: Optional[str] = None) -> bool:
    query = records.active_query(Role, organization_id).where(Role.name == name)
    if exclude_id:
        query = query.where(Role.id != exclude_id)
    return ctx.session.exec(query).first() is not None


def _summary(role: Role) -> dict:
    return {"name": role.name, "display_name": role.display_name}


def _create(ctx: RequestContext, principal: User, data: dict) -> dict:
    if role_name_taken(ctx, principal.organization_id, data["name"]):
        return failure(DUPLICATE_NAME)

    payload = {**data, "permissions": normalize_permissions(data.get("permissions"))}
    role = records.create_record(ctx.session, Role, principal.organization_id, principal.id, payload)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "create_role", RESOURCE, role.id, {"after": _summary(role)},
    )
    logger.info(f"Role '{role.name}' created in {principal.organization_id}")
    return success(to_data(role))


@with_auth
def create_role(ctx: RequestContext, principal: User, data: dict) -> dict:
    if not check_permission(ctx, Permission.USER_MANAGEMENT_CREATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)
    return _create(ctx, principal, data)


@with_auth
def create_role_from_preset(ctx: RequestContext, principal: User, preset_name: str) -> dict:
    if not check_permission(ctx, Permission.USER_MANAGEMENT_CREATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)
    preset = get_role_preset(preset_name)
    return _create(ctx, principal, dict(preset))


@with_auth
def list_roles(ctx: RequestContext, principal: User) -> dict:
    if not check_permission(ctx, Permission.USER_MANAGEMENT_VIEW):
        return failure(PERMISSION_DENIED)

    roles = ctx.session.exec(
        records.active_query(Role, principal.organization_id).order_by(Role.name)
    ).all()
    return success([to_data(r) for r in roles])


@with_auth
def get_role(ctx: RequestContext, principal: User, role_id: str) -> dict:
    if not check_permission(ctx, Permission.USER_MANAGEMENT_VIEW):
        return failure(PERMISSION_DENIED)

    role = records.get_active(ctx.session, Role, principal.organization_id, role_id)
    if not role:
        return not_found("Role")
    return success(to_data(role))


@with_auth
def get_role_by_name(ctx: RequestContext, principal: User, name: str) -> dict:
    if not check_permission(ctx, Permission.USER_MANAGEMENT_VIEW):
        return failure(PERMISSION_DENIED)

    role = ctx.session.exec(
        records.active_query(Role, principal.organization_id).where(Role.name == name)
    ).first()
    if not role:
        return not_found("Role")
    return success(to_data(role))


@with_auth
def update_role(ctx: RequestContext, principal: User, role_id: str, data: dict) -> dict:
    """Edit a role. A permissions mapping, when given, replaces the stored one."""
    if not check_permission(ctx, Permission.USER_MANAGEMENT_UPDATE):
        return failure(PERMISSION_DENIED)

    check_write_access(ctx.session, principal.organization_id)

    role = records.get_active(ctx.session, Role, principal.organization_id, role_id)
    if not role:
        return not_found("Role")

    if data.get("name") and role_name_taken(ctx, principal.organization_id, data["name"], exclude_id=role.id):
        return failure(DUPLICATE_NAME)

    changes = dict(data)
    if changes.get("permissions") is not None:
        changes["permissions"] = normalize_permissions(changes["permissions"])

    before = _summary(role)
    role = records.update_record(ctx.session, role, principal.id, changes)
    log_audit(
        ctx.session, principal.organization_id, principal.id,
        "update_role", RESOURCE, role.id, {"before": before, "after": _summary(role)},
    )
    return success(to_data(role))


@with_auth
def delete_role(ctx: RequestContext, principal: User, role_id: str, reason: Optional[str] = None) -> dict:
    if not check_permission(ctx, Permission.USER_MANAGEMENT_DELETE):
        return failure(PERMISSION_DENIED)

    assigned = ctx.session.exec(
        records.active_query(User, principal.organization_id).where(User.role_id == role_id)
    ).first()
    if assigned:
        return failure("Role is assigned to users and cannot be deleted")

    return soft_delete_record(ctx, principal, Role, role_id, RESOURCE, "Role", reason)
