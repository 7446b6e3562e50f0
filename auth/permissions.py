"""
Permission checks for the current request.

Every check resolves the caller again and reads the role mapping from
storage, so a role edit is visible to the very next check. All checks
fail closed: no principal, no role, a storage error or a missing key
all answer False.
"""
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError

from auth.context import RequestContext
from auth.session import current_user_role
from core.permissions import (
    ADMIN_ROLE_NAMES,
    MODULES,
    RESOURCE_ACTIONS,
    Permission,
    permission_key,
)
from database.models import Role
from utils.logger import get_logger

logger = get_logger(__name__)


def _key(permission: Permission | str) -> str:
    return permission.value if isinstance(permission, Permission) else permission


def _load_role(ctx: RequestContext) -> Role | None:
    try:
        return current_user_role(ctx)
    except SQLAlchemyError:
        logger.exception("Permission lookup failed")
        return None


def _granted(role: Role | None, key: str) -> bool:
    if role is None or not key:
        return False
    return (role.permissions or {}).get(key) is True


def check_permission(ctx: RequestContext, permission: Permission | str) -> bool:
    """True only when the caller's role maps this key to True."""
    return _granted(_load_role(ctx), _key(permission))


def check_any_permission(ctx: RequestContext, permissions: Iterable[Permission | str]) -> bool:
    role = _load_role(ctx)
    return any(_granted(role, _key(p)) for p in permissions)


def check_all_permissions(ctx: RequestContext, permissions: Iterable[Permission | str]) -> bool:
    role = _load_role(ctx)
    if role is None:
        return False
    return all(_granted(role, _key(p)) for p in permissions)


def has_resource_permission(ctx: RequestContext, resource: str, action: str) -> bool:
    """Check "<resource>_<action>" for one of create/view/update/delete."""
    return check_permission(ctx, permission_key(resource, action))


def has_module_access(ctx: RequestContext, module: str) -> bool:
    return check_permission(ctx, f"{module}_view")


def get_user_permissions(ctx: RequestContext) -> list[str]:
    """Granted keys only, sorted."""
    role = _load_role(ctx)
    if role is None:
        return []
    return sorted(key for key, value in (role.permissions or {}).items() if value is True)


def get_accessible_modules(ctx: RequestContext) -> list[str]:
    role = _load_role(ctx)
    return [module for module in MODULES if _granted(role, f"{module}_view")]


def get_resource_permissions(ctx: RequestContext, resource: str) -> dict[str, bool]:
    role = _load_role(ctx)
    return {
        action: _granted(role, permission_key(resource, action))
        for action in RESOURCE_ACTIONS
    }


def is_admin(ctx: RequestContext) -> bool:
    role = _load_role(ctx)
    return role is not None and role.name in ADMIN_ROLE_NAMES
