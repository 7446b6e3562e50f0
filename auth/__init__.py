from auth.context import RequestContext, get_request_context
from auth.guards import (
    GuardResult,
    PermissionChecker,
    get_current_principal,
    protect_page,
    redirect_for,
    require_permission,
    with_auth,
)
from auth.permissions import (
    check_all_permissions,
    check_any_permission,
    check_permission,
    get_accessible_modules,
    get_resource_permissions,
    get_user_permissions,
    has_module_access,
    has_resource_permission,
    is_admin,
)
from auth.session import resolve_principal
from auth.token import create_access_token, extract_claims

__all__ = [
    "RequestContext",
    "get_request_context",
    "GuardResult",
    "PermissionChecker",
    "get_current_principal",
    "protect_page",
    "redirect_for",
    "require_permission",
    "with_auth",
    "check_all_permissions",
    "check_any_permission",
    "check_permission",
    "get_accessible_modules",
    "get_resource_permissions",
    "get_user_permissions",
    "has_module_access",
    "has_resource_permission",
    "is_admin",
    "resolve_principal",
    "create_access_token",
    "extract_claims",
]
