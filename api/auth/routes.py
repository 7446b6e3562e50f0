from fastapi import APIRouter, Depends
from fastapi.responses import Response

from auth.context import RequestContext, get_request_context
from auth.guards import get_current_principal
from auth.permissions import (
    get_accessible_modules,
    get_resource_permissions,
    get_user_permissions,
    is_admin,
)
from auth.session import get_principal_role
from config.settings import AUTH_COOKIE_NAME
from core.permissions import permission_catalog
from database.models import Organization, User
from services.subscription import get_subscription_warning

router = APIRouter()


@router.get("/me")
def get_me(
    ctx: RequestContext = Depends(get_request_context),
    user: User = Depends(get_current_principal),
):
    """Get current authenticated user with role, permissions and modules."""
    role = get_principal_role(ctx, user)
    organization = ctx.session.get(Organization, user.organization_id)

    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "status": user.status,
        "last_login_at": user.last_login_at.isoformat() if user.last_login_at else None,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "organization": {
            "id": organization.id,
            "name": organization.name,
            "currency": organization.currency,
            "subscription_status": organization.subscription_status,
        } if organization else None,
        "role": {
            "id": role.id,
            "name": role.name,
            "display_name": role.display_name,
        } if role else None,
        "is_admin": is_admin(ctx),
        "permissions": get_user_permissions(ctx),
        "modules": get_accessible_modules(ctx),
        "subscription_warning": get_subscription_warning(ctx.session, user.organization_id),
    }


@router.get("/me/resources/{resource}")
def get_my_resource_permissions(
    resource: str,
    ctx: RequestContext = Depends(get_request_context),
    user: User = Depends(get_current_principal),
):
    """create/view/update/delete flags for one resource, for toggling UI controls."""
    return get_resource_permissions(ctx, resource)


@router.post("/logout")
def logout(response: Response):
    """Logout and clear session cookie."""
    response.delete_cookie(key=AUTH_COOKIE_NAME, samesite="lax")
    return {"message": "Logged out successfully"}


@router.get("/permissions")
def get_all_permissions():
    """Get all available permissions for frontend, grouped by resource."""
    return {"permissions": permission_catalog()}
