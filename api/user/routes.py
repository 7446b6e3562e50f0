from fastapi import APIRouter, Depends

from api.responses import unwrap
from api.user import actions
from api.user.schemas import UserListResponse, UserRoleUpdate, UserStatusUpdate, UserWithDetails
from auth.context import RequestContext, get_request_context

router = APIRouter()


@router.get("", response_model=UserListResponse)
def list_users(skip: int = 0, limit: int = 100, ctx: RequestContext = Depends(get_request_context)):
    """List users of the caller's organization."""
    result = unwrap(actions.list_users(ctx, skip, limit))
    return UserListResponse(users=result["data"], total=result["total"])


@router.put("/{user_id}/role", response_model=UserWithDetails)
def update_user_role(user_id: str, data: UserRoleUpdate, ctx: RequestContext = Depends(get_request_context)):
    """Assign another role of the same organization."""
    return unwrap(actions.change_user_role(ctx, user_id, data.role_id))["data"]


@router.put("/{user_id}/status", response_model=UserWithDetails)
def update_user_status(user_id: str, data: UserStatusUpdate, ctx: RequestContext = Depends(get_request_context)):
    """Update user's status (enable/disable account)."""
    return unwrap(actions.set_user_status(ctx, user_id, data.status))["data"]
