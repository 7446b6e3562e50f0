from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from api.responses import unwrap
from api.role import actions
from api.role.schemas import RoleCreate, RoleFromPreset, RoleUpdate
from api.schemas import DeleteRequest
from auth.context import RequestContext, get_request_context
from core.role_presets import ROLE_PRESETS

router = APIRouter()


@router.get("")
def list_roles(ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.list_roles(ctx))


@router.get("/presets")
def list_role_presets():
    """Built-in role templates an organization can create roles from."""
    return [
        {"key": key, "name": preset["name"], "display_name": preset["display_name"],
         "description": preset["description"]}
        for key, preset in ROLE_PRESETS.items()
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_role(data: RoleCreate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.create_role(ctx, data.model_dump()))


@router.post("/presets", status_code=status.HTTP_201_CREATED)
def create_role_from_preset(data: RoleFromPreset, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.create_role_from_preset(ctx, data.preset))


@router.get("/by-name/{name}")
def get_role_by_name(name: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.get_role_by_name(ctx, name))


@router.get("/{role_id}")
def get_role(role_id: str, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.get_role(ctx, role_id))


@router.put("/{role_id}")
def update_role(role_id: str, data: RoleUpdate, ctx: RequestContext = Depends(get_request_context)):
    return unwrap(actions.update_role(ctx, role_id, data.model_dump(exclude_unset=True)))


@router.delete("/{role_id}")
def delete_role(
    role_id: str,
    data: Optional[DeleteRequest] = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    reason = data.reason if data else None
    return unwrap(actions.delete_role(ctx, role_id, reason))
