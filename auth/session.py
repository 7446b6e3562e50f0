"""
Session resolver: turns a request context into the current Principal.
"""
from typing import Optional

from jose import JWTError
from sqlmodel import select

from auth.context import RequestContext
from auth.token import extract_claims
from database.models import User, UserStatus, Role
from utils.logger import get_logger

logger = get_logger(__name__)


def resolve_principal(ctx: RequestContext) -> Optional[User]:
    """Return the authenticated, active user for this request, or None."""
    if not ctx.token:
        return None

    try:
        claims = extract_claims(ctx.token)
    except (JWTError, ValueError) as exc:
        logger.debug(f"Rejected access token: {exc}")
        return None

    user = ctx.session.exec(
        select(User)
        .where(User.id == claims.user_id)
        .execution_options(populate_existing=True)
    ).first()

    if not user or user.del_flag:
        return None

    if user.status != UserStatus.ACTIVE.value:
        logger.info(f"Inactive user {user.id} presented a valid token")
        return None

    return user


def get_principal_role(ctx: RequestContext, principal: User) -> Optional[Role]:
    """Load the principal's role fresh from storage.

    A role from another organization, or a soft-deleted one, is treated
    as no role at all.
    """
    if not principal.role_id:
        return None

    return ctx.session.exec(
        select(Role)
        .where(
            Role.id == principal.role_id,
            Role.organization_id == principal.organization_id,
            Role.del_flag == False,  # noqa: E712
        )
        .execution_options(populate_existing=True)
    ).first()


def current_user_role(ctx: RequestContext) -> Optional[Role]:
    principal = resolve_principal(ctx)
    if principal is None:
        return None
    return get_principal_role(ctx, principal)
