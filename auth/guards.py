"""
Guards that stand in front of pages and actions.

Pages get a GuardResult back and the router turns a denial into a
redirect. Actions are wrapped with `with_auth` and get a structured
error instead of running. Plain JSON endpoints use PermissionChecker
as a FastAPI dependency.
"""
import functools
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from auth.context import RequestContext, get_request_context
from auth.permissions import check_any_permission, check_permission
from auth.session import resolve_principal
from core.permissions import Permission
from core.results import UNAUTHORIZED, failure
from database.models import User
from services.subscription import OrganizationNotFoundError, ReadOnlyOrganizationError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GuardResult:
    allowed: bool
    principal: Optional[User] = None
    redirect_to: Optional[str] = None

    @property
    def denied(self) -> bool:
        return not self.allowed


def _safe_resolve(ctx: RequestContext) -> Optional[User]:
    try:
        return resolve_principal(ctx)
    except SQLAlchemyError:
        logger.exception("Session lookup failed")
        return None


def protect_page(
    ctx: RequestContext,
    permission: Permission | str | None = None,
    any_permissions: Iterable[Permission | str] | None = None,
    redirect_to: str = "/",
) -> GuardResult:
    """Decide whether a page may render.

    With neither `permission` nor `any_permissions` the page only needs
    a signed-in user. When both are given both must pass.
    """
    if any_permissions is not None:
        any_permissions = list(any_permissions)

    principal = _safe_resolve(ctx)
    if principal is None:
        return GuardResult(allowed=False, redirect_to=redirect_to)

    if permission is not None and not check_permission(ctx, permission):
        logger.debug(f"Page denied for {principal.id}: missing {permission}")
        return GuardResult(allowed=False, redirect_to=redirect_to)

    if any_permissions is not None and not check_any_permission(ctx, any_permissions):
        logger.debug(f"Page denied for {principal.id}: none of {[getattr(p, 'value', p) for p in any_permissions]}")
        return GuardResult(allowed=False, redirect_to=redirect_to)

    return GuardResult(allowed=True, principal=principal)


def redirect_for(result: GuardResult) -> RedirectResponse:
    return RedirectResponse(
        url=result.redirect_to or "/",
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


def with_auth(action: Callable[..., dict]) -> Callable[..., dict]:
    """Run `action(ctx, principal, ...)` only for an authenticated caller.

    Failures inside the action are logged, rolled back and returned as
    {"error": message}; nothing is raised to the caller.
    """

    @functools.wraps(action)
    def wrapper(ctx: RequestContext, *args, **kwargs) -> dict:
        principal = _safe_resolve(ctx)
        if principal is None:
            return failure(UNAUTHORIZED)

        try:
            return action(ctx, principal, *args, **kwargs)
        except (ReadOnlyOrganizationError, OrganizationNotFoundError) as exc:
            ctx.session.rollback()
            logger.info(f"{action.__name__} refused for {principal.organization_id}: {exc}")
            return failure(str(exc))
        except Exception as exc:
            ctx.session.rollback()
            logger.exception(f"{action.__name__} failed")
            return failure(str(exc) or f"{action.__name__} failed")

    return wrapper


def get_current_principal(ctx: RequestContext = Depends(get_request_context)) -> User:
    """Dependency: the authenticated user, or 401."""
    principal = _safe_resolve(ctx)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


class PermissionChecker:
    """Dependency class for checking a single permission."""

    def __init__(self, required_permission: Permission | str):
        # Support both Permission enum and string
        self.required_permission = (
            required_permission.value
            if isinstance(required_permission, Permission)
            else required_permission
        )

    def __call__(
        self,
        ctx: RequestContext = Depends(get_request_context),
        principal: User = Depends(get_current_principal),
    ) -> User:
        if not check_permission(ctx, self.required_permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission denied: {self.required_permission} required",
            )
        return principal


def require_permission(permission: Permission | str) -> PermissionChecker:
    """Factory function to create permission dependency."""
    return PermissionChecker(permission)
