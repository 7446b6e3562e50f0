from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from config.settings import AUTH_COOKIE_NAME
from database.connection import get_session


security = HTTPBearer(auto_error=False)


@dataclass
class RequestContext:
    """Everything the session resolver needs to identify the caller."""
    session: Session
    token: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


def get_token_from_request(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Optional[str]:
    """Extract token from Authorization header or the auth cookie."""
    if credentials:
        return credentials.credentials
    return request.cookies.get(AUTH_COOKIE_NAME)


def get_request_context(
    request: Request,
    token: Optional[str] = Depends(get_token_from_request),
    session: Session = Depends(get_session),
) -> RequestContext:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip()
    else:
        ip_address = request.client.host if request.client else None

    return RequestContext(
        session=session,
        token=token,
        ip_address=ip_address,
        user_agent=request.headers.get("user-agent"),
    )
