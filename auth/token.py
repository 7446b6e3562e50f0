from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from jose import jwt

from config import settings
from database.models.base import utcnow


@dataclass
class TokenClaims:
    user_id: str
    email: Optional[str]
    name: Optional[str]
    role: Optional[str]


def _secret() -> str:
    if not settings.JWT_ACCESS_SECRET:
        raise ValueError("JWT_ACCESS_SECRET is not configured")
    return settings.JWT_ACCESS_SECRET


def create_access_token(
    user_id: str,
    email: Optional[str] = None,
    name: Optional[str] = None,
    role: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """Sign an access token the same way the identity service does."""
    ttl = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_TTL_MINUTES
    now = utcnow()
    payload = {
        "sub": user_id,
        "email": email,
        "name": name,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=ttl),
    }
    return jwt.encode(payload, _secret(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry. Raises jose.JWTError on any failure."""
    return jwt.decode(token, _secret(), algorithms=[settings.JWT_ALGORITHM])


def extract_claims(token: str) -> TokenClaims:
    """Decode a token into claims.

    Raises:
        JWTError: bad signature, expired, or malformed token
        ValueError: no subject claim, or no secret configured
    """
    payload = decode_access_token(token)

    user_id = payload.get("sub")
    if not user_id:
        raise ValueError("Token has no subject")

    return TokenClaims(
        user_id=user_id,
        email=payload.get("email"),
        name=payload.get("name"),
        role=payload.get("role"),
    )
