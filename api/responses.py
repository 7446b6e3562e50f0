"""
Translate action results into HTTP responses.
"""
from fastapi import HTTPException, status

from core.results import ADMIN_REQUIRED, PERMISSION_DENIED, UNAUTHORIZED, is_error


def _status_for(message: str) -> int:
    if message == UNAUTHORIZED:
        return status.HTTP_401_UNAUTHORIZED
    if message in (PERMISSION_DENIED, ADMIN_REQUIRED):
        return status.HTTP_403_FORBIDDEN
    if message.endswith(" not found"):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def unwrap(result: dict) -> dict:
    """Return a successful result as-is, raise HTTPException for an error result."""
    if is_error(result):
        message = result["error"]
        headers = {"WWW-Authenticate": "Bearer"} if message == UNAUTHORIZED else None
        raise HTTPException(status_code=_status_for(message), detail=message, headers=headers)
    return result
