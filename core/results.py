"""
Result shapes returned by actions.

Actions never raise across their boundary; they return either
{"success": True, ...} or {"error": "<message>"} and the caller
(router or UI) decides how to present it.
"""
from typing import Any

from sqlalchemy import inspect

UNAUTHORIZED = "Unauthorized"
PERMISSION_DENIED = "Permission denied"
ADMIN_REQUIRED = "Admin access required"


def success(data: Any = None, **extra: Any) -> dict:
    result: dict = {"success": True}
    if data is not None:
        result["data"] = data
    result.update(extra)
    return result


def failure(message: str) -> dict:
    return {"error": message}


def not_found(entity: str) -> dict:
    return failure(f"{entity} not found")


def is_error(result: dict) -> bool:
    return "error" in result


def to_data(record: Any) -> dict:
    """JSON-ready dict for a model instance.

    A commit expires loaded attributes and model_dump does not reload
    them, so an expired instance is refreshed first.
    """
    state = inspect(record, raiseerr=False)
    if state is not None and state.session is not None and state.expired_attributes:
        state.session.refresh(record)
    return record.model_dump(mode="json")
