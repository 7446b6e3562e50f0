"""
Soft-delete lifecycle shared by every record table.

A soft-deleted record keeps its row; `del_flag` hides it from the
default queries in services.records. Restoring only clears the deletion
state, it never rolls field values back. Neither soft_delete nor
restore_deleted checks the current state first, so calling either twice
converges on the same row.
"""
from dataclasses import dataclass
from typing import Any, Optional, Type, TypeVar

from sqlalchemy import func
from sqlmodel import Session, select

from config.settings import DELETED_ITEMS_PAGE_SIZE
from core.results import to_data
from database.models.base import RecordBase, utcnow
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=RecordBase)


@dataclass
class DeletionMetadata:
    reason: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    snapshot: Optional[dict] = None

    def to_json(self) -> Optional[dict]:
        data = {
            key: value
            for key, value in (
                ("ip_address", self.ip_address),
                ("user_agent", self.user_agent),
                ("snapshot", self.snapshot),
            )
            if value is not None
        }
        return data or None


def record_snapshot(record: RecordBase) -> dict:
    """JSON-safe copy of a record's fields, stored alongside the deletion."""
    return to_data(record)


def _find(session: Session, model: Type[T], record_id: str, organization_id: Optional[str]) -> Optional[T]:
    query = select(model).where(model.id == record_id)
    if organization_id is not None:
        query = query.where(model.organization_id == organization_id)
    return session.exec(query).first()


def soft_delete(
    session: Session,
    model: Type[T],
    record_id: str,
    actor_id: str,
    metadata: Optional[DeletionMetadata] = None,
    organization_id: Optional[str] = None,
) -> Optional[T]:
    """Flag a record as deleted. Returns the updated record or None if absent."""
    record = _find(session, model, record_id, organization_id)
    if not record:
        return None

    metadata = metadata or DeletionMetadata()
    record.del_flag = True
    record.deleted_at = utcnow()
    record.deleted_by = actor_id
    record.deletion_reason = metadata.reason
    record.deletion_metadata = metadata.to_json()

    session.add(record)
    session.commit()
    session.refresh(record)

    logger.info(f"[SoftDelete] {model.__tablename__}/{record_id} deleted by {actor_id}")
    return record


def restore_deleted(
    session: Session,
    model: Type[T],
    record_id: str,
    organization_id: Optional[str] = None,
) -> Optional[T]:
    """Clear the deletion state. A record that is already active is returned unchanged."""
    record = _find(session, model, record_id, organization_id)
    if not record:
        return None

    record.del_flag = False
    record.deleted_at = None
    record.deleted_by = None
    record.deletion_reason = None
    record.deletion_metadata = None

    session.add(record)
    session.commit()
    session.refresh(record)

    logger.info(f"[SoftDelete] {model.__tablename__}/{record_id} restored")
    return record


def get_deleted_items(
    session: Session,
    model: Type[T],
    organization_id: str,
    limit: int = DELETED_ITEMS_PAGE_SIZE,
    skip: int = 0,
    sort_by: str = "deleted_at",
    descending: bool = True,
) -> dict[str, Any]:
    """Deleted records of one tenant, newest deletion first by default."""
    column = getattr(model, sort_by, None)
    if column is None:
        raise ValueError(f"Cannot sort {model.__tablename__} by '{sort_by}'")

    conditions = (model.organization_id == organization_id, model.del_flag == True)  # noqa: E712

    items = session.exec(
        select(model)
        .where(*conditions)
        .order_by(column.desc() if descending else column.asc())
        .offset(skip)
        .limit(limit)
    ).all()

    total = session.exec(
        select(func.count()).select_from(model).where(*conditions)
    ).one()

    return {"items": list(items), "total": total}


def count_deleted(session: Session, model: Type[RecordBase], organization_id: str) -> int:
    return session.exec(
        select(func.count())
        .select_from(model)
        .where(model.organization_id == organization_id, model.del_flag == True)  # noqa: E712
    ).one()


def permanent_delete(
    session: Session,
    model: Type[RecordBase],
    record_id: str,
    organization_id: Optional[str] = None,
) -> bool:
    """Remove the row for good. Returns whether anything was removed."""
    record = _find(session, model, record_id, organization_id)
    if not record:
        return False

    session.delete(record)
    session.commit()

    logger.warning(f"[SoftDelete] {model.__tablename__}/{record_id} permanently deleted")
    return True
