"""
Tenant-scoped record access.

Every query here filters on organization_id and, unless told otherwise,
hides soft-deleted rows. Actions go through these helpers instead of
building their own selects.
"""
from typing import Any, Optional, Type, TypeVar

from sqlalchemy import func
from sqlmodel import Session, select

from database.models import Organization
from database.models.base import PROTECTED_FIELDS, RecordBase, utcnow

T = TypeVar("T", bound=RecordBase)


def active_query(model: Type[T], organization_id: str):
    return select(model).where(
        model.organization_id == organization_id,
        model.del_flag == False,  # noqa: E712
    )


def list_active(
    session: Session,
    model: Type[T],
    organization_id: str,
    skip: int = 0,
    limit: int = 100,
    **filters: Any,
) -> list[T]:
    """Non-deleted records of one tenant, newest first."""
    query = active_query(model, organization_id)
    for field, value in filters.items():
        if value is not None:
            query = query.where(getattr(model, field) == value)
    query = query.order_by(model.created_at.desc()).offset(skip).limit(limit)
    return list(session.exec(query).all())


def count_active(session: Session, model: Type[RecordBase], organization_id: str) -> int:
    return session.exec(
        select(func.count())
        .select_from(model)
        .where(
            model.organization_id == organization_id,
            model.del_flag == False,  # noqa: E712
        )
    ).one()


def get_active(session: Session, model: Type[T], organization_id: str, record_id: str) -> Optional[T]:
    return session.exec(
        active_query(model, organization_id).where(model.id == record_id)
    ).first()


def create_record(
    session: Session,
    model: Type[T],
    organization_id: str,
    actor_id: str,
    data: dict,
) -> T:
    """Insert a record stamped with its tenant and creator."""
    payload = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
    record = model(**payload, organization_id=organization_id, created_by=actor_id)
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def update_record(session: Session, record: T, actor_id: str, data: dict) -> T:
    """Apply field changes; tenant, deletion and audit fields are never taken from `data`."""
    for field, value in data.items():
        if field in PROTECTED_FIELDS or not hasattr(record, field):
            continue
        setattr(record, field, value)

    record.mod_flag = True
    record.modified_by = actor_id
    record.updated_at = utcnow()

    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def take_next_number(session: Session, organization_id: str, counter: str) -> int:
    """Reserve the organization's next document number from `counter`.

    The organization row stays locked until the caller commits. The
    counter never goes back, so a purged document's number is not reused.
    """
    organization = session.get(
        Organization, organization_id, with_for_update=True, populate_existing=True
    )
    number = getattr(organization, counter) or 1
    setattr(organization, counter, number + 1)
    session.add(organization)
    return number
