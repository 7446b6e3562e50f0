"""
Pieces shared by the resource actions.
"""
from typing import Optional, Type

from auth.context import RequestContext
from core.results import not_found, success
from database.models import RecordBase, User
from services import records
from services.audit import log_audit
from services.soft_delete import DeletionMetadata, record_snapshot, soft_delete
from services.subscription import check_write_access


def deletion_metadata(ctx: RequestContext, record: RecordBase, reason: Optional[str]) -> DeletionMetadata:
    return DeletionMetadata(
        reason=reason,
        ip_address=ctx.ip_address,
        user_agent=ctx.user_agent,
        snapshot=record_snapshot(record),
    )


def soft_delete_record(
    ctx: RequestContext,
    principal: User,
    model: Type[RecordBase],
    record_id: str,
    resource: str,
    entity: str,
    reason: Optional[str] = None,
) -> dict:
    """Soft-delete an active record of the caller's organization and audit it.

    The permission check belongs to the caller.
    """
    check_write_access(ctx.session, principal.organization_id)

    record = records.get_active(ctx.session, model, principal.organization_id, record_id)
    if not record:
        return not_found(entity)

    metadata = deletion_metadata(ctx, record, reason)
    soft_delete(
        ctx.session,
        model,
        record_id,
        principal.id,
        metadata=metadata,
        organization_id=principal.organization_id,
    )

    log_audit(
        ctx.session,
        principal.organization_id,
        principal.id,
        "delete",
        resource,
        record_id,
        {"before": metadata.snapshot, "metadata": {"reason": reason}},
    )
    return success()
