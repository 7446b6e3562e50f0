from services.audit import log_audit, list_audit_logs
from services.soft_delete import (
    DeletionMetadata,
    get_deleted_items,
    permanent_delete,
    record_snapshot,
    restore_deleted,
    soft_delete,
)
from services.subscription import (
    OrganizationNotFoundError,
    ReadOnlyOrganizationError,
    check_subscription_status,
    check_write_access,
)
