"""
Tests for permission keys, the session resolver and permission checks.
"""
import pytest
from sqlalchemy.exc import OperationalError

from auth.permissions import (
    check_all_permissions,
    check_any_permission,
    check_permission,
    get_accessible_modules,
    get_resource_permissions,
    get_user_permissions,
    has_module_access,
    has_resource_permission,
    is_admin,
)
from auth.session import resolve_principal
from core.permissions import (
    PERMISSION_KEYS,
    Permission,
    normalize_permissions,
    permission_catalog,
    permission_key,
)
from core.role_presets import ROLE_PRESETS, get_role_preset, get_role_preset_names
from database.models import UserStatus


class TestPermissionKeys:
    """Test the enumerated permission set and its helpers."""

    def test_permission_key_builds_resource_action(self):
        assert permission_key("invoices", "create") == "invoices_create"
        assert permission_key("bankAccounts", "view") == "bankAccounts_view"

    def test_permission_key_rejects_unknown_action(self):
        with pytest.raises(ValueError):
            permission_key("invoices", "approve")

    def test_normalize_drops_unknown_keys(self):
        normalized = normalize_permissions({
            "invoices_create": True,
            "invoices_launch_missiles": True,
        })
        assert normalized == {"invoices_create": True}

    def test_normalize_coerces_to_real_booleans(self):
        normalized = normalize_permissions({
            "invoices_view": "yes",
            "invoices_create": 1,
            Permission.INVOICES_UPDATE: True,
        })
        assert normalized == {
            "invoices_view": False,
            "invoices_create": False,
            "invoices_update": True,
        }

    def test_normalize_handles_none(self):
        assert normalize_permissions(None) == {}

    def test_catalog_covers_every_key(self):
        catalog = permission_catalog()
        flattened = {key for keys in catalog.values() for key in keys}
        assert flattened == PERMISSION_KEYS
        assert "taxReports_view" in catalog["taxReports"]


class TestRolePresets:
    """Test the built-in role presets."""

    def test_admin_preset_grants_everything(self):
        assert set(ROLE_PRESETS["ADMIN"]["permissions"]) == PERMISSION_KEYS

    def test_presets_only_use_known_keys(self):
        for preset in ROLE_PRESETS.values():
            assert set(preset["permissions"]) <= PERMISSION_KEYS

    def test_viewer_cannot_create(self):
        permissions = ROLE_PRESETS["VIEWER"]["permissions"]
        assert not any(key.endswith("_create") for key in permissions)

    def test_lookup_is_case_insensitive(self):
        assert get_role_preset("viewer")["name"] == "viewer"

    def test_unknown_preset_raises(self):
        with pytest.raises(ValueError):
            get_role_preset("janitor")

    def test_preset_names(self):
        assert "ACCOUNTANT" in get_role_preset_names()


class TestResolvePrincipal:
    """Test resolving the current user from a request context."""

    def test_valid_token_resolves_user(self, make_ctx, viewer_user):
        principal = resolve_principal(make_ctx(viewer_user))
        assert principal is not None
        assert principal.id == viewer_user.id

    def test_no_token(self, make_ctx):
        assert resolve_principal(make_ctx()) is None

    def test_garbage_token(self, make_ctx):
        assert resolve_principal(make_ctx(token="not-a-jwt")) is None

    def test_expired_token(self, make_ctx, token_for, viewer_user):
        token = token_for(viewer_user, expires_minutes=-5)
        assert resolve_principal(make_ctx(token=token)) is None

    def test_unknown_user(self, make_ctx):
        from auth.token import create_access_token

        assert resolve_principal(make_ctx(token=create_access_token("missing-user"))) is None

    def test_inactive_user(self, make_ctx, make_user, viewer_role):
        user = make_user(viewer_role, status=UserStatus.INACTIVE.value)
        assert resolve_principal(make_ctx(user)) is None

    def test_soft_deleted_user(self, make_ctx, make_user, viewer_role):
        user = make_user(viewer_role, del_flag=True)
        assert resolve_principal(make_ctx(user)) is None


class TestCheckPermission:
    """Test check_permission default-deny semantics."""

    def test_granted_key(self, make_ctx, make_user, make_role):
        user = make_user(make_role({"invoices_create": True}))
        assert check_permission(make_ctx(user), Permission.INVOICES_CREATE) is True
        assert check_permission(make_ctx(user), "invoices_create") is True

    def test_missing_key_is_denied(self, make_ctx, make_user, make_role):
        user = make_user(make_role({"invoices_create": True}))
        assert check_permission(make_ctx(user), Permission.INVOICES_VIEW) is False

    def test_explicit_false_is_denied(self, make_ctx, make_user, make_role):
        user = make_user(make_role({"invoices_view": False}))
        assert check_permission(make_ctx(user), Permission.INVOICES_VIEW) is False

    def test_truthy_non_boolean_is_denied(self, make_ctx, make_user, make_role):
        user = make_user(make_role({"invoices_view": "true"}))
        assert check_permission(make_ctx(user), Permission.INVOICES_VIEW) is False

    def test_empty_key_is_denied(self, make_ctx, admin_user):
        assert check_permission(make_ctx(admin_user), "") is False

    def test_unauthenticated_is_denied(self, make_ctx):
        assert check_permission(make_ctx(), Permission.DASHBOARD_VIEW) is False

    def test_user_without_role_is_denied(self, make_ctx, make_user):
        assert check_permission(make_ctx(make_user()), Permission.DASHBOARD_VIEW) is False

    def test_role_from_other_organization_grants_nothing(
        self, make_ctx, make_user, make_role, other_organization
    ):
        foreign_role = make_role({"invoices_view": True}, organization_id=other_organization.id)
        user = make_user(foreign_role)
        assert check_permission(make_ctx(user), Permission.INVOICES_VIEW) is False

    def test_soft_deleted_role_grants_nothing(self, make_ctx, make_user, make_role):
        user = make_user(make_role({"invoices_view": True}, del_flag=True))
        assert check_permission(make_ctx(user), Permission.INVOICES_VIEW) is False

    def test_revoking_takes_effect_on_next_check(self, session, make_ctx, make_user, make_role):
        """No permission cache: an edited mapping is seen immediately."""
        role = make_role({"invoices_view": True})
        ctx = make_ctx(make_user(role))
        assert check_permission(ctx, Permission.INVOICES_VIEW) is True

        role.permissions = {**role.permissions, "invoices_view": False}
        session.add(role)
        session.commit()

        assert check_permission(ctx, Permission.INVOICES_VIEW) is False

    def test_deactivating_user_takes_effect_on_next_check(self, session, make_ctx, viewer_user):
        ctx = make_ctx(viewer_user)
        assert check_permission(ctx, Permission.INVOICES_VIEW) is True

        viewer_user.status = UserStatus.INACTIVE.value
        session.add(viewer_user)
        session.commit()

        assert check_permission(ctx, Permission.INVOICES_VIEW) is False

    def test_storage_failure_fails_closed(self, monkeypatch, make_ctx, admin_user):
        def broken(ctx):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr("auth.permissions.current_user_role", broken)
        assert check_permission(make_ctx(admin_user), Permission.DASHBOARD_VIEW) is False


class TestCombinedChecks:
    """Test any/all checks and the derived helpers."""

    @pytest.fixture
    def ctx(self, make_ctx, make_user, make_role):
        role = make_role({
            "invoices_view": True,
            "invoices_create": True,
            "customers_view": True,
            "sales_view": True,
            "dashboard_view": True,
        })
        return make_ctx(make_user(role))

    def test_any_permission(self, ctx):
        assert check_any_permission(ctx, [Permission.INVOICES_DELETE, Permission.INVOICES_VIEW]) is True
        assert check_any_permission(ctx, [Permission.INVOICES_DELETE, Permission.BILLS_VIEW]) is False

    def test_all_permissions(self, ctx):
        assert check_all_permissions(ctx, [Permission.INVOICES_VIEW, Permission.INVOICES_CREATE]) is True
        assert check_all_permissions(ctx, [Permission.INVOICES_VIEW, Permission.INVOICES_DELETE]) is False

    def test_all_permissions_unauthenticated(self, make_ctx):
        assert check_all_permissions(make_ctx(), []) is False

    def test_resource_permission(self, ctx):
        assert has_resource_permission(ctx, "invoices", "create") is True
        assert has_resource_permission(ctx, "invoices", "delete") is False

    def test_module_access(self, ctx):
        assert has_module_access(ctx, "sales") is True
        assert has_module_access(ctx, "payroll") is False

    def test_accessible_modules(self, ctx):
        assert get_accessible_modules(ctx) == ["dashboard", "sales"]

    def test_resource_permissions(self, ctx):
        assert get_resource_permissions(ctx, "invoices") == {
            "create": True,
            "view": True,
            "update": False,
            "delete": False,
        }

    def test_user_permissions_lists_granted_keys(self, ctx):
        assert get_user_permissions(ctx) == sorted([
            "customers_view",
            "dashboard_view",
            "invoices_create",
            "invoices_view",
            "sales_view",
        ])

    def test_is_admin(self, make_ctx, admin_user, viewer_user):
        assert is_admin(make_ctx(admin_user)) is True
        assert is_admin(make_ctx(viewer_user)) is False
        assert is_admin(make_ctx()) is False

    def test_owner_role_counts_as_admin(self, make_ctx, make_user, make_role):
        user = make_user(make_role({}, name="owner"))
        assert is_admin(make_ctx(user)) is True
