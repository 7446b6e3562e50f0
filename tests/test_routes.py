"""
HTTP-level tests: page redirects and the JSON API status codes.
"""
from datetime import date

from database.models import Customer


CUSTOMER = {"name": "Kofi Mensah", "email": "kofi@example.com", "phone": "+233200000000"}


def page(user, suffix=""):
    return f"/{user.organization_id}/dashboard/{user.id}{suffix}"


class TestPageRedirects:

    def test_unauthenticated_new_invoice_goes_to_dashboard(self, client, organization):
        response = client.get(
            f"/{organization.id}/dashboard/u1/sales/invoices/new", follow_redirects=False
        )
        assert response.status_code == 307
        assert response.headers["location"] == f"/{organization.id}/dashboard/u1"

    def test_unauthenticated_dashboard_goes_to_sign_in(self, client, organization):
        response = client.get(f"/{organization.id}/dashboard/u1", follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == "/sign-in"

    def test_missing_permission_redirects(self, client, auth_headers, viewer_user):
        response = client.get(
            page(viewer_user, "/sales/invoices/new"),
            headers=auth_headers(viewer_user),
            follow_redirects=False,
        )
        assert response.status_code == 307
        assert response.headers["location"] == page(viewer_user)

    def test_someone_elses_path_redirects_home(self, client, auth_headers, viewer_user, admin_user):
        response = client.get(
            page(admin_user, "/sales/invoices"),
            headers=auth_headers(viewer_user),
            follow_redirects=False,
        )
        assert response.status_code == 307
        assert response.headers["location"] == page(viewer_user)

    def test_allowed_page_renders(self, client, auth_headers, viewer_user):
        response = client.get(page(viewer_user, "/sales/invoices"), headers=auth_headers(viewer_user))
        assert response.status_code == 200
        body = response.json()
        assert body["invoices"] == []
        assert body["permissions"] == {"create": False, "view": True, "update": False, "delete": False}

    def test_dashboard_lists_modules(self, client, auth_headers, viewer_user):
        response = client.get(page(viewer_user), headers=auth_headers(viewer_user))
        assert response.status_code == 200
        assert "sales" in response.json()["modules"]
        assert "settings" not in response.json()["modules"]

    def test_cookie_token_is_accepted(self, client, token_for, viewer_user):
        client.cookies.set("auth-token", token_for(viewer_user))
        response = client.get(page(viewer_user, "/sales/customers"), follow_redirects=False)
        assert response.status_code == 200

    def test_deleted_items_page_for_non_admin(self, client, auth_headers, make_user, make_role):
        user = make_user(make_role({"settings_view": True}))
        response = client.get(page(user, "/settings/deleted-items"), headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json() == {"error": "Admin access required"}


    def test_vat_page_needs_tax_reports_permission(self, client, auth_headers, make_user, make_role):
        user = make_user(make_role({"tax_view": True}))
        response = client.get(page(user, "/tax/vat-returns"), headers=auth_headers(user), follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == page(user)

    def test_vat_page_renders_for_tax_reports(self, client, auth_headers, make_user, make_role):
        user = make_user(make_role({"taxReports_view": True}))
        response = client.get(page(user, "/tax/vat-returns"), headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json()["data"]["net_vat"] == 0

    def test_tax_settings_page_accepts_tax_view(self, client, auth_headers, make_user, make_role):
        user = make_user(make_role({"tax_view": True}))
        response = client.get(page(user, "/tax/settings"), headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json()["can_edit"] is False


class TestCustomerApi:

    def test_requires_token(self, client):
        response = client.get("/api/customers")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_viewer_can_list(self, client, auth_headers, viewer_user):
        response = client.get("/api/customers", headers=auth_headers(viewer_user))
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": [], "total": 0}

    def test_viewer_cannot_create(self, client, auth_headers, viewer_user):
        response = client.post("/api/customers", json=CUSTOMER, headers=auth_headers(viewer_user))
        assert response.status_code == 403
        assert response.json()["detail"] == "Permission denied"

    def test_admin_create_get_and_delete(self, client, session, auth_headers, admin_user):
        headers = auth_headers(admin_user)

        created = client.post("/api/customers", json=CUSTOMER, headers=headers)
        assert created.status_code == 201
        customer_id = created.json()["data"]["id"]

        fetched = client.get(f"/api/customers/{customer_id}", headers=headers)
        assert fetched.json()["data"]["email"] == "kofi@example.com"

        deleted = client.request(
            "DELETE", f"/api/customers/{customer_id}", json={"reason": "duplicate"}, headers=headers
        )
        assert deleted.status_code == 200
        assert session.get(Customer, customer_id).deletion_reason == "duplicate"

        assert client.get(f"/api/customers/{customer_id}", headers=headers).status_code == 404

    def test_delete_without_body(self, client, auth_headers, admin_user):
        headers = auth_headers(admin_user)
        customer_id = client.post("/api/customers", json=CUSTOMER, headers=headers).json()["data"]["id"]
        assert client.delete(f"/api/customers/{customer_id}", headers=headers).status_code == 200

    def test_unknown_customer(self, client, auth_headers, admin_user):
        response = client.get("/api/customers/missing", headers=auth_headers(admin_user))
        assert response.status_code == 404

    def test_invalid_payload(self, client, auth_headers, admin_user):
        response = client.post("/api/customers", json={"name": "No contact"}, headers=auth_headers(admin_user))
        assert response.status_code == 422


class TestAuthApi:

    def test_me(self, client, auth_headers, admin_user, organization):
        response = client.get("/api/auth/me", headers=auth_headers(admin_user))
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == admin_user.id
        assert body["organization"]["id"] == organization.id
        assert body["role"]["name"] == "admin"
        assert body["is_admin"] is True
        assert "invoices_create" in body["permissions"]

    def test_me_requires_token(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_resource_permissions(self, client, auth_headers, viewer_user):
        response = client.get("/api/auth/me/resources/customers", headers=auth_headers(viewer_user))
        assert response.json() == {"create": False, "view": True, "update": False, "delete": False}

    def test_permission_catalog(self, client):
        catalog = client.get("/api/auth/permissions").json()["permissions"]
        assert catalog["invoices"] == ["invoices_create", "invoices_view", "invoices_update", "invoices_delete"]

    def test_logout_clears_cookie(self, client):
        response = client.post("/api/auth/logout")
        assert response.status_code == 200
        assert "auth-token" in response.headers["set-cookie"]


class TestAssetAndCrmApis:

    def test_fixed_asset_lifecycle(self, client, auth_headers, admin_user):
        headers = auth_headers(admin_user)
        created = client.post("/api/fixed-assets", json={
            "asset_name": "Delivery van",
            "asset_type": "vehicle",
            "purchase_date": date.today().isoformat(),
            "purchase_price": 12000,
            "useful_life": 5,
        }, headers=headers)
        assert created.status_code == 201
        asset = created.json()["data"]
        assert asset["asset_number"] == "FA-00001"
        assert asset["current_value"] == 12000

        run = client.post("/api/fixed-assets/depreciation", json={}, headers=headers)
        assert run.status_code == 200
        assert run.json()["data"]["processed"] == 1

        disposed = client.post(
            f"/api/fixed-assets/{asset['id']}/dispose",
            json={"disposal_date": date.today().isoformat(), "disposal_amount": 12500},
            headers=headers,
        )
        assert disposed.json()["data"]["status"] == "disposed"
        assert disposed.json()["gain_on_disposal"] == 500

    def test_fixed_assets_forbidden_for_viewer(self, client, auth_headers, viewer_user):
        response = client.get("/api/fixed-assets", headers=auth_headers(viewer_user))
        assert response.status_code == 403

    def test_invalid_useful_life(self, client, auth_headers, admin_user):
        response = client.post("/api/fixed-assets", json={
            "asset_name": "Desk", "purchase_date": "2024-01-01", "purchase_price": 300, "useful_life": 0,
        }, headers=auth_headers(admin_user))
        assert response.status_code == 422

    def test_lead_status_and_opportunity_stage(self, client, auth_headers, admin_user):
        headers = auth_headers(admin_user)
        lead = client.post("/api/leads", json={"name": "Yaa Asantewaa", "company": "Gold Coast Ltd"}, headers=headers)
        assert lead.status_code == 201
        lead_id = lead.json()["data"]["id"]

        qualified = client.patch(f"/api/leads/{lead_id}/status", json={"status": "qualified"}, headers=headers)
        assert qualified.json()["data"]["status"] == "qualified"

        opportunity = client.post("/api/opportunities", json={
            "name": "Annual audit", "lead_id": lead_id, "amount": 5000, "expected_close_date": "2024-12-31",
        }, headers=headers).json()["data"]
        won = client.patch(
            f"/api/opportunities/{opportunity['id']}/stage", json={"stage": "closed_won"}, headers=headers
        )
        assert won.json()["data"]["actual_close_date"] == date.today().isoformat()

    def test_unknown_lead_status(self, client, auth_headers, admin_user):
        response = client.patch("/api/leads/any/status", json={"status": "lukewarm"}, headers=auth_headers(admin_user))
        assert response.status_code == 422


class TestOtherApis:

    def test_role_presets(self, client):
        presets = client.get("/api/roles/presets").json()
        assert {p["name"] for p in presets} >= {"admin", "viewer", "bookkeeper"}

    def test_deleted_items_forbidden_for_viewer(self, client, auth_headers, viewer_user):
        response = client.get("/api/deleted-items", headers=auth_headers(viewer_user))
        assert response.status_code == 403

    def test_deleted_items_invalid_type(self, client, auth_headers, admin_user):
        response = client.get("/api/deleted-items/spaceships", headers=auth_headers(admin_user))
        assert response.status_code == 400

    def test_loan_payment(self, client, auth_headers, admin_user):
        response = client.post(
            "/api/finance/loan-payment",
            json={"principal": 1000, "annual_rate": 12, "term_months": 12},
            headers=auth_headers(admin_user),
        )
        assert response.status_code == 200

    def test_user_status_update_returns_plain_values(self, client, auth_headers, admin_user, viewer_user):
        response = client.put(
            f"/api/users/{viewer_user.id}/status", json={"status": "inactive"}, headers=auth_headers(admin_user)
        )
        assert response.status_code == 200
        assert response.json()["status"] == "inactive"
        assert response.json()["role_name"] == "viewer"

    def test_invoice_status_is_stored_as_its_value(self, client, auth_headers, admin_user):
        headers = auth_headers(admin_user)
        customer = client.post("/api/customers", json=CUSTOMER, headers=headers).json()["data"]
        response = client.post("/api/invoices", json={
            "customer_id": customer["id"],
            "issue_date": "2024-03-01",
            "status": "sent",
            "line_items": [{"description": "Filing", "quantity": 1, "unit_price": 100}],
        }, headers=headers)
        assert response.status_code == 201
        assert response.json()["data"]["status"] == "sent"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"
