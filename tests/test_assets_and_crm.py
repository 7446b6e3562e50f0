"""
Tests for the fixed asset register and the CRM records.
"""
from datetime import date, timedelta

import pytest

from api.customer import actions as customers
from api.deleted_items import actions as deleted_items
from api.fixed_asset import actions as assets
from api.lead import actions as leads
from api.opportunity import actions as opportunities
from database.models import FixedAsset, SubscriptionStatus


TODAY = date.today()
VAN = {
    "asset_name": "Delivery van",
    "asset_type": "vehicle",
    "purchase_date": TODAY,
    "purchase_price": 12000,
    "salvage_value": 2000,
    "useful_life": 5,
}


@pytest.fixture
def van(admin_ctx):
    return assets.create_fixed_asset(admin_ctx, dict(VAN))["data"]


class TestFixedAssetActions:

    def test_new_asset_starts_at_purchase_price(self, van):
        assert van["asset_number"] == "FA-00001"
        assert van["current_value"] == pytest.approx(12000)
        assert van["accumulated_depreciation"] == 0
        assert van["status"] == "active"

    def test_book_values_for_an_older_purchase(self, admin_ctx):
        # 360 days is twelve whole 30-day months
        data = assets.create_fixed_asset(
            admin_ctx, {**VAN, "purchase_date": TODAY - timedelta(days=360)}
        )["data"]
        assert data["accumulated_depreciation"] == pytest.approx(2000)
        assert data["current_value"] == pytest.approx(10000)

    def test_depreciation_run(self, admin_ctx, van):
        result = assets.run_depreciation(admin_ctx, TODAY + timedelta(days=360))
        assert result["data"]["processed"] == 1

        data = assets.get_fixed_asset(admin_ctx, van["id"])["data"]
        assert data["current_value"] == pytest.approx(10000)
        assert data["accumulated_depreciation"] == pytest.approx(2000)
        assert data["status"] == "active"

    def test_fully_depreciated_assets_drop_out_of_the_run(self, admin_ctx, van):
        assets.run_depreciation(admin_ctx, TODAY + timedelta(days=365 * 6))

        data = assets.get_fixed_asset(admin_ctx, van["id"])["data"]
        assert data["status"] == "fully_depreciated"
        assert data["current_value"] == pytest.approx(2000)
        assert assets.run_depreciation(admin_ctx, TODAY + timedelta(days=365 * 7))["data"]["processed"] == 0

    def test_run_skips_deleted_assets(self, admin_ctx, van):
        assets.delete_fixed_asset(admin_ctx, van["id"])
        assert assets.run_depreciation(admin_ctx)["data"]["processed"] == 0

    def test_update_recomputes_book_values(self, admin_ctx, van):
        updated = assets.update_fixed_asset(
            admin_ctx, van["id"], {"purchase_price": 24000, "current_value": 1}
        )["data"]
        assert updated["current_value"] == pytest.approx(24000)

    def test_dispose_reports_gain(self, admin_ctx, van):
        result = assets.dispose_fixed_asset(admin_ctx, van["id"], TODAY + timedelta(days=360), 11000)

        assert result["data"]["status"] == "disposed"
        assert result["data"]["disposal_amount"] == 11000
        assert result["gain_on_disposal"] == pytest.approx(1000)
        assert assets.dispose_fixed_asset(admin_ctx, van["id"], TODAY) == {"error": "Asset is already disposed"}

    def test_disposed_asset_keeps_its_values(self, admin_ctx, van):
        assets.dispose_fixed_asset(admin_ctx, van["id"], TODAY, 9000)
        assets.run_depreciation(admin_ctx, TODAY + timedelta(days=720))

        data = assets.get_fixed_asset(admin_ctx, van["id"])["data"]
        assert data["status"] == "disposed"
        assert data["current_value"] == pytest.approx(12000)

    def test_view_only_role(self, make_ctx, make_user, make_role, van):
        ctx = make_ctx(make_user(make_role({"fixedAssets_view": True})))
        assert assets.list_fixed_assets(ctx)["total"] == 1
        assert assets.create_fixed_asset(ctx, dict(VAN)) == {"error": "Permission denied"}
        assert assets.run_depreciation(ctx) == {"error": "Permission denied"}

    def test_suspended_organization(self, session, admin_ctx, organization, van):
        organization.subscription_status = SubscriptionStatus.SUSPENDED.value
        session.add(organization)
        session.commit()

        assert "suspended" in assets.run_depreciation(admin_ctx)["error"]

    def test_restore_from_recycle_bin(self, admin_ctx, van):
        assets.delete_fixed_asset(admin_ctx, van["id"], "entered twice")
        assert assets.get_fixed_asset(admin_ctx, van["id"]) == {"error": "Asset not found"}

        restored = deleted_items.restore_deleted_item(admin_ctx, "fixed_assets", van["id"])
        assert restored["item"]["asset_name"] == "Delivery van"

        assert assets.get_fixed_asset(admin_ctx, van["id"])["data"]["status"] == "active"

    def test_purge_from_recycle_bin(self, session, admin_ctx, van):
        assets.delete_fixed_asset(admin_ctx, van["id"])
        assert deleted_items.permanently_delete_item(admin_ctx, "fixed_assets", van["id"]) == {"success": True}
        assert session.get(FixedAsset, van["id"]) is None


class TestLeadActions:

    def test_create_defaults(self, admin_ctx):
        data = leads.create_lead(admin_ctx, {"name": "Yaa Asantewaa", "status": "converted"})["data"]
        assert data["lead_number"] == "LEAD-00001"
        assert data["status"] == "new"
        assert data["rating"] == "warm"

    def test_status_update(self, admin_ctx):
        lead = leads.create_lead(admin_ctx, {"name": "Yaa Asantewaa"})["data"]

        assert leads.update_lead_status(admin_ctx, lead["id"], "qualified")["data"]["status"] == "qualified"
        assert leads.update_lead_status(admin_ctx, lead["id"], "lukewarm") == {"error": "Invalid lead status"}

    def test_update_ignores_status_and_number(self, admin_ctx):
        lead = leads.create_lead(admin_ctx, {"name": "Yaa Asantewaa"})["data"]
        updated = leads.update_lead(
            admin_ctx, lead["id"], {"company": "Gold Coast Ltd", "status": "converted", "lead_number": "X"}
        )["data"]

        assert updated["company"] == "Gold Coast Ltd"
        assert updated["status"] == "new"
        assert updated["lead_number"] == "LEAD-00001"

    def test_list_filters_by_status(self, admin_ctx):
        first = leads.create_lead(admin_ctx, {"name": "Yaa Asantewaa"})["data"]
        leads.create_lead(admin_ctx, {"name": "Kwame Nkrumah"})
        leads.update_lead_status(admin_ctx, first["id"], "contacted")

        contacted = leads.list_leads(admin_ctx, status="contacted")["data"]
        assert [lead["id"] for lead in contacted] == [first["id"]]

    def test_delete_needs_delete_permission(self, make_ctx, make_user, make_role, admin_ctx):
        lead = leads.create_lead(admin_ctx, {"name": "Yaa Asantewaa"})["data"]
        ctx = make_ctx(make_user(make_role({"leads_view": True, "leads_update": True})))
        assert leads.delete_lead(ctx, lead["id"]) == {"error": "Permission denied"}

    def test_restore_from_recycle_bin(self, admin_ctx):
        lead = leads.create_lead(admin_ctx, {"name": "Yaa Asantewaa"})["data"]
        leads.delete_lead(admin_ctx, lead["id"])

        deleted = deleted_items.get_deleted_items_by_type(admin_ctx, "leads")
        assert [item["id"] for item in deleted["items"]] == [lead["id"]]

        deleted_items.restore_deleted_item(admin_ctx, "leads", lead["id"])
        assert leads.get_lead(admin_ctx, lead["id"])["success"] is True


class TestOpportunityActions:

    def test_create_defaults(self, admin_ctx):
        data = opportunities.create_opportunity(admin_ctx, {
            "name": "Annual audit", "expected_close_date": date(2024, 12, 31), "stage": "closed_won",
        })["data"]

        assert data["opportunity_number"] == "OPP-00001"
        assert data["stage"] == "prospecting"
        assert data["probability"] == 50
        assert data["actual_close_date"] is None

    def test_links_must_belong_to_the_organization(
        self, admin_ctx, make_ctx, make_user, make_role, other_organization
    ):
        outsider = make_user(
            make_role({"customers_create": True}, organization_id=other_organization.id),
            organization_id=other_organization.id,
        )
        theirs = customers.create_customer(
            make_ctx(outsider), {"name": "Ama Owusu", "email": "ama@example.com", "phone": "1"}
        )["data"]

        result = opportunities.create_opportunity(admin_ctx, {
            "name": "Poached", "customer_id": theirs["id"], "expected_close_date": date(2024, 12, 31),
        })
        assert result == {"error": "Customer not found"}
        assert opportunities.create_opportunity(admin_ctx, {
            "name": "Ghost", "lead_id": "missing", "expected_close_date": date(2024, 12, 31),
        }) == {"error": "Lead not found"}

    def test_closing_stage_sets_close_date(self, admin_ctx):
        opportunity = opportunities.create_opportunity(admin_ctx, {
            "name": "Annual audit", "expected_close_date": date(2024, 12, 31),
        })["data"]

        proposal = opportunities.update_opportunity_stage(admin_ctx, opportunity["id"], "proposal")["data"]
        assert proposal["actual_close_date"] is None

        lost = opportunities.update_opportunity_stage(admin_ctx, opportunity["id"], "closed_lost")["data"]
        assert lost["stage"] == "closed_lost"
        assert lost["actual_close_date"] == TODAY.isoformat()

    def test_unknown_stage(self, admin_ctx):
        opportunity = opportunities.create_opportunity(admin_ctx, {
            "name": "Annual audit", "expected_close_date": date(2024, 12, 31),
        })["data"]
        assert opportunities.update_opportunity_stage(admin_ctx, opportunity["id"], "won") == {
            "error": "Invalid opportunity stage"
        }

    def test_restore_from_recycle_bin(self, admin_ctx):
        opportunity = opportunities.create_opportunity(admin_ctx, {
            "name": "Annual audit", "expected_close_date": date(2024, 12, 31),
        })["data"]
        opportunities.delete_opportunity(admin_ctx, opportunity["id"], "lost contact")
        assert opportunities.list_opportunities(admin_ctx)["total"] == 0

        restored = deleted_items.restore_deleted_item(admin_ctx, "opportunities", opportunity["id"])
        assert restored["item"]["name"] == "Annual audit"
        assert opportunities.list_opportunities(admin_ctx)["total"] == 1
