"""Tests for the forms endpoints: listing, detail, and per-form permissions."""

from unittest.mock import patch

import pytest

from intranet_access.core.config import settings


@pytest.fixture()
def forms(make_form):
    make_form("public", "u9")
    make_form("open", "u9", is_private=True, allowed_users=["u1"])
    make_form("closed", "u9", is_private=True)
    make_form("mine", "u1", is_private=True)


class TestListForms:

    def test_totem_gets_403(self, client, make_profile, auth_headers_for, forms):
        make_profile("kiosk", role_config={"isTotem": True})
        resp = client.get("/api/forms", headers=auth_headers_for("kiosk"))
        assert resp.status_code == 403
        assert resp.json()["details"]["reason"] == "totem"

    def test_default_lists_everything(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={})
        resp = client.get("/api/forms", headers=auth_headers_for("u1"))
        assert resp.status_code == 200
        assert {f["id"] for f in resp.json()} == {"public", "open", "closed", "mine"}

    def test_per_item_listing(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={})
        with patch.object(settings, "form_listing_per_item", True):
            resp = client.get("/api/forms", headers=auth_headers_for("u1"))
        assert resp.status_code == 200
        assert {f["id"] for f in resp.json()} == {"public", "open", "mine"}

    def test_per_item_listing_honors_hidden_forms(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={"hidden_forms": ["open"]})
        with patch.object(settings, "form_listing_per_item", True):
            resp = client.get("/api/forms", headers=auth_headers_for("u1"))
        assert {f["id"] for f in resp.json()} == {"public", "mine"}

    def test_sudo_lists_everything_in_per_item_mode(self, client, make_profile, auth_headers_for, forms):
        make_profile("root", role_config={"sudo": True, "isTotem": True})
        with patch.object(settings, "form_listing_per_item", True):
            resp = client.get("/api/forms", headers=auth_headers_for("root"))
        assert len(resp.json()) == 4

    def test_empty(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={})
        resp = client.get("/api/forms", headers=auth_headers_for("u1"))
        assert resp.status_code == 200
        assert resp.json() == []


class TestGetForm:

    def test_unknown_form_404(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={})
        resp = client.get("/api/forms/nope", headers=auth_headers_for("u1"))
        assert resp.status_code == 404
        assert resp.json()["error"] == "FORM_NOT_FOUND"

    def test_private_form_403(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={})
        resp = client.get("/api/forms/closed", headers=auth_headers_for("u1"))
        assert resp.status_code == 403
        assert resp.json()["details"]["reason"] == "not_in_allow_list"

    def test_hidden_form_403(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={"hidden_forms": ["open"]})
        resp = client.get("/api/forms/open", headers=auth_headers_for("u1"))
        assert resp.status_code == 403
        assert resp.json()["details"]["reason"] == "hidden_form"

    def test_allowed_user(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={})
        resp = client.get("/api/forms/open", headers=auth_headers_for("u1"))
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == "open"
        assert body["user_id"] == "u9"
        assert body["allowed_users"] == ["u1"]

    def test_creator_of_private_form(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={"hidden_forms": ["mine"]})
        resp = client.get("/api/forms/mine", headers=auth_headers_for("u1"))
        assert resp.status_code == 200


class TestFormPermissions:

    def test_owner(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={})
        data = client.get("/api/forms/mine/permissions", headers=auth_headers_for("u1")).json()
        assert data == {
            "form_id": "mine",
            "is_owner": True,
            "can_view": True,
            "view_reason": "creator",
            "can_edit": True,
            "edit_reason": "creator",
            "can_view_all_responses": True,
        }

    def test_co_owner(self, client, make_profile, make_form, auth_headers_for):
        make_form("shared", "u9", is_private=True, owner_ids=["u1"])
        make_profile("u1", role_config={})
        data = client.get("/api/forms/shared/permissions", headers=auth_headers_for("u1")).json()
        assert data["is_owner"] is True
        assert data["view_reason"] == "co_owner"
        assert data["can_view_all_responses"] is True

    def test_public_form_edit_falls_through(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={})
        data = client.get("/api/forms/public/permissions", headers=auth_headers_for("u1")).json()
        assert data["is_owner"] is False
        assert data["can_view"] is True
        assert data["can_edit"] is True
        assert data["edit_reason"] == "public_form"
        assert data["can_view_all_responses"] is False

    def test_strict_edit_mode(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={})
        with patch.object(settings, "form_edit_inherits_view_access", False):
            data = client.get("/api/forms/public/permissions", headers=auth_headers_for("u1")).json()
        assert data["can_view"] is True
        assert data["can_edit"] is False
        assert data["edit_reason"] == "not_owner"

    def test_form_creator_edits_any_form(self, client, make_profile, auth_headers_for, forms):
        make_profile("u1", role_config={"can_create_form": True})
        data = client.get("/api/forms/closed/permissions", headers=auth_headers_for("u1")).json()
        assert data["can_view"] is False
        assert data["can_edit"] is True
        assert data["edit_reason"] == "form_editor"

    def test_denied_decisions_do_not_raise(self, client, make_profile, auth_headers_for, forms):
        make_profile("kiosk", role_config={"isTotem": True})
        resp = client.get("/api/forms/public/permissions", headers=auth_headers_for("kiosk"))
        assert resp.status_code == 200
        data = resp.json()
        assert data["can_view"] is False
        assert data["view_reason"] == "totem"
        assert data["can_edit"] is False

    def test_unknown_form_404(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={})
        resp = client.get("/api/forms/nope/permissions", headers=auth_headers_for("u1"))
        assert resp.status_code == 404
