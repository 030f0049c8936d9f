"""Tests for the access summary and admin route endpoints."""


class TestMyAccess:

    def test_regular_user(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"can_create_event": True}, sector="RH")
        data = client.get("/api/me/access", headers=auth_headers_for("u1")).json()
        assert data["sector"] == "RH"
        assert data["is_sudo"] is False
        assert data["capabilities"]["event.create"] is True
        assert data["capabilities"]["form.create"] is False
        assert data["capabilities"]["role_config.manage"] is False
        assert all(data["views"].values())
        assert data["can_enter_admin_area"] is False

    def test_totem_user(self, client, make_profile, auth_headers_for):
        make_profile("kiosk", role_config={"isTotem": True, "admin_pages": ["/admin"]})
        data = client.get("/api/me/access", headers=auth_headers_for("kiosk")).json()
        assert data["is_totem"] is True
        assert data["views"]["forms.view"] is False
        assert data["views"]["shop.view"] is True
        # TOTEM only vetoes views; the admin grant still stands.
        assert data["can_enter_admin_area"] is True

    def test_legacy_layout(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"forms": {"can_create_form": True}, "content": {}})
        data = client.get("/api/me/access", headers=auth_headers_for("u1")).json()
        assert data["capabilities"]["form.create"] is True

    def test_invalid_config_locks_down(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"sudo": "yes please", "admin_pages": ["/admin"]})
        data = client.get("/api/me/access", headers=auth_headers_for("u1")).json()
        assert data["is_sudo"] is False
        assert data["is_totem"] is True
        assert data["admin_routes"] == []

    def test_dre_report_routes(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"can_view_dre_report": True, "admin_pages": []})
        data = client.get("/api/me/access", headers=auth_headers_for("u1")).json()
        assert data["admin_routes"] == ["/admin", "/admin/food", "/admin/food/dre"]


class TestListAdminRoutes:

    def test_denied_without_admin_grant(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={})
        resp = client.get("/api/admin/routes", headers=auth_headers_for("u1"))
        assert resp.status_code == 403
        body = resp.json()
        assert body["error"] == "FORBIDDEN"
        assert body["details"]["reason"] == "route_not_granted"

    def test_missing_config_reason(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config=None)
        resp = client.get("/api/admin/routes", headers=auth_headers_for("u1"))
        assert resp.status_code == 403
        assert resp.json()["details"]["reason"] == "no_role_config"

    def test_lists_granted_pages(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"admin_pages": ["/admin/rooms", "/admin/news"]})
        resp = client.get("/api/admin/routes", headers=auth_headers_for("u1"))
        assert resp.status_code == 200
        assert [r["id"] for r in resp.json()] == ["/admin", "/admin/rooms", "/admin/news"]

    def test_sudo_lists_catalog(self, client, make_profile, auth_headers_for):
        make_profile("root", role_config={"sudo": True})
        routes = client.get("/api/admin/routes", headers=auth_headers_for("root")).json()
        assert routes[0] == {
            "id": "/admin",
            "title": "Admin panel",
            "description": "Basic access to the administration area",
            "parent": None,
        }
        assert "/admin/emotion-ruler" in [r["id"] for r in routes]


class TestCheckAdminRoute:

    def test_granted_by_parent(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"admin_pages": ["/admin/food"]})
        resp = client.get(
            "/api/admin/routes/check", params={"route": "/admin/food/dre"}, headers=auth_headers_for("u1")
        )
        assert resp.status_code == 200
        assert resp.json() == {
            "route": "/admin/food/dre",
            "title": "DRE report",
            "parent": "/admin/food",
            "allowed": True,
            "reason": "route_grant",
            "detail": "/admin/food/dre",
        }

    def test_denied_is_not_an_error(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"admin_pages": ["/admin/food"]})
        resp = client.get(
            "/api/admin/routes/check", params={"route": "/admin"}, headers=auth_headers_for("u1")
        )
        assert resp.status_code == 200
        assert resp.json()["allowed"] is False
        assert resp.json()["reason"] == "route_not_granted"

    def test_route_outside_admin(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"sudo": True})
        resp = client.get(
            "/api/admin/routes/check", params={"route": "/dashboard"}, headers=auth_headers_for("u1")
        )
        assert resp.status_code == 400
        assert resp.json()["details"] == {"field": "route"}

    def test_unknown_route(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"sudo": True})
        resp = client.get(
            "/api/admin/routes/check", params={"route": "/admin/nope"}, headers=auth_headers_for("u1")
        )
        assert resp.status_code == 404
        assert resp.json()["error"] == "ROUTE_NOT_FOUND"

    def test_route_is_required(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={})
        resp = client.get("/api/admin/routes/check", headers=auth_headers_for("u1"))
        assert resp.status_code == 422


class TestUserAccess:

    def test_user_admin_inspects_other_user(self, client, make_profile, auth_headers_for):
        make_profile("admin", role_config={"admin_pages": ["/admin/users"]})
        make_profile("u2", role_config={"can_locate_cars": True}, sector="Frota")
        resp = client.get("/api/admin/users/u2/access", headers=auth_headers_for("admin"))
        assert resp.status_code == 200
        data = resp.json()
        assert data["user_id"] == "u2"
        assert data["sector"] == "Frota"
        assert data["capabilities"]["car.locate"] is True

    def test_requires_users_page(self, client, make_profile, auth_headers_for):
        make_profile("u1", role_config={"admin_pages": ["/admin/rooms"]})
        make_profile("u2", role_config={})
        resp = client.get("/api/admin/users/u2/access", headers=auth_headers_for("u1"))
        assert resp.status_code == 403

    def test_unknown_user(self, client, make_profile, auth_headers_for):
        make_profile("admin", role_config={"sudo": True})
        resp = client.get("/api/admin/users/ghost/access", headers=auth_headers_for("admin"))
        assert resp.status_code == 404
        assert resp.json()["error"] == "USER_NOT_FOUND"
