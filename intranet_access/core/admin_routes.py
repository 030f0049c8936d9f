"""Static catalog of admin route identifiers.

Routes form a tree rooted at ``/admin``. Identifiers are plain slash-delimited
strings; a route's parent is declared explicitly rather than inferred, so
the catalog stays the authority on which pages exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

ADMIN_ROOT = "/admin"


@dataclass(frozen=True)
class AdminRoute:
    """A page in the admin area."""

    id: str
    title: str
    description: str
    parent: Optional[str] = None


ADMIN_ROUTES: tuple[AdminRoute, ...] = (
    AdminRoute("/admin", "Admin panel", "Basic access to the administration area"),
    AdminRoute("/admin/users", "Users", "Manage users, permissions and settings", ADMIN_ROOT),
    AdminRoute("/admin/birthday", "Birthdays", "Configure and manage birthdays", ADMIN_ROOT),
    AdminRoute("/admin/food", "Food", "Manage restaurants, menus and orders", ADMIN_ROOT),
    AdminRoute("/admin/food/dre", "DRE report", "Income statement for food orders", "/admin/food"),
    AdminRoute("/admin/rooms", "Rooms", "Configure rooms and manage bookings", ADMIN_ROOT),
    AdminRoute("/admin/news", "News", "Publish and manage announcements", ADMIN_ROOT),
    AdminRoute("/admin/suggestions", "Ideas", "Review and manage user suggestions", ADMIN_ROOT),
    AdminRoute("/admin/vehicles", "Vehicles", "Manage the fleet, rentals and usage metrics", ADMIN_ROOT),
    AdminRoute("/admin/products", "Products", "Create, edit and manage shop products", ADMIN_ROOT),
    AdminRoute("/admin/orders", "Orders", "Follow shop orders", ADMIN_ROOT),
    AdminRoute("/admin/shop", "Shop", "Shop settings and notifications", ADMIN_ROOT),
    AdminRoute("/admin/quality", "Quality management", "Master list of documents", ADMIN_ROOT),
    AdminRoute("/admin/quality/enums", "Quality enums", "Classifications used by quality documents", "/admin/quality"),
    AdminRoute("/admin/extension", "Extensions", "Manage phone extensions", ADMIN_ROOT),
    AdminRoute("/admin/chat-groups", "Chat groups", "Create and manage chat groups", ADMIN_ROOT),
    AdminRoute("/admin/emotion-ruler", "Emotion ruler", "Manage the emotion ruler and its answers", ADMIN_ROOT),
)

_BY_ID: dict[str, AdminRoute] = {route.id: route for route in ADMIN_ROUTES}


def get_admin_route(route_id: str) -> Optional[AdminRoute]:
    """Look up a catalog entry by identifier."""
    return _BY_ID.get(route_id)
