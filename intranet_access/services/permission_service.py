"""Permission checking: the portal's policy engine.

This is the ONE place where access rules are defined. The enforcement layer
(API guards, UI adapters) asks questions here and decides what a denial
means for the request; it never re-implements a rule.

Design:
    - ``evaluate(subject, action, resource)`` is the single entry point and
      returns a ``Decision`` carrying a machine-readable reason
    - ``sudo`` is checked first and wins over everything, TOTEM included
    - Capabilities are table entries: an action maps to the RoleConfig flag
      that grants it (or to nothing, meaning sudo only)
    - View actions are open to everyone except TOTEM accounts
    - Admin routes: implied exact grants, then hierarchical ``admin_pages``
    - A missing config or user always denies; nothing here raises

Every function is pure. Inputs are frozen snapshots, so calls are safe from
any number of concurrent request handlers.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional

from ..core.admin_routes import ADMIN_ROOT, ADMIN_ROUTES, AdminRoute
from ..schemas.role_config import RoleConfig
from .decision import DEFAULT_OPTIONS, Decision, PolicyOptions, Reason, Subject
from . import form_access
from .route_grants import granted_under, route_is_granted


class Action(str, Enum):
    """Everything the engine can be asked about."""

    ADMIN_ROUTE = "admin.route"
    ADMIN_AREA = "admin.area"

    CREATE_FORM = "form.create"
    CREATE_EVENT = "event.create"
    CREATE_FLYER = "flyer.create"
    CREATE_BOOKING = "booking.create"
    CREATE_SOLICITACOES = "solicitacao.create"
    LOCATE_CARS = "car.locate"
    VIEW_DRE_REPORT = "dre_report.view"
    MANAGE_EXTENSIONS = "extension.manage"
    MANAGE_QUALITY = "quality.manage"
    MANAGE_PRODUCTS = "product.manage"
    MANAGE_USER_BASIC_INFO = "user_basic_info.manage"
    ADD_MANUAL_FOOD_ORDER = "food_order.add_manual"
    MANAGE_ROLE_CONFIGS = "role_config.manage"

    VIEW_FORMS = "forms.view"
    VIEW_EVENTS = "events.view"
    VIEW_FLYERS = "flyers.view"
    VIEW_ROOMS = "rooms.view"
    VIEW_CARS = "cars.view"
    VIEW_CHAT = "chat.view"
    VIEW_SHOP = "shop.view"

    VIEW_FORM = "form.view"
    EDIT_FORM = "form.edit"
    VIEW_ALL_FORM_RESPONSES = "form.responses.view_all"


# Capability → RoleConfig flag. None means only sudo holds it.
CAPABILITY_FLAGS: dict[Action, Optional[str]] = {
    Action.CREATE_FORM: "can_create_form",
    Action.CREATE_EVENT: "can_create_event",
    Action.CREATE_FLYER: "can_create_flyer",
    Action.CREATE_BOOKING: "can_create_booking",
    Action.CREATE_SOLICITACOES: "can_create_solicitacoes",
    Action.LOCATE_CARS: "can_locate_cars",
    Action.VIEW_DRE_REPORT: "can_view_dre_report",
    Action.MANAGE_EXTENSIONS: "can_manage_extensions",
    Action.MANAGE_QUALITY: "can_manage_quality_management",
    Action.MANAGE_PRODUCTS: "can_manage_produtos",
    Action.MANAGE_USER_BASIC_INFO: "can_manage_dados_basicos_users",
    Action.ADD_MANUAL_FOOD_ORDER: "can_view_add_manual_ped",
    Action.MANAGE_ROLE_CONFIGS: None,
}

# Views open to every caller except TOTEM accounts.
TOTEM_VETOED_VIEWS: frozenset[Action] = frozenset({
    Action.VIEW_FORMS,
    Action.VIEW_EVENTS,
    Action.VIEW_FLYERS,
    Action.VIEW_ROOMS,
    Action.VIEW_CARS,
    Action.VIEW_CHAT,
})

# Views open to anyone with a resolvable identity.
UNGATED_VIEWS: frozenset[Action] = frozenset({Action.VIEW_SHOP})

# Actions whose resource is a form descriptor.
_FORM_ACTIONS: frozenset[Action] = frozenset({
    Action.VIEW_FORM,
    Action.EDIT_FORM,
    Action.VIEW_ALL_FORM_RESPONSES,
})

# Flag → admin routes it opens. Exact match only: the implied routes do
# not extend to their descendants.
IMPLIED_ROUTE_GRANTS: dict[str, frozenset[str]] = {
    "can_view_dre_report": frozenset({"/admin", "/admin/food", "/admin/food/dre"}),
    "can_manage_produtos": frozenset({"/admin", "/admin/products"}),
    "can_manage_quality_management": frozenset({"/admin", "/admin/quality"}),
    "can_manage_extensions": frozenset({"/admin", "/admin/extension"}),
}


# -- Rule implementations --------------------------------------------------

def _capability_decision(cfg: Optional[RoleConfig], action: Action) -> Decision:
    if cfg is None:
        return Decision.deny(Reason.NO_ROLE_CONFIG)
    if cfg.sudo:
        return Decision.allow(Reason.SUDO)
    flag = CAPABILITY_FLAGS[action]
    if flag is not None and getattr(cfg, flag):
        return Decision.allow(Reason.CAPABILITY, flag)
    return Decision.deny(Reason.MISSING_CAPABILITY, flag or "sudo")


def _view_decision(cfg: Optional[RoleConfig], action: Action) -> Decision:
    if cfg is None:
        return Decision.deny(Reason.NO_ROLE_CONFIG)
    if cfg.sudo:
        return Decision.allow(Reason.SUDO)
    if cfg.is_totem:
        return Decision.deny(Reason.TOTEM)
    return Decision.allow(Reason.NOT_TOTEM)


def _implied_routes(cfg: RoleConfig) -> frozenset[str]:
    routes: set[str] = set()
    for flag, granted in IMPLIED_ROUTE_GRANTS.items():
        if getattr(cfg, flag):
            routes |= granted
    return frozenset(routes)


def admin_route_decision(cfg: Optional[RoleConfig], route: Any) -> Decision:
    """Decide whether the caller may open an admin route."""
    if cfg is None:
        return Decision.deny(Reason.NO_ROLE_CONFIG)
    if cfg.sudo:
        return Decision.allow(Reason.SUDO)
    if not isinstance(route, str) or not route:
        return Decision.deny(Reason.NO_RESOURCE)
    # Grants only ever cover the admin area.
    if route != ADMIN_ROOT and not route.startswith(ADMIN_ROOT + "/"):
        return Decision.deny(Reason.ROUTE_NOT_GRANTED, route)
    if route in _implied_routes(cfg):
        return Decision.allow(Reason.IMPLIED_ROUTE, route)
    if route_is_granted(cfg.admin_pages, route):
        return Decision.allow(Reason.ROUTE_GRANT, route)
    return Decision.deny(Reason.ROUTE_NOT_GRANTED, route)


def admin_area_decision(cfg: Optional[RoleConfig]) -> Decision:
    """Decide whether the caller may enter the admin landing page.

    Broader than ``admin_route_decision(cfg, "/admin")``: a grant on any
    page under ``/admin`` or any flag carrying implied admin routes lets
    the caller in, so they can reach the pages they hold.
    """
    if cfg is None:
        return Decision.deny(Reason.NO_ROLE_CONFIG)
    if cfg.sudo:
        return Decision.allow(Reason.SUDO)
    if granted_under(cfg.admin_pages, ADMIN_ROOT):
        return Decision.allow(Reason.ROUTE_GRANT, ADMIN_ROOT)
    if ADMIN_ROOT in _implied_routes(cfg):
        return Decision.allow(Reason.IMPLIED_ROUTE, ADMIN_ROOT)
    return Decision.deny(Reason.ROUTE_NOT_GRANTED, ADMIN_ROOT)


def evaluate(
    subject: Subject,
    action: Action,
    resource: Any = None,
    options: PolicyOptions = DEFAULT_OPTIONS,
) -> Decision:
    """Single entry point: may *subject* perform *action* on *resource*?

    Args:
        subject: Caller identity, sector, and role config snapshot.
        action: What is being attempted.
        resource: The route string for ``ADMIN_ROUTE``; a form descriptor
            for the form actions; ignored otherwise.
        options: Switches for form behaviors awaiting a policy decision.

    Returns:
        A ``Decision``. Never raises.
    """
    cfg = subject.role_config

    if action in CAPABILITY_FLAGS:
        return _capability_decision(cfg, action)
    if action in TOTEM_VETOED_VIEWS:
        return _view_decision(cfg, action)
    if action in UNGATED_VIEWS:
        if not subject.user_id:
            return Decision.deny(Reason.NO_USER)
        return Decision.allow(Reason.OPEN_TO_ALL)
    if action == Action.ADMIN_ROUTE:
        return admin_route_decision(cfg, resource)
    if action == Action.ADMIN_AREA:
        return admin_area_decision(cfg)
    if action in _FORM_ACTIONS:
        form = _as_form(resource)
        form_id = form.id if form is not None else None
        if action == Action.VIEW_FORM:
            return form_access.form_view_decision(cfg, form_id, subject.user_id, form, subject.sector)
        if action == Action.EDIT_FORM:
            return form_access.form_edit_decision(
                cfg, subject.user_id, form_id, form, subject.sector, options
            )
        return form_access.responses_scope_decision(cfg, subject.user_id, form)
    return Decision.deny(Reason.UNKNOWN_ACTION, str(action))


def _as_form(resource: Any) -> Any:
    """Return *resource* if it looks like a form descriptor, else None."""
    if resource is None or not hasattr(resource, "id") or not hasattr(resource, "user_id"):
        return None
    return resource


# -- Boolean API -----------------------------------------------------------
# Thin wrappers kept for call sites that only need yes/no.

def has_admin_access(cfg: Optional[RoleConfig], route: str) -> bool:
    return admin_route_decision(cfg, route).allowed


def can_enter_admin_area(cfg: Optional[RoleConfig]) -> bool:
    return admin_area_decision(cfg).allowed


def can_create_form(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.CREATE_FORM).allowed


def can_create_event(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.CREATE_EVENT).allowed


def can_create_flyer(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.CREATE_FLYER).allowed


def can_create_booking(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.CREATE_BOOKING).allowed


def can_create_solicitacoes(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.CREATE_SOLICITACOES).allowed


def can_locate_cars(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.LOCATE_CARS).allowed


def can_view_dre_report(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.VIEW_DRE_REPORT).allowed


def can_manage_extensions(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.MANAGE_EXTENSIONS).allowed


def can_manage_quality_management(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.MANAGE_QUALITY).allowed


def can_manage_products(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.MANAGE_PRODUCTS).allowed


def can_manage_user_basic_info(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.MANAGE_USER_BASIC_INFO).allowed


def can_add_manual_food_order(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.ADD_MANUAL_FOOD_ORDER).allowed


def can_manage_role_configs(cfg: Optional[RoleConfig]) -> bool:
    return _capability_decision(cfg, Action.MANAGE_ROLE_CONFIGS).allowed


def can_view_forms(cfg: Optional[RoleConfig]) -> bool:
    return _view_decision(cfg, Action.VIEW_FORMS).allowed


def can_view_events(cfg: Optional[RoleConfig]) -> bool:
    return _view_decision(cfg, Action.VIEW_EVENTS).allowed


def can_view_flyers(cfg: Optional[RoleConfig]) -> bool:
    return _view_decision(cfg, Action.VIEW_FLYERS).allowed


def can_view_rooms(cfg: Optional[RoleConfig]) -> bool:
    return _view_decision(cfg, Action.VIEW_ROOMS).allowed


def can_view_cars(cfg: Optional[RoleConfig]) -> bool:
    return _view_decision(cfg, Action.VIEW_CARS).allowed


def can_view_chat(cfg: Optional[RoleConfig]) -> bool:
    return _view_decision(cfg, Action.VIEW_CHAT).allowed


def can_view_shop(cfg: Optional[RoleConfig] = None) -> bool:
    """The shop is open to everyone; the config is not consulted."""
    return True


def accessible_admin_routes(
    cfg: Optional[RoleConfig],
    routes: Iterable[AdminRoute] = ADMIN_ROUTES,
) -> list[AdminRoute]:
    """Catalog entries the caller may open, in catalog order.

    Empty unless the caller may enter the admin area at all; the landing
    page itself is always listed once they can.
    """
    if not can_enter_admin_area(cfg):
        return []
    return [
        route for route in routes
        if route.id == ADMIN_ROOT or has_admin_access(cfg, route.id)
    ]
