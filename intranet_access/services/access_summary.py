"""Per-caller access summary.

The portal's client used to carry its own copy of the rules inside a hook
wrapped around the profile query. This module replaces that copy: it runs
every capability and view action through ``evaluate`` once and hands the
client plain booleans to render from.
"""

from __future__ import annotations

from ..schemas.access import AccessSummary
from .decision import Subject
from .permission_service import (
    CAPABILITY_FLAGS,
    TOTEM_VETOED_VIEWS,
    UNGATED_VIEWS,
    Action,
    accessible_admin_routes,
    evaluate,
)


def build_access_summary(subject: Subject) -> AccessSummary:
    cfg = subject.role_config

    capabilities = {
        action.value: evaluate(subject, action).allowed
        for action in CAPABILITY_FLAGS
    }
    views = {
        action.value: evaluate(subject, action).allowed
        for action in sorted(TOTEM_VETOED_VIEWS | UNGATED_VIEWS, key=lambda a: a.value)
    }

    return AccessSummary(
        user_id=subject.user_id,
        sector=subject.sector,
        is_sudo=bool(cfg and cfg.sudo),
        is_totem=bool(cfg and cfg.is_totem),
        capabilities=capabilities,
        views=views,
        can_enter_admin_area=evaluate(subject, Action.ADMIN_AREA).allowed,
        admin_routes=[route.id for route in accessible_admin_routes(cfg)],
    )
