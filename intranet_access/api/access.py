"""Access API: the caller's permission summary and admin route checks.

Clients render navigation and buttons from ``/api/me/access`` instead of
evaluating role configs themselves.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.admin_routes import ADMIN_ROOT, get_admin_route
from ..core.auth import AuthContext, require_auth
from ..core.guards import require_action, require_admin_route
from ..database import get_db
from ..exceptions import RouteNotFoundError, ValidationError
from ..repositories.profile_repository import ProfileRepository
from ..schemas.access import AccessSummary, AdminRouteResponse, RouteCheckResponse
from ..schemas.role_config import RoleConfig
from ..services.access_summary import build_access_summary
from ..services.decision import Subject
from ..services.permission_service import Action, accessible_admin_routes, evaluate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["access"])


@router.get("/api/me/access", response_model=AccessSummary)
def get_my_access(auth: AuthContext = Depends(require_auth)):
    """Every capability, view, and admin route decision for the caller."""
    return build_access_summary(auth.subject)


@router.get("/api/admin/routes", response_model=List[AdminRouteResponse])
def list_admin_routes(
    auth: AuthContext = Depends(
        require_action(Action.ADMIN_AREA, "No access to the admin area")
    ),
):
    """Admin pages the caller may open, in catalog order."""
    return accessible_admin_routes(auth.role_config)


@router.get("/api/admin/routes/check", response_model=RouteCheckResponse)
def check_admin_route(
    route: str = Query(..., description="Admin route identifier, e.g. /admin/food/dre"),
    auth: AuthContext = Depends(require_auth),
):
    """Decide a single admin route for the caller without raising on denial."""
    if route != ADMIN_ROOT and not route.startswith(ADMIN_ROOT + "/"):
        raise ValidationError("Route must be under /admin", field="route")
    entry = get_admin_route(route)
    if entry is None:
        raise RouteNotFoundError(route)

    decision = evaluate(auth.subject, Action.ADMIN_ROUTE, route)
    return RouteCheckResponse(
        route=route,
        title=entry.title,
        parent=entry.parent,
        allowed=decision.allowed,
        reason=decision.reason.value,
        detail=decision.detail,
    )


@router.get("/api/admin/users/{user_id}/access", response_model=AccessSummary)
def get_user_access(
    user_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin_route("/admin/users")),
):
    """Access summary of another user, for the user administration page."""
    profile = ProfileRepository(db).get_by_id(user_id)
    subject = Subject(
        user_id=profile.user_id,
        sector=profile.sector,
        role_config=RoleConfig.from_stored(profile.role_config),
    )
    logger.info(
        "Access summary inspected",
        extra={"inspected_user_id": profile.user_id, "by_user_id": auth.user_id},
    )
    return build_access_summary(subject)
