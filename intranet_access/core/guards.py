"""Call-site enforcement: turn policy denials into 403 responses.

The policy engine only answers questions. The guards here are where a
denial becomes fatal to the request, and where it is logged with its reason.
"""

import logging
from typing import Callable

from fastapi import Depends

from .auth import AuthContext, require_auth
from .config import settings
from ..exceptions import ForbiddenError
from ..services.decision import Decision, PolicyOptions
from ..services.permission_service import Action, evaluate

logger = logging.getLogger(__name__)


def policy_options() -> PolicyOptions:
    """Policy switches as currently configured."""
    return PolicyOptions(
        filter_listing_per_item=settings.form_listing_per_item,
        edit_inherits_view_access=settings.form_edit_inherits_view_access,
    )


def enforce(decision: Decision, auth: AuthContext, action: Action, message: str) -> Decision:
    """Raise ForbiddenError unless *decision* allows. Returns it otherwise."""
    if decision.allowed:
        return decision
    logger.info(
        "Access denied",
        extra={
            "user_id": auth.user_id,
            "action": action.value,
            "reason": decision.reason.value,
            "detail": decision.detail,
        },
    )
    raise ForbiddenError(message, reason=decision.reason.value)


def require_action(action: Action, message: str) -> Callable[..., AuthContext]:
    """Build a dependency that requires *action* with no resource.

    Usage::

        @router.get("/", dependencies=[Depends(require_action(Action.VIEW_FORMS, "..."))])
    """

    def _dependency(auth: AuthContext = Depends(require_auth)) -> AuthContext:
        enforce(evaluate(auth.subject, action), auth, action, message)
        return auth

    return _dependency


def require_admin_route(route: str) -> Callable[..., AuthContext]:
    """Build a dependency that requires access to the admin page *route*."""

    def _dependency(auth: AuthContext = Depends(require_auth)) -> AuthContext:
        enforce(
            evaluate(auth.subject, Action.ADMIN_ROUTE, route),
            auth,
            Action.ADMIN_ROUTE,
            f"No access to admin page {route}",
        )
        return auth

    return _dependency
