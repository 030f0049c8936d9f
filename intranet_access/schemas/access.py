"""Access summary and admin route schemas."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class AdminRouteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    parent: Optional[str] = None


class DecisionResponse(BaseModel):
    """A single policy decision as returned to clients."""
    allowed: bool
    reason: str
    detail: str = ""


class RouteCheckResponse(DecisionResponse):
    """Decision on one catalog route, with the entry it was made for."""
    route: str
    title: str
    parent: Optional[str] = None


class AccessSummary(BaseModel):
    """Everything a client needs to render navigation and buttons.

    Computed by the policy engine in one pass; clients read these values
    instead of evaluating role configs themselves.
    """
    user_id: Optional[str]
    sector: Optional[str]
    is_sudo: bool
    is_totem: bool
    capabilities: Dict[str, bool]
    views: Dict[str, bool]
    can_enter_admin_area: bool
    admin_routes: List[str]
