"""Pydantic schemas for API validation."""

from .role_config import RoleConfig
from .form import FormDescriptor, FormResponse, FormPermissionsResponse
from .access import (
    AccessSummary,
    AdminRouteResponse,
    DecisionResponse,
    RouteCheckResponse,
)

__all__ = [
    "RoleConfig",
    "FormDescriptor",
    "FormResponse",
    "FormPermissionsResponse",
    "AccessSummary",
    "AdminRouteResponse",
    "DecisionResponse",
    "RouteCheckResponse",
]
