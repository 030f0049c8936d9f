"""API routes."""

from .access import router as access_router
from .forms import router as forms_router

__all__ = [
    "access_router",
    "forms_router",
]
