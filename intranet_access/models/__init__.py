"""Database models."""

from .user import UserProfile
from .form import Form

__all__ = ["UserProfile", "Form"]
