"""Repository layer for data access."""

from .base import BaseRepository
from .profile_repository import ProfileRepository
from .form_repository import FormRepository

__all__ = ["BaseRepository", "ProfileRepository", "FormRepository"]
