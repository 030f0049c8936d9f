"""User profile model.

Profiles are written by the identity webhook and the user admin pages;
this service only reads them. ``role_config`` holds the raw JSON blob and
is turned into a typed ``RoleConfig`` at load time.
"""

from sqlalchemy import Column, String, DateTime, Boolean, JSON
from sqlalchemy.sql import func
from ..database import Base


class UserProfile(Base):
    """A portal user with their sector and stored role config."""

    __tablename__ = "user_profiles"

    user_id = Column(String(64), primary_key=True)
    email = Column(String(255), unique=True, nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    sector = Column(String(255), nullable=True)
    role_config = Column(JSON, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
