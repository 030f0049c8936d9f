"""Form model with only the columns the access policy and listings need."""

from sqlalchemy import Column, String, Text, DateTime, Boolean, JSON
from sqlalchemy.sql import func
from ..database import Base


class Form(Base):
    """A portal form.

    ``user_id`` is the creator. ``owner_ids`` lists co-owners. When
    ``is_private`` is set, only the owners, ``allowed_users`` and members of
    ``allowed_sectors`` may open it.
    """

    __tablename__ = "forms"

    id = Column(String(64), primary_key=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    user_id = Column(String(64), nullable=False, index=True)
    owner_ids = Column(JSON, nullable=False, default=list)
    is_private = Column(Boolean, nullable=False, default=False)
    allowed_users = Column(JSON, nullable=False, default=list)
    allowed_sectors = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
