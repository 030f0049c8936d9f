"""Form schemas.

``FormDescriptor`` is the subset of a form the access policy reads; every
other form field is opaque to it. The camelCase aliases match the payloads
produced by the portal's form router.
"""

from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FormDescriptor(BaseModel):
    """Ownership and privacy fields of a form."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, from_attributes=True)

    id: str
    user_id: Optional[str] = Field(default=None, alias="userId")
    owner_ids: tuple[str, ...] = Field(default=(), alias="ownerIds")
    is_private: bool = Field(default=False, alias="isPrivate")
    allowed_users: tuple[str, ...] = Field(default=(), alias="allowedUsers")
    allowed_sectors: tuple[str, ...] = Field(default=(), alias="allowedSectors")

    @field_validator("owner_ids", "allowed_users", "allowed_sectors", mode="before")
    @classmethod
    def null_list_is_empty(cls, v):
        return () if v is None else v

    @field_validator("is_private", mode="before")
    @classmethod
    def null_is_public(cls, v):
        return False if v is None else v


class FormResponse(BaseModel):
    """Form as returned by the listing and detail endpoints."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    user_id: str
    owner_ids: List[str] = []
    is_private: bool = False
    allowed_users: List[str] = []
    allowed_sectors: List[str] = []
    created_at: Optional[datetime] = None


class FormPermissionsResponse(BaseModel):
    """Every form-level decision for the caller, with denial reasons."""

    form_id: str
    is_owner: bool
    can_view: bool
    view_reason: str
    can_edit: bool
    edit_reason: str
    can_view_all_responses: bool
