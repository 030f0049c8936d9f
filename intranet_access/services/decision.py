"""Value types shared by the policy engine.

A ``Decision`` is either allowed or denied and always carries a
machine-readable ``Reason``, so call sites can log or return why a check
went the way it did. All types here are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..schemas.role_config import RoleConfig


class Reason(str, Enum):
    """Why a decision came out the way it did."""

    # Grants
    SUDO = "sudo"
    CAPABILITY = "capability"
    ROUTE_GRANT = "route_grant"
    IMPLIED_ROUTE = "implied_route"
    NOT_TOTEM = "not_totem"
    OPEN_TO_ALL = "open_to_all"
    CREATOR = "creator"
    CO_OWNER = "co_owner"
    FORM_EDITOR = "form_editor"
    PUBLIC_FORM = "public_form"
    ALLOWED_USER = "allowed_user"
    ALLOWED_SECTOR = "allowed_sector"

    # Denials
    NO_ROLE_CONFIG = "no_role_config"
    NO_USER = "no_user"
    NO_RESOURCE = "no_resource"
    TOTEM = "totem"
    MISSING_CAPABILITY = "missing_capability"
    ROUTE_NOT_GRANTED = "route_not_granted"
    HIDDEN_FORM = "hidden_form"
    NOT_IN_ALLOW_LIST = "not_in_allow_list"
    NOT_OWNER = "not_owner"
    UNKNOWN_ACTION = "unknown_action"


@dataclass(frozen=True)
class Decision:
    """Outcome of one policy check. Truthy iff allowed."""

    allowed: bool
    reason: Reason
    detail: str = ""

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls, reason: Reason, detail: str = "") -> "Decision":
        return cls(True, reason, detail)

    @classmethod
    def deny(cls, reason: Reason, detail: str = "") -> "Decision":
        return cls(False, reason, detail)


@dataclass(frozen=True)
class Subject:
    """The caller: identity, sector, and role configuration snapshot."""

    user_id: Optional[str] = None
    sector: Optional[str] = None
    role_config: Optional[RoleConfig] = None


@dataclass(frozen=True)
class PolicyOptions:
    """Switches for form behaviors awaiting a policy decision.

    The defaults reproduce the portal as it runs today.

    Attributes:
        filter_listing_per_item: Apply the per-form view check when listing
            forms instead of returning the whole collection.
        edit_inherits_view_access: Let a caller with no edit grant fall
            through to the view rule, which makes non-private forms editable.
    """

    filter_listing_per_item: bool = False
    edit_inherits_view_access: bool = True


DEFAULT_OPTIONS = PolicyOptions()
