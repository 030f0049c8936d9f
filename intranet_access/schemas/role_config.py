"""Role configuration schema: the per-user permission record.

The profile store hands us a loose JSON blob. This module is the single
place where that blob becomes a typed, immutable value: every field gets an
explicit default, older nested layouts are lifted to the flat one, and a
record that cannot be validated degrades to a locked-down config.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)

# Flags that older profiles stored under nested "forms" / "content" objects.
_LEGACY_NESTED_FIELDS: dict[str, tuple[str, ...]] = {
    "forms": ("can_create_form", "hidden_forms"),
    "content": ("can_create_event", "can_create_flyer", "can_create_booking"),
}


class RoleConfig(BaseModel):
    """Permission record for one user. Read-only for the policy engine."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    # Only JSON true/false are flags; "yes", 1 and the like fail validation.
    sudo: StrictBool = False
    is_totem: StrictBool = Field(default=False, alias="isTotem")
    admin_pages: frozenset[str] = frozenset()

    can_create_form: StrictBool = False
    can_create_event: StrictBool = False
    can_create_flyer: StrictBool = False
    can_create_booking: StrictBool = False
    can_create_solicitacoes: StrictBool = False
    can_locate_cars: StrictBool = False
    can_view_dre_report: StrictBool = False
    can_manage_extensions: StrictBool = False
    can_manage_quality_management: StrictBool = False
    can_manage_produtos: StrictBool = False
    can_manage_dados_basicos_users: StrictBool = False
    can_view_add_manual_ped: StrictBool = False

    hidden_forms: frozenset[str] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def lift_legacy_layout(cls, data: Any) -> Any:
        """Copy flags from the nested legacy layout when the flat key is absent."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for container, fields in _LEGACY_NESTED_FIELDS.items():
            nested = data.get(container)
            if not isinstance(nested, dict):
                continue
            for name in fields:
                if name not in data and name in nested:
                    data[name] = nested[name]
        return data

    @field_validator(
        "sudo", "is_totem", "can_create_form", "can_create_event", "can_create_flyer",
        "can_create_booking", "can_create_solicitacoes", "can_locate_cars",
        "can_view_dre_report", "can_manage_extensions", "can_manage_quality_management",
        "can_manage_produtos", "can_manage_dados_basicos_users", "can_view_add_manual_ped",
        mode="before",
    )
    @classmethod
    def null_flag_is_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("admin_pages", "hidden_forms", mode="before")
    @classmethod
    def normalize_id_set(cls, v: Any) -> Any:
        """Null becomes empty; non-string entries are dropped."""
        if v is None:
            return frozenset()
        if isinstance(v, (list, tuple, set, frozenset)):
            return frozenset(item for item in v if isinstance(item, str))
        return v

    @classmethod
    def locked_down(cls) -> "RoleConfig":
        """Config used when a stored record is unreadable: kiosk mode, no grants."""
        return cls(is_totem=True)

    @classmethod
    def from_stored(cls, raw: Any) -> Optional["RoleConfig"]:
        """Build a RoleConfig from whatever the profile store returned.

        Returns ``None`` when there is no record at all, so callers fail
        closed. Invalid records never raise; they become :meth:`locked_down`.
        """
        if raw is None:
            return None
        if isinstance(raw, RoleConfig):
            return raw
        if not isinstance(raw, dict):
            logger.warning(
                "Role config is not an object; using locked-down config",
                extra={"raw_type": type(raw).__name__},
            )
            return cls.locked_down()
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                "Role config failed validation; using locked-down config",
                extra={"errors": e.error_count()},
            )
            return cls.locked_down()
