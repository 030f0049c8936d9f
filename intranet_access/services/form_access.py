"""Form-level access rules and collection filtering.

Precedence, highest first:

    missing config / user / form  → deny
    sudo                          → allow
    TOTEM account                 → deny
    creator or co-owner           → allow (privacy and hidden list ignored)
    non-private form              → allow
    form in caller's hidden list  → deny
    caller or sector allow-listed → allow
    otherwise                     → deny

Edit adds one rung below ownership: users who may create forms may edit
any form. The functions accept ``FormDescriptor`` values or ORM rows with
the same attribute names.
"""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar

from ..schemas.form import FormDescriptor
from ..schemas.role_config import RoleConfig
from .decision import DEFAULT_OPTIONS, Decision, PolicyOptions, Reason

FormT = TypeVar("FormT")


def is_form_owner(user_id: Optional[str], form: Optional[FormDescriptor]) -> bool:
    """True when *user_id* created the form or is listed as a co-owner."""
    if not user_id or form is None:
        return False
    return user_id == form.user_id or user_id in (form.owner_ids or ())


def _identity_gate(
    cfg: Optional[RoleConfig],
    user_id: Optional[str],
    form: Optional[FormDescriptor],
) -> Optional[Decision]:
    """Shared head of every form rule. Returns a decision or None to continue."""
    if cfg is None:
        return Decision.deny(Reason.NO_ROLE_CONFIG)
    if not user_id:
        return Decision.deny(Reason.NO_USER)
    if form is None:
        return Decision.deny(Reason.NO_RESOURCE)
    if cfg.sudo:
        return Decision.allow(Reason.SUDO)
    if cfg.is_totem:
        return Decision.deny(Reason.TOTEM)
    if user_id == form.user_id:
        return Decision.allow(Reason.CREATOR)
    if user_id in (form.owner_ids or ()):
        return Decision.allow(Reason.CO_OWNER)
    return None


def _privacy_check(
    cfg: RoleConfig,
    form_id: str,
    user_id: str,
    form: FormDescriptor,
    sector: Optional[str],
) -> Decision:
    if not form.is_private:
        return Decision.allow(Reason.PUBLIC_FORM)
    if form_id in cfg.hidden_forms:
        return Decision.deny(Reason.HIDDEN_FORM, form_id)
    if user_id in (form.allowed_users or ()):
        return Decision.allow(Reason.ALLOWED_USER)
    if sector and sector in (form.allowed_sectors or ()):
        return Decision.allow(Reason.ALLOWED_SECTOR, sector)
    return Decision.deny(Reason.NOT_IN_ALLOW_LIST)


def form_view_decision(
    cfg: Optional[RoleConfig],
    form_id: Optional[str],
    user_id: Optional[str],
    form: Optional[FormDescriptor],
    sector: Optional[str] = None,
) -> Decision:
    """Decide whether the caller may open a form."""
    gate = _identity_gate(cfg, user_id, form)
    if gate is not None:
        return gate
    return _privacy_check(cfg, form_id or form.id, user_id, form, sector)


def form_edit_decision(
    cfg: Optional[RoleConfig],
    user_id: Optional[str],
    form_id: Optional[str],
    form: Optional[FormDescriptor],
    sector: Optional[str] = None,
    options: PolicyOptions = DEFAULT_OPTIONS,
) -> Decision:
    """Decide whether the caller may edit a form.

    Without an ownership or creation grant the caller falls through to the
    view rule, so a non-private form is editable by any non-TOTEM user.
    ``options.edit_inherits_view_access=False`` turns that fallthrough into
    a denial.
    """
    gate = _identity_gate(cfg, user_id, form)
    if gate is not None:
        return gate
    if cfg.can_create_form:
        return Decision.allow(Reason.FORM_EDITOR)
    if not options.edit_inherits_view_access:
        return Decision.deny(Reason.NOT_OWNER)
    return _privacy_check(cfg, form_id or form.id, user_id, form, sector)


def responses_scope_decision(
    cfg: Optional[RoleConfig],
    user_id: Optional[str],
    form: Optional[FormDescriptor],
) -> Decision:
    """Decide whether the caller sees every response to a form.

    Owners and co-owners see all responses; everyone else only their own.
    """
    gate = _identity_gate(cfg, user_id, form)
    if gate is not None:
        return gate
    return Decision.deny(Reason.NOT_OWNER)


def can_access_form(
    cfg: Optional[RoleConfig],
    form_id: Optional[str],
    user_id: Optional[str],
    form: Optional[FormDescriptor],
    sector: Optional[str] = None,
) -> bool:
    return form_view_decision(cfg, form_id, user_id, form, sector).allowed


def can_edit_form(
    cfg: Optional[RoleConfig],
    user_id: Optional[str],
    form_id: Optional[str],
    form: Optional[FormDescriptor],
    sector: Optional[str] = None,
    options: PolicyOptions = DEFAULT_OPTIONS,
) -> bool:
    return form_edit_decision(cfg, user_id, form_id, form, sector, options).allowed


def can_view_all_responses(
    cfg: Optional[RoleConfig],
    user_id: Optional[str],
    form: Optional[FormDescriptor],
) -> bool:
    return responses_scope_decision(cfg, user_id, form).allowed


def can_view_response(
    cfg: Optional[RoleConfig],
    user_id: Optional[str],
    form: Optional[FormDescriptor],
    author_id: Optional[str],
) -> bool:
    """A single response is visible to form owners and to its own author."""
    scope = responses_scope_decision(cfg, user_id, form)
    if scope.allowed:
        return True
    if scope.reason in (Reason.NO_ROLE_CONFIG, Reason.NO_USER, Reason.NO_RESOURCE, Reason.TOTEM):
        return False
    return author_id is not None and author_id == user_id


# -- Collections ----------------------------------------------------------

def filter_accessible_forms(
    cfg: Optional[RoleConfig],
    forms: Iterable[FormT],
    user_id: Optional[str],
    sector: Optional[str] = None,
) -> list[FormT]:
    """Keep only the forms the caller may open, preserving order."""
    if cfg is None:
        return []
    return [f for f in forms if can_access_form(cfg, f.id, user_id, f, sector)]


def get_accessible_forms(
    cfg: Optional[RoleConfig],
    forms: Iterable[FormT],
    user_id: Optional[str] = None,
    sector: Optional[str] = None,
    options: PolicyOptions = DEFAULT_OPTIONS,
) -> list[FormT]:
    """Forms to show in a listing.

    By default only TOTEM accounts are filtered (they get nothing); every
    other caller receives the whole collection and privacy is enforced when
    a single form is opened. With ``options.filter_listing_per_item`` the
    per-form view rule is applied here as well.
    """
    if cfg is None:
        return []
    if cfg.sudo:
        return list(forms)
    if cfg.is_totem:
        return []
    if options.filter_listing_per_item:
        return filter_accessible_forms(cfg, forms, user_id, sector)
    return list(forms)
