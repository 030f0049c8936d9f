"""Forms API: listing, detail, and per-form permission decisions.

Listing and detail are gated by the policy engine; the form bodies
themselves are served by the portal's form service.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..core.guards import enforce, policy_options, require_action
from ..database import get_db
from ..models.form import Form
from ..repositories.form_repository import FormRepository
from ..schemas.form import FormDescriptor, FormPermissionsResponse, FormResponse
from ..services.form_access import get_accessible_forms, is_form_owner
from ..services.permission_service import Action, evaluate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/forms", tags=["forms"])


def _descriptor(form: Form) -> FormDescriptor:
    return FormDescriptor.model_validate(form)


@router.get("", response_model=List[FormResponse])
def list_forms(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(
        require_action(Action.VIEW_FORMS, "Forms are not available for this account")
    ),
):
    """List forms visible to the caller.

    Privacy is enforced per item only when ``FORM_LISTING_PER_ITEM`` is on;
    otherwise it is enforced when a single form is opened.
    """
    forms = FormRepository(db).list_all()
    return get_accessible_forms(
        auth.role_config,
        forms,
        user_id=auth.user_id,
        sector=auth.sector,
        options=policy_options(),
    )


@router.get("/{form_id}", response_model=FormResponse)
def get_form(
    form_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    form = FormRepository(db).get_by_id(form_id)
    enforce(
        evaluate(auth.subject, Action.VIEW_FORM, _descriptor(form)),
        auth,
        Action.VIEW_FORM,
        "You do not have access to this form",
    )
    return form


@router.get("/{form_id}/permissions", response_model=FormPermissionsResponse)
def get_form_permissions(
    form_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """View, edit, and response-scope decisions for the caller on one form."""
    descriptor = _descriptor(FormRepository(db).get_by_id(form_id))
    subject = auth.subject
    options = policy_options()

    view = evaluate(subject, Action.VIEW_FORM, descriptor, options)
    edit = evaluate(subject, Action.EDIT_FORM, descriptor, options)
    responses = evaluate(subject, Action.VIEW_ALL_FORM_RESPONSES, descriptor, options)

    return FormPermissionsResponse(
        form_id=descriptor.id,
        is_owner=is_form_owner(auth.user_id, descriptor),
        can_view=view.allowed,
        view_reason=view.reason.value,
        can_edit=edit.allowed,
        edit_reason=edit.reason.value,
        can_view_all_responses=responses.allowed,
    )
