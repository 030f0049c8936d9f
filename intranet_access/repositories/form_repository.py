"""Read access to forms."""

from typing import List

from ..exceptions import FormNotFoundError
from ..models.form import Form
from .base import BaseRepository


class FormRepository(BaseRepository[Form]):
    model_class = Form
    not_found_error = FormNotFoundError

    def list_all(self) -> List[Form]:
        """All forms, newest first."""
        return self._base_query().order_by(Form.created_at.desc(), Form.id).all()
