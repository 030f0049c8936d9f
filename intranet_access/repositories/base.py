"""Shared primary-key lookups for the read-only repositories."""

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from ..database import Base
from ..exceptions import PortalException

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Lookup by primary key for one SQLAlchemy model.

    Subclasses set ``model_class``, ``not_found_error`` and, when the key
    column is not ``id``, ``id_column``.
    """

    model_class: Type[ModelT]
    id_column: str = "id"
    not_found_error: Type[PortalException]

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        return self.db.query(self.model_class)

    def _by_id(self, entity_id: str) -> Query:
        return self._base_query().filter(getattr(self.model_class, self.id_column) == entity_id)

    def get_by_id_optional(self, entity_id: str) -> Optional[ModelT]:
        return self._by_id(entity_id).first()

    def get_by_id(self, entity_id: str) -> ModelT:
        """Like ``get_by_id_optional`` but raises ``not_found_error`` on a miss."""
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise self.not_found_error(entity_id)
        return entity
