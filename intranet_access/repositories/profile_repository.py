"""Read access to user profiles."""

from ..exceptions import UserNotFoundError
from ..models.user import UserProfile
from .base import BaseRepository


class ProfileRepository(BaseRepository[UserProfile]):
    model_class = UserProfile
    id_column = "user_id"
    not_found_error = UserNotFoundError
