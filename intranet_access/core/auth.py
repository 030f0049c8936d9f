"""Authentication module: FastAPI dependencies resolving the caller.

Public interface:
    ``require_auth`` returns AuthContext or raises 401.

When ``settings.auth_enabled`` is False it returns an anonymous
sudo context so the development workflow is unbroken.

The role config is loaded fresh on every request; the stored blob is
validated by ``RoleConfig.from_stored`` and never cached here.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import settings
from .token_factory import TokenPayload, decode_token
from ..database import get_db
from ..exceptions import AuthenticationError
from ..repositories.profile_repository import ProfileRepository
from ..schemas.role_config import RoleConfig
from ..services.decision import Subject

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Resolved caller available to every endpoint.

    Endpoints hand ``subject`` to the policy engine.
    """

    user_id: Optional[str]
    sector: Optional[str] = None
    role_config: Optional[RoleConfig] = None

    @property
    def subject(self) -> Subject:
        return Subject(user_id=self.user_id, sector=self.sector, role_config=self.role_config)


# Dev-mode caller: sudo over everything.
_ANONYMOUS = AuthContext(
    user_id="anonymous",
    sector=None,
    role_config=RoleConfig(sudo=True),
)


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Require a valid JWT and return the caller's AuthContext.

    When ``AUTH_ENABLED=false`` returns the anonymous sudo context.
    """
    if not settings.auth_enabled:
        return _ANONYMOUS

    if credentials is None:
        raise AuthenticationError("Missing authentication token")

    payload = decode_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm
    )
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    return _load_auth_context(payload, db)


def _load_auth_context(payload: TokenPayload, db: Session) -> AuthContext:
    """Load the caller's profile and role config given a decoded token payload."""
    profile = ProfileRepository(db).get_by_id_optional(payload.sub)
    if profile is None:
        raise AuthenticationError("User not found")
    if not profile.is_active:
        raise AuthenticationError("Account is deactivated")

    role_config = RoleConfig.from_stored(profile.role_config)
    if role_config is None:
        logger.info("Profile has no role config; all checks will deny", extra={"user_id": profile.user_id})

    return AuthContext(
        user_id=profile.user_id,
        sector=profile.sector,
        role_config=role_config,
    )
