"""Service settings, read from the environment and an optional ``.env`` file."""

from enum import Enum
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

INSECURE_JWT_SECRET = "dev-insecure-key-change-me"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("json", "text")


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ConfigurationError(Exception):
    """Settings are unsafe for the environment they run in."""


class Settings(BaseSettings):
    """All runtime knobs of the access service.

    The two ``form_*`` switches select between the portal's current form
    behavior (the defaults) and the stricter variant, without touching the
    policy engine.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    environment: Environment = Environment.DEVELOPMENT

    # Comma-separated list; "*" is refused.
    cors_allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Browser origins allowed to call the API",
    )

    # Profiles and forms are owned by the portal; this service only reads them.
    database_url: str = Field(
        default="sqlite:///./intranet_access.db",
        description="Profile store connection URL",
    )

    jwt_secret_key: str = Field(default=INSECURE_JWT_SECRET, description="HS256 signing key")
    jwt_algorithm: str = "HS256"
    # Off: every request runs as an anonymous sudo caller.
    auth_enabled: bool = Field(default=False, description="Verify bearer tokens")

    form_listing_per_item: bool = Field(
        default=False,
        description="Filter form listings with the per-form view check",
    )
    form_edit_inherits_view_access: bool = Field(
        default=True,
        description="Let callers without an edit grant fall through to the view rule",
    )

    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in _LOG_FORMATS:
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return fmt

    def get_cors_origins(self) -> List[str]:
        """Parsed ``cors_allowed_origins``.

        Raises:
            ValueError: If the list contains the ``*`` wildcard.
        """
        origins = [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]
        if "*" in origins:
            raise ValueError("CORS_ALLOWED_ORIGINS may not contain '*'; list the portal origins")
        return origins

    def insecure_settings(self) -> List[str]:
        """Human-readable list of settings that must not reach production."""
        problems = []
        if self.jwt_secret_key == INSECURE_JWT_SECRET:
            problems.append("JWT_SECRET_KEY is the built-in default (generate one: openssl rand -hex 32)")
        if not self.auth_enabled:
            problems.append("AUTH_ENABLED is false, so every caller is treated as sudo")
        return problems

    def validate_production_config(self) -> None:
        """Refuse to start in production with insecure settings.

        Development only gets warnings, logged by ``main``.

        Raises:
            ConfigurationError: In production, when ``insecure_settings`` is non-empty.
        """
        problems = self.insecure_settings()
        if problems and self.environment == Environment.PRODUCTION:
            raise ConfigurationError(
                "Production configuration is insecure:\n  - " + "\n  - ".join(problems)
            )


settings = Settings()
