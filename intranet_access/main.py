"""FastAPI application for the intranet access service."""

import logging
import re
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import __version__
from . import models  # noqa: F401  (registers tables on Base.metadata)
from .api import access_router, forms_router
from .core.config import settings, ConfigurationError, Environment
from .core.logging_config import setup_logging
from .database import engine, Base, get_db, is_postgresql, DATABASE_URL
from .exceptions import PortalException
from .middleware.exception_handler import portal_exception_handler
from .middleware.request_context import RequestContextMiddleware

setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)

API_NAME = "Intranet Access API"


def _mask_url(url: str) -> str:
    """Hide the password part of a database URL."""
    return re.sub(r"://([^:/@]+):[^@]+@", r"://\1:***@", url)


def _ensure_tables() -> None:
    """Create missing tables.

    Profiles and forms belong to the portal; in production the tables already
    exist and this is a no-op. It matters for local development and tests.
    """
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.critical(
            "Profile store unreachable",
            extra={"database_url": _mask_url(DATABASE_URL), "error": str(e)},
        )
        raise SystemExit(1) from e


_ensure_tables()


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        settings.validate_production_config()
    except ConfigurationError as e:
        logger.critical(f"STARTUP BLOCKED: {e}")
        raise SystemExit(1) from e

    if settings.environment == Environment.DEVELOPMENT:
        for problem in settings.insecure_settings():
            logger.warning(f"SECURITY: {problem}")

    logger.info(
        "Form policy switches",
        extra={
            "listing_per_item": settings.form_listing_per_item,
            "edit_inherits_view_access": settings.form_edit_inherits_view_access,
        },
    )
    yield


app = FastAPI(
    title=API_NAME,
    description=(
        "Access-control decisions for the intranet portal: capabilities, "
        "admin route grants, and form privacy.\n\n"
        "With `AUTH_ENABLED=true` every endpoint except `/` and `/health` needs "
        "a `Bearer` token whose subject is a portal user id. With "
        "`AUTH_ENABLED=false` (the default) requests run as an anonymous sudo user."
    ),
    version=__version__,
    lifespan=lifespan,
)

# Read-only API: browsers only ever need GET.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(RequestContextMiddleware)
app.add_exception_handler(PortalException, portal_exception_handler)

app.include_router(access_router)
app.include_router(forms_router)

logger.info(
    "%s %s started | env=%s | db=%s | auth=%s",
    API_NAME,
    __version__,
    settings.environment.value,
    "PostgreSQL" if is_postgresql() else "SQLite",
    "enabled" if settings.auth_enabled else "disabled",
)

_started_at = time.monotonic()


@app.get("/")
def root():
    return {"name": API_NAME, "version": __version__, "status": "running"}


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Liveness plus a profile store probe. Always 200 so probes never see 5xx."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except SQLAlchemyError:
        logger.warning("Health check: profile store query failed", exc_info=True)
        db_status = "error"

    return {
        "status": "healthy" if db_status == "ok" else "degraded",
        "db": db_status,
        "uptime_seconds": round(time.monotonic() - _started_at),
        "version": __version__,
    }
