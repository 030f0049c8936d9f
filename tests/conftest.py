"""Shared test fixtures for the access service test suite.

Tests run against a throwaway SQLite file with authentication enabled, so
every request goes through token verification and profile loading. Tables
are emptied before each test.
"""

import os
import tempfile

# Force test settings before any package imports.
_DB_PATH = os.path.join(tempfile.gettempdir(), f"intranet_access_test_{os.getpid()}.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["AUTH_ENABLED"] = "true"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["LOG_FORMAT"] = "text"
os.environ["ENVIRONMENT"] = "development"
os.environ.pop("FORM_LISTING_PER_ITEM", None)
os.environ.pop("FORM_EDIT_INHERITS_VIEW_ACCESS", None)

import pytest
from fastapi.testclient import TestClient

from intranet_access.database import get_db, SessionLocal
from intranet_access.main import app
from intranet_access.core.config import settings
from intranet_access.core.token_factory import create_token
from intranet_access.models import Form, UserProfile


@pytest.fixture(autouse=True)
def _clean_tables():
    """Empty all tables before each test."""
    db = SessionLocal()
    try:
        db.query(Form).delete()
        db.query(UserProfile).delete()
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """FastAPI TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def make_profile(db):
    """Factory inserting a user profile with the given role config blob."""

    def _make(user_id: str, role_config=None, sector=None, is_active=True) -> UserProfile:
        profile = UserProfile(
            user_id=user_id,
            email=f"{user_id}@example.com",
            sector=sector,
            role_config=role_config,
            is_active=is_active,
        )
        db.add(profile)
        db.commit()
        return profile

    return _make


@pytest.fixture()
def make_form(db):
    """Factory inserting a form owned by ``user_id``."""

    def _make(form_id: str, user_id: str, **overrides) -> Form:
        fields = {
            "title": f"Form {form_id}",
            "owner_ids": [],
            "is_private": False,
            "allowed_users": [],
            "allowed_sectors": [],
        }
        fields.update(overrides)
        form = Form(id=form_id, user_id=user_id, **fields)
        db.add(form)
        db.commit()
        return form

    return _make


@pytest.fixture()
def auth_headers_for():
    """Build bearer headers for a user id."""

    def _headers(user_id: str) -> dict:
        token = create_token(subject=user_id, secret=settings.jwt_secret_key)
        return {"Authorization": f"Bearer {token}"}

    return _headers
