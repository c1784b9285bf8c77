import os

import pytest
from fastapi.testclient import TestClient

# Point the service at an in-memory database before app modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("NODE_ENV", "test")

from core.api.main import create_app
from core.config import AppConfig
from core.db import database, models
from core.db.repositories import settings as settings_repo
from core.db.repositories import users as user_repo
from core.utils import token_crypto
from core.utils.roles import ROLE_ADMIN, ROLE_CITIZEN, ROLE_STAFF

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
TEST_JWT_SECRET = "test-secret-key-with-enough-length-for-hs256"
TEST_PASSWORD = "correct-horse-battery"


def make_config(**overrides) -> AppConfig:
    values = {
        "node_env": "test",
        "database_url": TEST_DATABASE_URL,
        "jwt_secret": TEST_JWT_SECRET,
    }
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture(scope="session", autouse=True)
def _engine():
    eng = database.connect_to_database(TEST_DATABASE_URL)
    yield eng
    eng.dispose()


@pytest.fixture(autouse=True)
def _schema(_engine):
    """Fresh schema per test."""
    models.Base.metadata.create_all(bind=_engine)
    yield
    models.Base.metadata.drop_all(bind=_engine)


@pytest.fixture
def db_session(_schema):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def app(config):
    return create_app(config)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(role: str = ROLE_CITIZEN, email: str | None = None):
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@example.com"
        return user_repo.create_user(
            db_session,
            name=f"{role.title()} {counter['n']}",
            email=email,
            password=TEST_PASSWORD,
            role=role,
        )

    return _make


def auth_headers(user, secret: str = TEST_JWT_SECRET) -> dict:
    token = token_crypto.issue_access_token(user.id, user.role, secret=secret, expires_minutes=60)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def citizen(make_user):
    return make_user(ROLE_CITIZEN)


@pytest.fixture
def staff(make_user):
    return make_user(ROLE_STAFF)


@pytest.fixture
def admin(make_user):
    return make_user(ROLE_ADMIN)


@pytest.fixture
def set_maintenance(db_session):
    def _set(enabled: bool, message: str | None = None):
        settings_repo.update_settings(
            db_session,
            maintenance_mode=enabled,
            maintenance_message=message,
            updated_by=None,
        )

    return _set


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def config_factory():
    return make_config
