"""
Shared fixtures: an in-memory database per test, the FastAPI app wired to it,
and helpers that register users through the API.
"""
import os

# must be set before config.settings is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")
for _name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"):
    os.environ.pop(_name, None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.seed_admin import seed_admin
from database.session import Base, get_db, init_db
from main import create_app

PASSWORD = "secret123"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def app(session_factory):
    application = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """register(role, email=..., name=...) -> auth body with token."""
    def _register(role, email=None, name=None, password=PASSWORD):
        email = email or f"{role}@acme.com"
        name = name or role.title()
        r = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password, "role": role},
        )
        assert r.status_code == 201, r.text
        return r.json()
    return _register


@pytest.fixture
def admin(client, session_factory):
    """Admin created the way operators do it, then logged in."""
    db = session_factory()
    try:
        seed_admin(db, "Admin", "admin@acme.com", PASSWORD)
    finally:
        db.close()
    r = client.post(
        "/api/auth/login",
        json={"email": "admin@acme.com", "password": PASSWORD, "role": "admin"},
    )
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def manufacturer(register):
    return register("manufacturer", email="maker@acme.com", name="Maker One")


def save_profile(client, token, **fields):
    r = client.post("/api/company", json=fields, headers=auth(token))
    assert r.status_code in (200, 201), r.text
    return r.json()
