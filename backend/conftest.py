import os

# Must be set before config/database are imported by the app modules.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, enable_sqlite_foreign_keys, get_db
from limiter import limiter
from mailer import MemoryTransport, get_mail_transport
from main import app

PASSWORD = "password"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def outbox():
    return MemoryTransport()


@pytest.fixture
def client(session_factory, outbox):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_transport] = lambda: outbox
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
    limiter.reset()


@pytest.fixture
def register(client, outbox):
    """Create an account and return the confirmation code that was emailed."""
    def _register(email="test@test.com", name="Saulo", password=PASSWORD):
        response = client.post("/api/auth/create-account", json={
            "name": name,
            "password": password,
            "email": email,
        })
        assert response.status_code == 201
        return outbox.last.context["token"]
    return _register


@pytest.fixture
def login_as(client, register):
    """Register, confirm and log in; returns bearer headers for the account."""
    def _login_as(email="test@test.com", password=PASSWORD):
        token = register(email=email, password=password)
        assert client.post("/api/auth/confirm-account", json={"token": token}).status_code == 200
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()}"}
    return _login_as


@pytest.fixture
def auth_headers(login_as):
    return login_as()
