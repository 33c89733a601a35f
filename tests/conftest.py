"""Shared test fixtures."""

import os

# Settings are read at import time
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_SECRET", "test-session-secret-0123456789abcdef")
os.environ.setdefault("APP_URL", "http://testserver")

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from reqanalyst import models  # noqa: E402, F401
from reqanalyst.database import Base, get_db  # noqa: E402
from reqanalyst.dependencies.auth import get_email_service, get_generation_service  # noqa: E402
from reqanalyst.main import app  # noqa: E402
from reqanalyst.rate_limiter import limiter  # noqa: E402
from reqanalyst.services.auth import SessionCodec  # noqa: E402
from reqanalyst.services.email_service import EmailResult, EmailService  # noqa: E402
from reqanalyst.services.generation import GenerationService  # noqa: E402

TEST_SECRET = os.environ["SESSION_SECRET"]


def register_user(
    test_client: TestClient, email: str, password: str, name: str = "Test User"
) -> dict:
    """Helper to register a user through the API. The client keeps the session cookie."""
    response = test_client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def db_session_maker():
    """Session factory bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def db(db_session_maker):
    """A database session for service-level tests."""
    session = db_session_maker()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def email_service():
    """Email service double that records reset links instead of sending them."""
    service = MagicMock(spec=EmailService)
    service.send_password_reset_email.return_value = EmailResult(success=True)
    return service


@pytest.fixture
def generation_service():
    """Generation service double."""
    return MagicMock(spec=GenerationService)


@pytest.fixture
def session_codec():
    return SessionCodec(secret=TEST_SECRET)


@pytest.fixture
def auth_client(db_session_maker, email_service, generation_service):
    """Create test client with in-memory database and collaborator doubles.

    Yields a tuple of (TestClient, SessionMaker) for use in tests.
    """
    limiter.reset()

    def override_get_db():
        db = db_session_maker()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_generation_service] = lambda: generation_service

    with TestClient(app) as test_client:
        yield test_client, db_session_maker

    app.dependency_overrides.clear()
