"""
Pytest fixtures for profile service tests.

Each test gets a fresh in-memory SQLite database built from the ORM models.
"""

import os

# Settings are cached on first use; pin them before any app import
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-signing-key-0123456789-abcdefghijklmnop")

import pytest  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import core.models  # noqa: E402,F401
from core.db import Base  # noqa: E402
from core.models import User  # noqa: E402


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh test database for each test."""
    db_url = "sqlite://"
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_foreign_keys)

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield db_url, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def _create_test_user(session, name="Test User", email="test@example.com", avatar_url=None):
    """Helper to create a user row and return it."""
    user = User(
        name=name,
        email=email,
        avatar_url=avatar_url or "https://example.com/avatar.png",
    )
    session.add(user)
    session.flush()
    return user


@pytest.fixture
def owner(test_session):
    """A committed user that can own a profile."""
    user = _create_test_user(test_session)
    test_session.commit()
    return user


@pytest.fixture
def sample_profile_payload():
    """Request body for creating a full profile."""
    return {
        "website": "https://a.com",
        "status": "Developer",
        "skills": "go, rust",
        "youtube": "https://youtube.com/@dev",
        "linkedin": "https://linkedin.com/in/dev",
    }


@pytest.fixture
def sample_experience():
    return {
        "title": "Engineer",
        "company": "Acme",
        "description": "Built things",
        "from": "2020",
    }


@pytest.fixture
def sample_education():
    return {
        "school": "State University",
        "degree": "BSc",
        "fieldofstudy": "Computer Science",
        "from": "2014",
        "to": "2018",
    }


@pytest.fixture
def make_user(test_session):
    """Factory fixture creating flushed users with distinct emails."""
    counter = {"n": 0}

    def _make(name="Test User", email=None, avatar_url=None):
        counter["n"] += 1
        return _create_test_user(
            test_session,
            name=name,
            email=email or f"user{counter['n']}@example.com",
            avatar_url=avatar_url,
        )

    return _make
