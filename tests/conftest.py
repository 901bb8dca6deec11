"""
Test fixtures for the QuizApp backend.

Provides db, client and user factory fixtures over an in-memory SQLite
database that is rebuilt for every test. Rate limiting is switched off and
bcrypt runs with the minimum cost so signups stay fast.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("SENTRY_DSN", None)
os.environ.pop("GEMINI_API_KEY", None)

import pytest
from fastapi.testclient import TestClient

from quizapp.core.database import Base, SessionLocal, engine, get_db
from quizapp.core.security import get_password_hash
from quizapp.main import app
from quizapp.models import User


@pytest.fixture
def db():
    """Fresh schema and session for each test."""
    from quizapp import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """Test client whose requests share the test's session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Factory inserting users directly, bypassing signup."""
    counter = {"n": 0}

    def _make_user(username=None, fullname=None, password="secret", **fields):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        user = User(
            username=username,
            fullname=fullname or username.title(),
            email=f"{username}@example.com",
            hashed_password=get_password_hash(password),
            **fields,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def sample_quiz_payload():
    return {
        "title": "Capitals",
        "description": "European capitals",
        "category": "Geography",
        "difficulty": "easy",
        "duration": 5,
        "tags": ["geo"],
        "isPublic": True,
        "questions": [
            {
                "id": "1",
                "question": "Capital of France?",
                "options": [
                    {"id": "a", "text": "Paris"},
                    {"id": "b", "text": "Lyon"},
                ],
                "correctOptionId": "a",
            }
        ],
    }
