"""
Pytest configuration and shared fixtures for the JurisSmart API tests
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from api_server import app  # noqa: E402
from jurissmart import users  # noqa: E402
from jurissmart.db import get_db, init_db  # noqa: E402
from jurissmart.models import ModelCallError  # noqa: E402


SAMPLE_FIR = """
FIR No. 112/2023, Police Station Saket, New Delhi.
Complainant Ravi Kumar reports that his motorcycle was stolen from outside his house
on the night of 11-03-2023. The accused, Suresh, was seen on CCTV near the spot.
Offence registered under Section 379 of the Indian Penal Code.
"""


@pytest.fixture
def sample_fir():
    """Provide sample FIR text"""
    return SAMPLE_FIR


@pytest.fixture
def fake_llm(monkeypatch):
    """
    Replace the system+user model call inside one tool module.

    Usage: calls = fake_llm(penalty, reply="{...}") or fake_llm(penalty, error="down").
    Returns the list of recorded calls.
    """
    def install(module, reply="", error=None):
        calls = []

        def fake_call(system_prompt, user_prompt, temperature=None, model_name=None):
            calls.append({"system": system_prompt, "user": user_prompt, "model_name": model_name})
            if error is not None:
                raise ModelCallError(error)
            return reply

        monkeypatch.setattr(module, "call_model_system_then_user", fake_call)
        return calls

    return install


@pytest.fixture
def db_engine():
    """In-memory SQLite shared across threads"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_engine, monkeypatch):
    """API client bound to the in-memory database"""
    # keep hashing fast in tests
    monkeypatch.setattr(users, "BCRYPT_ROUNDS", 4)
    TestingSession = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
