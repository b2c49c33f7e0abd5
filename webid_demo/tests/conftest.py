"""
Pytest configuration for webid_demo. Each test gets a fresh app and session store.
"""
import os

# Keep tests independent of the developer's environment
os.environ.pop("GOOGLE_VERIFY_ID_TOKEN", None)

import pytest
from fastapi.testclient import TestClient

from webid_demo.config import SESSION_COOKIE_NAME
from webid_demo.main import create_app
from webid_demo.session_store import InMemorySessionStore, Session
from webid_demo.sessions import sign_session_id

TEST_SECRET = "test-session-secret"
TEST_BASE_URL = "demo.example:8080"


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def app(store):
    return create_app(base_url=TEST_BASE_URL, session_store=store, session_secret=TEST_SECRET)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def login_as(client, store):
    """Seed a session in the store and attach its cookie to the client."""

    def _login(session_id: str = "sid-1", **fields) -> Session:
        session = Session(**fields)
        store.set(session_id, session)
        client.cookies.set(SESSION_COOKIE_NAME, sign_session_id(session_id, TEST_SECRET))
        return session

    return _login
