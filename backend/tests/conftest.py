import pytest
from fastapi.testclient import TestClient
from chatbot.core.config import Settings
from chatbot.main import create_app
from chatbot.services.identity_store import IdentityStore
from chatbot.services.project_store import ProjectStore
from chatbot.services.reply_composer import ReplyComposer
from chatbot.services.session_store import SessionStore


@pytest.fixture
def identity():
    return IdentityStore()


@pytest.fixture
def sessions():
    return SessionStore()


@pytest.fixture
def projects():
    return ProjectStore()


@pytest.fixture
def composer(projects):
    return ReplyComposer(projects)


@pytest.fixture
def client():
    # No seed data, so ids in tests start at 1
    app = create_app(Settings(SEED_DEMO_DATA=False))
    return TestClient(app)


@pytest.fixture
def seeded_client():
    return TestClient(create_app(Settings(SEED_DEMO_DATA=True)))


@pytest.fixture
def login(client):
    """Register (if needed) and log in, returning auth headers"""
    def _login(email="a@b.com", password="pw1", name="Alice"):
        client.post("/auth/register", json={"email": email, "password": password, "name": name})
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login
