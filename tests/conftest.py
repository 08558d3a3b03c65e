import pytest
from fastapi.testclient import TestClient

from drafting.config import Settings
from drafting.main import create_app
from drafting.services.draft_store import InMemoryDraftStore


@pytest.fixture
def store():
    return InMemoryDraftStore()


@pytest.fixture
def app(store):
    return create_app(store=store, settings=Settings(store_backend="memory"))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def draft(client):
    response = client.post("/createDraft", json={"name": "NBA Mock", "topic": "Players"})
    assert response.status_code == 201
    return response.json()
