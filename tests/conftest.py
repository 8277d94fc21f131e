import pytest
from fastapi.testclient import TestClient

from taskmanager.config import Settings
from taskmanager.main import create_app


@pytest.fixture
def settings(tmp_path):
    # fresh database file per test
    return Settings(database_url=f"sqlite:///{tmp_path / 'tasks.db'}")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_task(client):
    """Create a task through the API and return its JSON body."""

    def _make(**fields):
        body = {"title": "task"}
        body.update(fields)
        r = client.post("/tasks", json=body)
        assert r.status_code == 201, r.text
        return r.json()

    return _make
