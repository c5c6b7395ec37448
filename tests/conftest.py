import os

import pytest
from fastapi.testclient import TestClient

# Tests build their own stores; keep the default one empty
os.environ.setdefault("SEED_SAMPLE_TASKS", "false")

from src.tasks_api.main import app  # noqa: E402
from src.tasks_api.repositories import InMemoryTaskRepository, get_repository  # noqa: E402
from src.tasks_client.api import TasksAPI  # noqa: E402


@pytest.fixture()
def repo() -> InMemoryTaskRepository:
    """A fresh, empty store per test."""
    return InMemoryTaskRepository()


@pytest.fixture()
def client(repo: InMemoryTaskRepository):
    """HTTP client for the app, wired to the per-test store."""
    app.dependency_overrides[get_repository] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def live_api(client: TestClient) -> TasksAPI:
    """TasksAPI talking to the in-process app."""
    return TasksAPI(TestClient(app, base_url="http://testserver/api"))
