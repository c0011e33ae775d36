from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from todo_flow.config import Settings
from todo_flow.task_store import TaskStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TODO_FLOW_* variables from the developer shell out of tests."""
    for name in (
        "TODO_FLOW_ENV",
        "TODO_FLOW_LOG_LEVEL",
        "TODO_FLOW_SEED_FILE",
        "TODO_FLOW_UNIQUE_USERNAMES",
        "TODO_FLOW_ALLOWED_FRONTEND",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store():
    return TaskStore()


@pytest.fixture
def client(store):
    app = create_app(settings=Settings(environment="test"), store=store)
    return TestClient(app)
