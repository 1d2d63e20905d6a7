"""Pytest fixtures and configuration for tdreport tests."""

import pytest
from unittest.mock import MagicMock

from tdreport.integrations.todoist import TodoistClient
from tdreport.models.project import Label, Project
from tdreport.models.task import Task


@pytest.fixture(autouse=True)
def isolate_token(monkeypatch, tmp_path):
    """Never read a real token from the environment or the working directory."""
    monkeypatch.setenv("TODOIST_API_TOKEN", "test_api_token_value")
    monkeypatch.setenv("TODOIST_TOKEN_FILE", str(tmp_path / "missing.token"))
    monkeypatch.delenv("TODOIST_TIMEOUT_SEC", raising=False)


@pytest.fixture
def sample_project_base():
    """Base project data; override fields as needed."""
    return {
        "id": "1",
        "name": "Work",
        "order": 0,
        "color": "berry_red",
        "parent_id": None,
    }


@pytest.fixture
def sample_label_base():
    """Base label data; override fields as needed."""
    return {
        "id": "10",
        "name": "urgent",
        "order": 0,
        "color": "red",
    }


@pytest.fixture
def sample_task_base():
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": "100",
        "project_id": "1",
        "content": "Test Task",
        "description": "",
        "priority": 1,
        "order": 0,
        "label_ids": [],
        "due": None,
    }


@pytest.fixture
def make_task(sample_task_base):
    """Factory building a Task from the base data plus overrides."""
    def _make(**overrides) -> Task:
        return Task(**{**sample_task_base, **overrides})
    return _make


@pytest.fixture
def make_project(sample_project_base):
    def _make(**overrides) -> Project:
        return Project(**{**sample_project_base, **overrides})
    return _make


@pytest.fixture
def scenario_projects():
    """Two top-level projects: Work before Home."""
    return [
        Project(id=1, name="Work", order=0, color=30),
        Project(id=2, name="Home", order=1, color="blue"),
    ]


@pytest.fixture
def scenario_labels():
    return [Label(id=10, name="urgent", order=0, color="red")]


@pytest.fixture
def scenario_tasks():
    """One urgent undated Work task, one normal dated Home task labelled "urgent"."""
    return [
        Task(id=100, project_id=1, content="Ship release", priority=4, order=0, label_ids=[], due=None),
        Task(
            id=101,
            project_id=2,
            content="Water plants",
            priority=1,
            order=0,
            label_ids=[10],
            due={"date": "2024-06-01", "string": "Jun 1"},
        ),
    ]


@pytest.fixture
def fake_client(scenario_projects, scenario_labels, scenario_tasks):
    """A TodoistClient stand-in returning the scenario entities."""
    client = MagicMock(spec=TodoistClient)
    client.get_all_projects.return_value = scenario_projects
    client.get_all_labels.return_value = scenario_labels
    client.get_active_tasks.return_value = scenario_tasks
    client.get_all_shared_labels.return_value = ["Shared Label 1", "Shared Label 2"]
    client.get_task_comments.return_value = []
    return client


@pytest.fixture
def test_client(fake_client):
    """Create a FastAPI test client with the Todoist client dependency overridden."""
    from fastapi.testclient import TestClient
    from tdreport.api.app import app, get_todoist_client

    def override_get_todoist_client():
        yield fake_client

    app.dependency_overrides[get_todoist_client] = override_get_todoist_client

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
