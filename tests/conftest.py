"""Shared fixtures: settings and fake collaborators."""

import pytest
from pydantic import SecretStr

from src.config import Settings
from src.llm.tracing import Tracer

from helpers import FakeLinkService, FakeProjectsService, FakeTasksService


@pytest.fixture
def settings():
    return Settings(
        ai_tools_enabled=True,
        llm_provider="mistral",
        llm_model="mistral-small-latest",
        llm_api_key=SecretStr("test-key"),
        environment="test",
    )


@pytest.fixture
def disabled_settings():
    return Settings(ai_tools_enabled=False, environment="test")


@pytest.fixture
def project():
    return {"id": "p1", "name": "Mobile app v2", "description": "Ship offline mode, ping ops@example.com"}


@pytest.fixture
def projects_service(project):
    return FakeProjectsService(
        projects={"p1": project},
        contributors=[{"user_id": "u1", "user": {"name": "Alex"}}],
    )


@pytest.fixture
def tasks_service():
    return FakeTasksService(tasks=[
        {"id": "t1", "title": "Set up CI", "priority": "HIGH", "status": "DONE",
         "project_id": "p1", "updated_at": "2024-01-02T00:00:00.000Z"},
        {"id": "t2", "title": "Write API doc", "priority": "LOW", "status": "TODO",
         "project_id": "p1", "updated_at": "2024-01-03T00:00:00.000Z"},
    ])


@pytest.fixture
def link_service():
    return FakeLinkService()


@pytest.fixture
def tracer():
    return Tracer()


