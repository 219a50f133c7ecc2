"""Tests for the HTTP surface."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.llm.factory import ProviderFactory
from src.llm.providers import MistralProvider

from helpers import FakeTasksService, ScriptedClient, tasks_json


class TimeoutClient:
    async def ainvoke(self, messages):
        raise TimeoutError()


def build_app(settings, projects_service, tasks_service, link_service, client):
    provider = MistralProvider(settings, client=client)
    return create_app(
        settings,
        projects_service=projects_service,
        tasks_service=tasks_service,
        link_service=link_service,
        factory=ProviderFactory(settings, provider=provider),
    )


@pytest.fixture
def scripted():
    return ScriptedClient([])


@pytest.fixture
async def client(settings, projects_service, tasks_service, link_service, scripted):
    app = build_app(settings, projects_service, tasks_service, link_service, scripted)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["ai_tools_enabled"] is True
    assert "version" in data


@pytest.mark.asyncio
async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["service"] == "taskpilot-ai"


@pytest.mark.asyncio
async def test_generate_tasks(client, scripted):
    scripted.responses.append(tasks_json("Design form", "Wire API", "Write tests"))

    resp = await client.post(
        "/ai/tools/generate_tasks_from_requirement",
        json={"prompt": "Build a login page", "projectId": "p1"},
        headers={"X-User-Id": "u1", "X-Locale": "fr"},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert [t["title"] for t in data["tasks"]] == ["Design form", "Wire API", "Write tests"]
    assert data["meta"]["locale"] == "fr"
    assert data["meta"]["degraded"] is False


@pytest.mark.asyncio
async def test_generate_tasks_rejects_long_prompt(client):
    resp = await client.post("/ai/tools/generate_tasks_from_requirement", json={"prompt": "x" * 501})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_preview_and_confirm(client, scripted, tasks_service, link_service):
    scripted.responses.extend([
        tasks_json("A", "B", "C"),
        json.dumps([{"sourceTask": "task_1", "targetTask": "task_2", "type": "BLOCKS"}]),
    ])

    preview = await client.post(
        "/ai/tools/generate_task_relationships_preview",
        json={"prompt": "Auth", "projectId": "p1"},
    )
    assert preview.status_code == 200
    body = preview.json()
    assert body["meta"]["placeholderMode"] is True
    assert body["relationships"] == [{"sourceTask": "task_1", "targetTask": "task_2", "type": "BLOCKS"}]

    confirm = await client.post(
        "/ai/tools/confirm_task_relationships",
        json={"projectId": "p1", "tasks": body["tasks"], "relationships": body["relationships"]},
    )
    assert confirm.status_code == 200
    result = confirm.json()
    assert result["createdLinks"] == 1
    assert result["relationships"][0]["sourceTaskId"] == "id-1"
    assert len(link_service.created) == 1


@pytest.mark.asyncio
async def test_disabled_returns_503(disabled_settings, projects_service, tasks_service, link_service):
    app = build_app(disabled_settings, projects_service, tasks_service, link_service, ScriptedClient([]))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post("/ai/tools/generate_tasks_from_requirement", json={"prompt": "x"})
    assert resp.status_code == 503
    assert resp.json()["code"] == "AI_DISABLED"


@pytest.mark.asyncio
async def test_provider_timeout_returns_504(settings, projects_service, link_service):
    app = build_app(settings, projects_service, FakeTasksService(), link_service, TimeoutClient())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post("/ai/tools/generate_tasks_from_requirement", json={"prompt": "x"})
    assert resp.status_code == 504
    assert resp.json()["code"] == "AI_PROVIDER_TIMEOUT"


@pytest.mark.asyncio
async def test_deterministic_tools(client):
    resp = await client.post("/ai/tools/normalize_title", json={"title": "  Ship it!  "})
    assert resp.json() == {"normalized": "Ship it", "originalLength": 12, "wasTruncated": False}

    resp = await client.post("/ai/tools/estimate_effort", json={"title": "Implement login", "complexity": "HIGH"})
    assert resp.json()["estimatedHours"] == 24

    resp = await client.post("/ai/tools/validate_dates", json={"startDate": "bogus"})
    assert resp.json()["isValid"] is False
