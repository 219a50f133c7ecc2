"""Fakes and builders shared by the test modules."""

import json
from typing import Any, Optional

from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage

from src.config import Settings
from src.context import (
    ContextService,
    HistoryContextAdapter,
    ProjectsContextAdapter,
    TasksContextAdapter,
    TeamContextAdapter,
)
from src.llm.factory import ProviderFactory
from src.llm.providers import MistralProvider, OpenAIProvider
from src.llm.service import LLMService
from src.llm.tracing import Tracer
from src.tools.task_generator import TaskGenerator
from src.tools.task_relationships import TaskRelationshipGenerator


def tasks_json(*titles: str, priority: str = "MEDIUM") -> str:
    return json.dumps({"tasks": [{"title": t, "priority": priority} for t in titles]})


class FakeProjectsService:
    def __init__(self, projects: Optional[dict] = None, contributors: Optional[list] = None,
                 fail_contributors: bool = False):
        self.projects = projects or {}
        self.contributors = contributors or []
        self.fail_contributors = fail_contributors

    async def find_one(self, project_id, user_id):
        if project_id not in self.projects:
            raise LookupError(f"Project {project_id} not found")
        return self.projects[project_id]

    async def get_contributors(self, project_id):
        if self.fail_contributors:
            raise RuntimeError("contributors backend down")
        return self.contributors


class FakeTasksService:
    def __init__(self, tasks: Optional[list] = None, fail_find: bool = False):
        self.tasks = tasks or []
        self.fail_find = fail_find
        self.create_calls: list[tuple[Any, str]] = []

    async def find_all(self, project_id):
        if self.fail_find:
            raise RuntimeError("tasks backend down")
        return self.tasks

    async def create_many(self, bulk, project_id):
        self.create_calls.append((bulk, project_id))
        return [
            {"id": f"id-{i}", "title": item.title, "project_id": project_id}
            for i, item in enumerate(bulk.items, start=1)
        ]


class FakeLinkService:
    """Creates every link except those listed in `failures` ((source, target) -> exception)."""

    def __init__(self, failures: Optional[dict] = None):
        self.failures = failures or {}
        self.created: list = []

    async def create_link(self, link):
        error = self.failures.get((link.source_task_id, link.target_task_id))
        if error is not None:
            raise error
        self.created.append(link)
        return {"id": f"link-{len(self.created)}"}


class FakeHistoryService:
    def __init__(self, events: Optional[list] = None, fail: bool = False):
        self.events = events or []
        self.fail = fail

    async def get_recent_history(self, project_id, window):
        if self.fail:
            raise RuntimeError("history backend down")
        return self.events


class StructuredStub:
    """Chat-model stand-in for the native structured-output path."""

    def __init__(self, parsed: Any = None, parsing_error: Optional[Exception] = None,
                 error: Optional[Exception] = None):
        self.parsed = parsed
        self.parsing_error = parsing_error
        self.error = error
        self.schema = None

    def with_structured_output(self, schema, **kwargs):
        self.schema = schema
        return self

    async def ainvoke(self, messages):
        if self.error is not None:
            raise self.error
        raw = AIMessage(content="", usage_metadata={
            "input_tokens": 10, "output_tokens": 20, "total_tokens": 30,
        })
        return {"raw": raw, "parsed": self.parsed, "parsing_error": self.parsing_error}


class ScriptedClient:
    """Chat-model stand-in that answers in order and records every prompt."""

    def __init__(self, responses: list[str], usage: Optional[list] = None):
        self.responses = list(responses)
        self.usage = list(usage or [])
        self.calls: list[list] = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        usage = self.usage.pop(0) if self.usage else None
        return AIMessage(content=self.responses.pop(0), usage_metadata=usage)


def mistral_llm(settings: Settings, responses: list[str], tracer: Optional[Tracer] = None) -> LLMService:
    """LLMService on the text path, answering with `responses` in order."""
    provider = MistralProvider(settings, client=FakeListChatModel(responses=responses))
    return LLMService(ProviderFactory(settings, provider=provider), tracer or Tracer())


def openai_llm(settings: Settings, stub: StructuredStub, tracer: Optional[Tracer] = None) -> LLMService:
    """LLMService on the native structured-output path."""
    provider = OpenAIProvider(settings, client=stub)
    return LLMService(ProviderFactory(settings, provider=provider), tracer or Tracer())


def context_service(projects_service, tasks_service, history_service=None) -> ContextService:
    return ContextService(
        ProjectsContextAdapter(projects_service),
        TasksContextAdapter(tasks_service),
        TeamContextAdapter(projects_service),
        HistoryContextAdapter(history_service),
    )


def task_generator(settings, llm, projects_service, tasks_service, tracer=None) -> TaskGenerator:
    return TaskGenerator(llm, context_service(projects_service, tasks_service), tracer or Tracer(), settings)


def relationship_generator(settings, llm, projects_service, tasks_service, link_service,
                           tracer=None) -> TaskRelationshipGenerator:
    tracer = tracer or Tracer()
    generator = task_generator(settings, llm, projects_service, tasks_service, tracer)
    return TaskRelationshipGenerator(llm, generator, tasks_service, link_service, tracer, settings)


def scripted_llm(settings: Settings, client: ScriptedClient, tracer: Optional[Tracer] = None) -> LLMService:
    provider = MistralProvider(settings, client=client)
    return LLMService(ProviderFactory(settings, provider=provider), tracer or Tracer())
