"""Wiring: collaborators + settings -> the tool objects routes call.

Everything is built once per app in create_app() and kept on app.state.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Header, Request

from src.config import Settings
from src.context import (
    ContextService,
    HistoryContextAdapter,
    ProjectsContextAdapter,
    TasksContextAdapter,
    TeamContextAdapter,
)
from src.llm.factory import ProviderFactory
from src.llm.service import LLMService
from src.llm.tracing import Tracer
from src.services.protocols import (
    HistoryService,
    ProjectsService,
    TaskLinkService,
    TasksService,
)
from src.tools.task_generator import TaskGenerator
from src.tools.task_relationships import TaskRelationshipGenerator


@dataclass
class AITools:
    settings: Settings
    factory: ProviderFactory
    llm: LLMService
    context: ContextService
    task_generator: TaskGenerator
    relationships: TaskRelationshipGenerator


def build_ai_tools(
    settings: Settings,
    *,
    projects_service: ProjectsService,
    tasks_service: TasksService,
    link_service: TaskLinkService,
    history_service: Optional[HistoryService] = None,
    factory: Optional[ProviderFactory] = None,
) -> AITools:
    tracer = Tracer()
    factory = factory or ProviderFactory(settings)
    llm = LLMService(factory, tracer)
    context = ContextService(
        ProjectsContextAdapter(projects_service),
        TasksContextAdapter(tasks_service),
        TeamContextAdapter(projects_service),
        HistoryContextAdapter(history_service),
    )
    task_generator = TaskGenerator(llm, context, tracer, settings)
    relationships = TaskRelationshipGenerator(
        llm, task_generator, tasks_service, link_service, tracer, settings,
    )
    return AITools(
        settings=settings,
        factory=factory,
        llm=llm,
        context=context,
        task_generator=task_generator,
        relationships=relationships,
    )


def get_tools(request: Request) -> AITools:
    return request.app.state.tools


def get_user_id(x_user_id: Optional[str] = Header(default=None)) -> Optional[str]:
    return x_user_id or None


def get_locale(x_locale: Optional[str] = Header(default=None)) -> Optional[str]:
    return x_locale or None
