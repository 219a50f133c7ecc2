"""Task generation: free-text intent -> 3 to 12 validated task drafts.

Pipeline:
  1. Resolve locale ("en" default) -> one-line language directive
  2. Resolve desired count: options.taskCount rounded, clamped to [3, 12]; default 6
  3. Optional project context (redacted). Failure here only marks degraded
  4. Build system + user messages
  5. Call the LLM: structured output if the provider has it natively,
     otherwise extract JSON from text and validate
  6. Parse/validation failure -> fixed 3-task fallback, degraded=True

Provider transport errors (timeout, auth, bad request) are NOT caught here;
only output-shape problems degrade.
"""

import math
from typing import Any, Mapping, Optional

from langchain_core.messages import BaseMessage
from pydantic import ValidationError

from src.config import Settings
from src.context.service import ContextService
from src.llm.errors import StructuredOutputError
from src.llm.messages import build_messages
from src.llm.parser import JSONExtractionError, extract_json
from src.llm.service import LLMService
from src.llm.tracing import Tracer
from src.prompts.tasks import FALLBACK_TASKS, LOCALE_DIRECTIVES, TASKS_SYSTEM, TASKS_USER
from src.schemas.tasks import (
    MAX_TASKS,
    MIN_TASKS,
    GeneratedTask,
    GenerateTasksMeta,
    GenerateTasksRequest,
    GenerateTasksResult,
    TaskDraftList,
)
from src.tools.feature import ensure_ai_enabled
from src.utils.logging import log, get_logger
from src.utils.redaction import sanitize_text

MODULE = "taskgen"
logger = get_logger()

DEFAULT_TASK_COUNT = 6
DEFAULT_LOCALE = "en"
CONTEXT_TASK_TITLES = 5


def resolve_locale(locale: Optional[str]) -> str:
    return (locale or DEFAULT_LOCALE).strip().lower() or DEFAULT_LOCALE


def locale_directive(locale: str) -> str:
    """French for "fr", English for everything else."""
    return LOCALE_DIRECTIVES["fr"] if locale == "fr" else LOCALE_DIRECTIVES["en"]


def compute_desired_task_count(options: Optional[Mapping[str, Any]]) -> int:
    """clamp(round(options.taskCount), 3, 12), or 6 when absent/non-numeric."""
    raw = (options or {}).get("taskCount")
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not math.isfinite(raw):
        return DEFAULT_TASK_COUNT
    rounded = math.floor(raw + 0.5)  # half-up, not banker's rounding
    return max(MIN_TASKS, min(MAX_TASKS, rounded))


def _option_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_constraints(options: Optional[Mapping[str, Any]]) -> str:
    """{"a": 1, "b": "x"} -> "a=1; b=x"."""
    if not options:
        return ""
    return "; ".join(f"{key}={_option_text(value)}" for key, value in options.items())


def build_task_messages(
    *,
    prompt: str,
    locale: str,
    desired_task_count: int,
    context_info: str = "",
    constraints: str = "",
) -> list[BaseMessage]:
    system = TASKS_SYSTEM.format(
        desired_task_count=desired_task_count,
        locale_directive=locale_directive(locale),
    )
    user = TASKS_USER.format(
        context_block=f"{context_info.strip()}\n" if context_info.strip() else "",
        prompt=prompt,
        constraints_line=f"Constraints: {constraints}" if constraints else "",
        desired_task_count=desired_task_count,
        locale=locale,
    )
    return build_messages(system, user)


def parse_task_drafts(raw: str) -> list[GeneratedTask]:
    """Text-path output to validated drafts. Raises JSONExtractionError or ValidationError."""
    return list(TaskDraftList.model_validate(extract_json(raw)).tasks)


def fallback_tasks() -> list[GeneratedTask]:
    return [GeneratedTask(**task) for task in FALLBACK_TASKS]


class TaskGenerator:
    """generate_tasks_from_requirement."""

    def __init__(
        self,
        llm: LLMService,
        context: ContextService,
        tracer: Tracer,
        settings: Settings,
    ):
        self._llm = llm
        self._context = context
        self._tracer = tracer
        self._settings = settings

    async def generate_tasks(
        self,
        params: GenerateTasksRequest,
        user_id: Optional[str] = None,
    ) -> GenerateTasksResult:
        ensure_ai_enabled(self._settings)
        return await self._tracer.with_span(
            "ai.taskgen.call", lambda: self._generate(params, user_id),
        )

    async def _generate(self, params: GenerateTasksRequest, user_id: Optional[str]) -> GenerateTasksResult:
        info = self._llm.get_info()
        locale = resolve_locale(params.locale)
        desired = compute_desired_task_count(params.options)
        degraded = False

        log.info(logger, MODULE, "taskgen_start", "Generating tasks",
                 project_id=params.project_id, user_id=user_id, locale=locale,
                 desired=desired, provider=info.provider, model=info.model,
                 prompt=sanitize_text(params.prompt, self._settings.environment)[:80])

        try:
            context_info = await self._build_context_info(params.project_id, user_id)
        except Exception as e:
            degraded = True
            context_info = ""
            log.error(logger, MODULE, "context_failed",
                      "Context retrieval failed, generating without it",
                      error=str(e), error_type=type(e).__name__,
                      project_id=params.project_id)

        messages = build_task_messages(
            prompt=params.prompt,
            locale=locale,
            desired_task_count=desired,
            context_info=context_info,
            constraints=build_constraints(params.options),
        )

        usage: Optional[dict] = None
        try:
            if self._llm.supports_structured_output:
                result = await self._llm.invoke(messages, TaskDraftList)
                usage = result.usage_metadata
                tasks = list(result.value.tasks)
            else:
                result = await self._llm.invoke(messages)
                usage = result.usage_metadata
                tasks = parse_task_drafts(result.value)
        except (StructuredOutputError, JSONExtractionError, ValidationError) as e:
            log.error(logger, MODULE, "taskgen_fallback",
                      "Task JSON parsing/validation failed, using fallback tasks",
                      error=str(e)[:500], error_type=type(e).__name__)
            tasks = fallback_tasks()
            degraded = True

        log.info(logger, MODULE, "taskgen_done", "Tasks generated",
                 count=len(tasks), degraded=degraded)

        return GenerateTasksResult(
            tasks=tasks,
            meta=GenerateTasksMeta(
                model=info.model,
                provider=info.provider,
                degraded=degraded,
                locale=locale,
                options=params.options,
                usage_metadata=usage,
            ),
        )

    async def _build_context_info(self, project_id: Optional[str], user_id: Optional[str]) -> str:
        """"Project / Goal / Recent tasks" block, or "" without a project."""
        if not project_id:
            return ""
        project = await self._context.get_project(project_id, user_id)
        tasks = await self._context.get_tasks(project_id)
        if project is None:
            return ""

        lines = [f"Project: {project.name}"]
        if project.description:
            goal = sanitize_text(project.description, self._settings.environment)
            if goal:
                lines.append(f"Goal: {goal}")
        if tasks:
            titles = ", ".join(t.title for t in tasks[:CONTEXT_TASK_TITLES])
            lines.append(f"Recent tasks: {titles}")
        return "\n".join(lines) + "\n"
