"""Task relationships: preview (LLM), then confirm (persistence).

PREVIEW
  1. Generate tasks through TaskGenerator (taskCount 5 unless the caller
     forwarded options)
  2. Ask the model for links between them, referenced as task_1..task_N
  3. Keep only well-formed proposals with an allowed type, at most
     min(8, max(3, ceil(N / 2))) of them
  Nothing is persisted. A relationship failure never fails the preview:
  the tasks come back with an empty relationship list.

CONFIRM (no LLM)
  1. Persist all tasks in one create_many() call
  2. Resolve task_N -> id of the N-th persisted task (1-based)
  3. Create links one at a time; each failure is classified and reported,
     never raised. created + rejected == total, always.
  4. The result lists only the links that were created; rejections are
     reported separately.
"""

import math
import re
from typing import Callable, Optional, Sequence

from src.config import Settings
from src.llm.messages import build_messages
from src.llm.parser import extract_json
from src.llm.service import LLMService
from src.llm.tracing import Tracer
from src.prompts.tasks import RELATIONSHIPS_SYSTEM, RELATIONSHIPS_USER
from src.schemas.relationships import (
    ALLOWED_LINK_TYPES,
    BulkTaskItem,
    ConfirmRelationshipsRequest,
    ConfirmRelationshipsResult,
    CreateTaskBulk,
    CreateTaskLink,
    GenerateRelationshipsRequest,
    PersistedTask,
    PreviewMeta,
    RejectedReasonCode,
    RejectedRelationship,
    RelationshipPreviewResult,
    ResolvedRelationship,
    TaskRelationshipPreview,
)
from src.schemas.tasks import GeneratedTask, GenerateTasksRequest
from src.services.protocols import TaskLinkService, TasksService
from src.tools.feature import ensure_ai_enabled
from src.tools.task_generator import TaskGenerator, resolve_locale
from src.utils.logging import log, get_logger

MODULE = "relationships"
logger = get_logger()

PREVIEW_TASK_COUNT = 5
MAX_RELATIONSHIPS = 8
MIN_RELATIONSHIPS = 3
PLACEHOLDER = re.compile(r"task_(\d+)")

# Ordered: the first matching rule classifies the failure.
REJECTION_RULES: list[tuple[Callable[[str], bool], RejectedReasonCode]] = [
    (lambda m: "project" in m, RejectedReasonCode.CROSS_PROJECT),
    (lambda m: "circular" in m, RejectedReasonCode.CIRCULAR),
    (lambda m: "duplicate" in m, RejectedReasonCode.DUPLICATE),
    (lambda m: "hierarchy" in m or "self" in m, RejectedReasonCode.INVALID),
]


def max_relationships_for(task_count: int) -> int:
    return min(MAX_RELATIONSHIPS, max(MIN_RELATIONSHIPS, math.ceil(task_count / 2)))


def format_task_list(tasks: Sequence[GeneratedTask]) -> str:
    """One "task_N: title" line per task, description appended when present."""
    lines = []
    for i, task in enumerate(tasks, start=1):
        suffix = f" — {task.description}" if task.description else ""
        lines.append(f"task_{i}: {task.title}{suffix}")
    return "\n".join(lines)


def resolution_instructions(tasks: Sequence[GeneratedTask]) -> str:
    return "\n".join(f'task_{i} = "{task.title}"' for i, task in enumerate(tasks, start=1))


def parse_relationship_proposals(raw: str, limit: int) -> list[TaskRelationshipPreview]:
    """Model output -> at most `limit` well-formed proposals.

    Raises JSONExtractionError when no JSON can be pulled out of `raw`.
    Entries with non-string endpoints or an unknown type are dropped.
    """
    data = extract_json(raw, expect_array=True)
    if not isinstance(data, list):
        return []

    proposals = []
    for item in data:
        if not isinstance(item, dict):
            continue
        source, target, link_type = item.get("sourceTask"), item.get("targetTask"), item.get("type")
        if not isinstance(source, str) or not isinstance(target, str):
            continue
        if link_type not in ALLOWED_LINK_TYPES:
            continue
        proposals.append(TaskRelationshipPreview(source_task=source, target_task=target, type=link_type))
    return proposals[:limit]


def resolve_placeholder(placeholder: str, created: Sequence[PersistedTask]) -> str:
    """"task_2" -> id of the 2nd created task. Anything else passes through."""
    match = PLACEHOLDER.fullmatch(placeholder.strip())
    if not match:
        return placeholder
    index = int(match.group(1)) - 1
    if 0 <= index < len(created):
        return created[index].id
    return placeholder


def classify_link_failure(error: Exception) -> tuple[RejectedReasonCode, str]:
    """Map a create_link() failure to (reason_code, message)."""
    message = str(error) or "Unknown"

    code = getattr(error, "reason_code", None)
    if code is not None:
        try:
            return RejectedReasonCode(code), message
        except ValueError:
            pass

    lowered = message.lower()
    for matches, reason in REJECTION_RULES:
        if matches(lowered):
            return reason, message
    return RejectedReasonCode.UNKNOWN, message


class TaskRelationshipGenerator:
    """generate_task_relationships_preview + confirm_task_relationships."""

    def __init__(
        self,
        llm: LLMService,
        task_generator: TaskGenerator,
        tasks_service: TasksService,
        link_service: TaskLinkService,
        tracer: Tracer,
        settings: Settings,
    ):
        self._llm = llm
        self._task_generator = task_generator
        self._tasks_service = tasks_service
        self._link_service = link_service
        self._tracer = tracer
        self._settings = settings

    # -------------------------------------------------------------------------
    # PREVIEW
    # -------------------------------------------------------------------------

    async def generate_preview(
        self,
        params: GenerateRelationshipsRequest,
        user_id: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> RelationshipPreviewResult:
        ensure_ai_enabled(self._settings)
        return await self._tracer.with_span(
            "ai.relationships.preview",
            lambda: self._preview(params, user_id, resolve_locale(locale)),
        )

    async def _preview(
        self,
        params: GenerateRelationshipsRequest,
        user_id: Optional[str],
        locale: str,
    ) -> RelationshipPreviewResult:
        generated = await self._task_generator.generate_tasks(
            GenerateTasksRequest(
                prompt=params.prompt,
                project_id=params.project_id,
                locale=locale,
                options=params.options or {"taskCount": PREVIEW_TASK_COUNT},
            ),
            user_id,
        )
        tasks = generated.tasks

        if params.generate_relationships is False:
            log.info(logger, MODULE, "relationships_skipped",
                     "Relationship generation disabled by caller",
                     project_id=params.project_id)
            relationships = []
        else:
            relationships = await self._propose_relationships(tasks, locale)

        log.info(logger, MODULE, "preview_done", "Relationship preview ready",
                 project_id=params.project_id, tasks=len(tasks),
                 relationships=len(relationships), degraded=generated.meta.degraded)

        return RelationshipPreviewResult(
            tasks=tasks,
            relationships=relationships,
            meta=PreviewMeta(
                placeholder_mode=True,
                resolution_instructions=resolution_instructions(tasks),
                degraded=generated.meta.degraded,
            ),
        )

    async def _propose_relationships(
        self,
        tasks: Sequence[GeneratedTask],
        locale: str,
    ) -> list[TaskRelationshipPreview]:
        if not tasks:
            return []

        limit = max_relationships_for(len(tasks))
        messages = build_messages(
            RELATIONSHIPS_SYSTEM.format(
                allowed_types=", ".join(ALLOWED_LINK_TYPES),
                max_relationships=limit,
                locale=locale,
            ),
            RELATIONSHIPS_USER.format(
                max_relationships=limit,
                task_list=format_task_list(tasks),
            ),
        )

        try:
            raw = await self._llm.call_llm(messages)
            return parse_relationship_proposals(raw, limit)
        except Exception as e:
            log.warning(logger, MODULE, "relationships_parse_failed",
                        "Relationship proposal failed, returning none",
                        error=str(e)[:500], error_type=type(e).__name__)
            return []

    # -------------------------------------------------------------------------
    # CONFIRM
    # -------------------------------------------------------------------------

    async def confirm_and_create(
        self,
        params: ConfirmRelationshipsRequest,
        user_id: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> ConfirmRelationshipsResult:
        ensure_ai_enabled(self._settings)
        return await self._tracer.with_span(
            "ai.relationships.confirm", lambda: self._confirm(params, user_id),
        )

    async def _confirm(
        self,
        params: ConfirmRelationshipsRequest,
        user_id: Optional[str],
    ) -> ConfirmRelationshipsResult:
        created = await self._create_tasks(params)
        resolved = self._resolve(params, created)

        linked: list[ResolvedRelationship] = []
        rejected: list[RejectedRelationship] = []
        for rel in resolved:
            try:
                await self._link_service.create_link(CreateTaskLink(
                    project_id=rel.project_id,
                    source_task_id=rel.source_task_id,
                    target_task_id=rel.target_task_id,
                    type=rel.type,
                ))
                linked.append(rel)
            except Exception as e:
                code, message = classify_link_failure(e)
                log.warning(logger, MODULE, "link_rejected", "Task link rejected",
                            source=rel.source_task_id, target=rel.target_task_id,
                            link_type=rel.type.value, reason_code=code.value,
                            error=message)
                rejected.append(RejectedRelationship(
                    source_task_id=rel.source_task_id,
                    target_task_id=rel.target_task_id,
                    type=rel.type,
                    reason_code=code,
                    reason_message=message,
                ))

        log.info(logger, MODULE, "confirm_done", "Tasks and links created",
                 project_id=params.project_id, user_id=user_id,
                 tasks=len(created), total_links=len(resolved),
                 created_links=len(linked), rejected_links=len(rejected))

        return ConfirmRelationshipsResult(
            tasks=created,
            relationships=linked,
            total_links=len(resolved),
            created_links=len(linked),
            rejected_links=len(rejected),
            rejected_relationships=rejected,
        )

    async def _create_tasks(self, params: ConfirmRelationshipsRequest) -> list[PersistedTask]:
        bulk = CreateTaskBulk(items=[
            BulkTaskItem(
                title=task.title,
                description=task.description,
                priority=task.priority,
                due_date=task.due_date,
                assignee_id=task.assignee_id,
            )
            for task in params.tasks
        ])
        created = await self._tasks_service.create_many(bulk, params.project_id)
        return [PersistedTask.model_validate(task, from_attributes=True) for task in created]

    def _resolve(
        self,
        params: ConfirmRelationshipsRequest,
        created: Sequence[PersistedTask],
    ) -> list[ResolvedRelationship]:
        project_id = (created[0].project_id if created else None) or params.project_id
        return [
            ResolvedRelationship(
                source_task_id=resolve_placeholder(rel.source_task, created),
                target_task_id=resolve_placeholder(rel.target_task, created),
                type=rel.type,
                project_id=project_id,
            )
            for rel in params.relationships
        ]
