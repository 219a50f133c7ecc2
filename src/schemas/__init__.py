"""Pydantic schemas for structured data validation.

This package contains:
- tasks.py:         task drafts (LLM output) and generate-tasks request/result
- relationships.py: preview/confirm protocol for task links
- context.py:       normalized project context used in prompts
- api.py:           health and error bodies of the HTTP surface
- tools.py:         deterministic helper tools (title, effort, dates)

All LLM outputs are validated against these models BEFORE being used by
the rest of the system.
"""

from src.schemas.api import ErrorResponse, HealthResponse, ServiceInfo
from src.schemas.context import (
    AggregatedContext,
    AggregatedContextMeta,
    HistoryEventContext,
    ProjectContext,
    TaskContext,
    TeamMemberContext,
)
from src.schemas.relationships import (
    ALLOWED_LINK_TYPES,
    BulkTaskItem,
    ConfirmRelationshipsRequest,
    ConfirmRelationshipsResult,
    ConfirmTask,
    CreateTaskBulk,
    CreateTaskLink,
    GenerateRelationshipsRequest,
    PersistedTask,
    PreviewMeta,
    RejectedReasonCode,
    RejectedRelationship,
    RelationshipPreviewResult,
    ResolvedRelationship,
    TaskLinkType,
    TaskRelationshipPreview,
)
from src.schemas.tasks import (
    GeneratedTask,
    GenerateTasksMeta,
    GenerateTasksRequest,
    GenerateTasksResult,
    Priority,
    TaskDraftList,
)
from src.schemas.tools import (
    EstimateEffortRequest,
    EstimateEffortResult,
    NormalizeTitleRequest,
    NormalizeTitleResult,
    ValidateDatesRequest,
    ValidateDatesResult,
)

__all__ = [
    # API
    "ErrorResponse",
    "HealthResponse",
    "ServiceInfo",
    # Context
    "AggregatedContext",
    "AggregatedContextMeta",
    "HistoryEventContext",
    "ProjectContext",
    "TaskContext",
    "TeamMemberContext",
    # Relationships
    "ALLOWED_LINK_TYPES",
    "BulkTaskItem",
    "ConfirmRelationshipsRequest",
    "ConfirmRelationshipsResult",
    "ConfirmTask",
    "CreateTaskBulk",
    "CreateTaskLink",
    "GenerateRelationshipsRequest",
    "PersistedTask",
    "PreviewMeta",
    "RejectedReasonCode",
    "RejectedRelationship",
    "RelationshipPreviewResult",
    "ResolvedRelationship",
    "TaskLinkType",
    "TaskRelationshipPreview",
    # Tasks
    "GeneratedTask",
    "GenerateTasksMeta",
    "GenerateTasksRequest",
    "GenerateTasksResult",
    "Priority",
    "TaskDraftList",
    # Tools
    "EstimateEffortRequest",
    "EstimateEffortResult",
    "NormalizeTitleRequest",
    "NormalizeTitleResult",
    "ValidateDatesRequest",
    "ValidateDatesResult",
]
