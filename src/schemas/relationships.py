"""Schemas for the relationship preview -> confirm protocol.

Preview objects reference tasks by 1-based placeholder ("task_3"), never by
id. Confirm resolves placeholders against the ids assigned at persistence
and reports every link attempt as either created or rejected.
"""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from src.schemas.tasks import CamelModel, GeneratedTask, OptionValue


class TaskLinkType(str, Enum):
    BLOCKS = "BLOCKS"
    IS_BLOCKED_BY = "IS_BLOCKED_BY"
    DUPLICATES = "DUPLICATES"
    IS_DUPLICATED_BY = "IS_DUPLICATED_BY"
    SPLITS_TO = "SPLITS_TO"
    SPLITS_FROM = "SPLITS_FROM"
    RELATES_TO = "RELATES_TO"


ALLOWED_LINK_TYPES = [t.value for t in TaskLinkType]


class RejectedReasonCode(str, Enum):
    INVALID = "INVALID"
    CIRCULAR = "CIRCULAR"
    CROSS_PROJECT = "CROSS_PROJECT"
    DUPLICATE = "DUPLICATE"
    UNKNOWN = "UNKNOWN"


# =============================================================================
# PREVIEW
# =============================================================================

class GenerateRelationshipsRequest(CamelModel):
    """Input of generate_task_relationships_preview."""

    prompt: str = Field(..., min_length=1, max_length=500)
    project_id: str
    generate_relationships: Optional[bool] = None
    options: Optional[dict[str, OptionValue]] = None


class TaskRelationshipPreview(CamelModel):
    source_task: str
    target_task: str
    type: TaskLinkType


class PreviewMeta(CamelModel):
    placeholder_mode: bool = True
    resolution_instructions: str
    degraded: bool = False


class RelationshipPreviewResult(CamelModel):
    tasks: list[GeneratedTask]
    relationships: list[TaskRelationshipPreview]
    meta: PreviewMeta


# =============================================================================
# CONFIRM
# =============================================================================

class ConfirmTask(GeneratedTask):
    """A task draft as sent back by the client, optionally scheduled/assigned."""

    due_date: Optional[str] = None
    assignee_id: Optional[str] = None


class ConfirmRelationshipsRequest(CamelModel):
    """Input of confirm_task_relationships."""

    tasks: list[ConfirmTask] = Field(..., min_length=1, max_length=50)
    relationships: list[TaskRelationshipPreview] = Field(default_factory=list)
    project_id: str


class BulkTaskItem(CamelModel):
    title: str
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    assignee_id: Optional[str] = None


class CreateTaskBulk(CamelModel):
    """Payload handed to TasksService.create_many()."""

    items: list[BulkTaskItem]


class PersistedTask(CamelModel):
    """The parts of a persisted task the confirm step needs."""

    # Stores may hand back integer primary keys.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    title: str
    project_id: Optional[str] = None


class CreateTaskLink(CamelModel):
    """Payload handed to TaskLinkService.create_link()."""

    project_id: str
    source_task_id: str
    target_task_id: str
    type: TaskLinkType


class ResolvedRelationship(CamelModel):
    source_task_id: str
    target_task_id: str
    type: TaskLinkType
    project_id: str


class RejectedRelationship(CamelModel):
    source_task_id: str
    target_task_id: str
    type: TaskLinkType
    reason_code: RejectedReasonCode
    reason_message: str


class ConfirmRelationshipsResult(CamelModel):
    tasks: list[PersistedTask]
    relationships: list[ResolvedRelationship]
    total_links: int
    created_links: int
    rejected_links: int
    rejected_relationships: list[RejectedRelationship]
