"""Normalized project context handed to prompts.

These are read-only views assembled from the projects/tasks services.
They never go back to persistence.
"""

from typing import Literal, Optional

from pydantic import Field

from src.schemas.tasks import CamelModel

HistoryEventType = Literal["STATUS_CHANGE", "COMMENT", "ATTACHMENT", "ASSIGNMENT", "OTHER"]

TASKS_CAP = 200
DEFAULT_HISTORY_WINDOW = 20


class ProjectContext(CamelModel):
    id: str
    name: str
    description: Optional[str] = None


class TaskLinkContext(CamelModel):
    id: str
    project_id: str
    source_task_id: str
    target_task_id: str
    type: str
    created_at: str


class TaskContext(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    status: str
    priority: Literal["LOW", "MEDIUM", "HIGH"] = "MEDIUM"
    due_date: Optional[str] = None
    project_id: str
    project_name: str = ""
    assignee_id: Optional[str] = None
    assignee_display_name: Optional[str] = None
    created_at: str
    updated_at: str
    links: list[TaskLinkContext] = Field(default_factory=list)


class TeamMemberContext(CamelModel):
    id: str
    display_name: str


class HistoryEventContext(CamelModel):
    id: str
    type: HistoryEventType = "OTHER"
    timestamp: str
    actor_id: Optional[str] = None
    summary: Optional[str] = None


class AggregatedContextMeta(CamelModel):
    degraded: bool
    tasks_truncated: bool
    tasks_returned: int
    history_window: int


class AggregatedContext(CamelModel):
    project: ProjectContext
    tasks: list[TaskContext] = Field(default_factory=list, max_length=TASKS_CAP)
    team: list[TeamMemberContext] = Field(default_factory=list)
    history: list[HistoryEventContext] = Field(default_factory=list)
    meta: AggregatedContextMeta
