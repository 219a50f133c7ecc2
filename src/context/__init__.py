"""Read-only project context for prompting."""

from src.context.adapters import (
    HistoryContextAdapter,
    ProjectsContextAdapter,
    TasksContextAdapter,
    TeamContextAdapter,
)
from src.context.normalizers import (
    compare_task_context,
    normalize_task_to_context,
    sort_task_contexts,
)
from src.context.service import ContextService

__all__ = [
    "ContextService",
    "HistoryContextAdapter",
    "ProjectsContextAdapter",
    "TasksContextAdapter",
    "TeamContextAdapter",
    "compare_task_context",
    "normalize_task_to_context",
    "sort_task_contexts",
]
