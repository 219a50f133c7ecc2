"""Task normalisation and deterministic ordering for prompt context."""

from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Any, Iterable

from src.schemas.context import TaskContext

PRIORITY_WEIGHT = {"HIGH": 3, "MEDIUM": 2, "LOW": 1}


def read_field(record: Any, name: str, default: Any = None) -> Any:
    """Read `name` from a dict or an attribute-style record."""
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def to_iso(value: Any) -> str | None:
    """Render a timestamp as 2024-01-02T03:04:05.000Z. Strings pass through."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
    return str(value)


def normalize_task_to_context(task: Any) -> TaskContext:
    project = read_field(task, "project")
    assignee = read_field(task, "assignee")
    return TaskContext(
        id=str(read_field(task, "id")),
        title=read_field(task, "title", ""),
        description=read_field(task, "description"),
        status=str(read_field(task, "status", "TODO")),
        priority=read_field(task, "priority") or "MEDIUM",
        due_date=to_iso(read_field(task, "due_date")),
        project_id=str(read_field(task, "project_id", "")),
        project_name=(read_field(project, "name", "") if project is not None else "") or "",
        assignee_id=read_field(task, "assignee_id"),
        assignee_display_name=read_field(assignee, "name") if assignee is not None else None,
        created_at=to_iso(read_field(task, "created_at")) or "",
        updated_at=to_iso(read_field(task, "updated_at")) or "",
    )


def compare_task_context(a: TaskContext, b: TaskContext) -> int:
    """priority DESC, then updated_at DESC, then title ASC."""
    a_weight = PRIORITY_WEIGHT.get(a.priority, 0)
    b_weight = PRIORITY_WEIGHT.get(b.priority, 0)
    if a_weight != b_weight:
        return b_weight - a_weight
    if a.updated_at != b.updated_at:
        return -1 if a.updated_at > b.updated_at else 1
    if a.title != b.title:
        return -1 if a.title < b.title else 1
    return 0


def sort_task_contexts(tasks: Iterable[TaskContext]) -> list[TaskContext]:
    return sorted(tasks, key=cmp_to_key(compare_task_context))
