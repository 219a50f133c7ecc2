"""Adapters from collaborator services to normalized context models.

Each adapter is read-only and talks to exactly one collaborator.
"""

from typing import Optional

from src.context.normalizers import (
    normalize_task_to_context,
    read_field,
    sort_task_contexts,
    to_iso,
)
from src.schemas.context import (
    HistoryEventContext,
    ProjectContext,
    TaskContext,
    TeamMemberContext,
)
from src.services.protocols import HistoryService, ProjectsService, TasksService
from src.utils.logging import log, get_logger

MODULE = "context"
logger = get_logger()


class ProjectsContextAdapter:
    def __init__(self, projects_service: ProjectsService):
        self._projects = projects_service

    async def get_project(self, project_id: str, user_id: Optional[str] = None) -> Optional[ProjectContext]:
        """The project, or None if it does not exist or the lookup fails."""
        if not project_id:
            return None
        try:
            project = await self._projects.find_one(project_id, user_id)
        except Exception as e:
            log.info(logger, MODULE, "project_not_found", "Project lookup failed",
                     project_id=project_id, error=str(e), error_type=type(e).__name__)
            return None
        if project is None:
            return None
        return ProjectContext(
            id=str(read_field(project, "id")),
            name=read_field(project, "name", ""),
            description=read_field(project, "description"),
        )


class TasksContextAdapter:
    def __init__(self, tasks_service: TasksService):
        self._tasks = tasks_service

    async def get_tasks(self, project_id: str) -> list[TaskContext]:
        """All project tasks, normalized and sorted (priority, recency, title)."""
        if not project_id:
            return []
        tasks = await self._tasks.find_all(project_id)
        return sort_task_contexts(normalize_task_to_context(t) for t in tasks)


class TeamContextAdapter:
    def __init__(self, projects_service: ProjectsService):
        self._projects = projects_service

    async def get_team(self, project_id: str) -> list[TeamMemberContext]:
        if not project_id:
            return []
        contributors = await self._projects.get_contributors(project_id)
        team = []
        for c in contributors:
            user_id = str(read_field(c, "user_id"))
            user = read_field(c, "user")
            name = read_field(user, "name") if user is not None else None
            team.append(TeamMemberContext(id=user_id, display_name=name or user_id))
        return team


class HistoryContextAdapter:
    """Recent activity. Without a history backend there is simply no history."""

    def __init__(self, history_service: Optional[HistoryService] = None):
        self._history = history_service

    async def get_recent_history(self, project_id: str, window: int) -> list[HistoryEventContext]:
        if not project_id or self._history is None:
            return []
        events = await self._history.get_recent_history(project_id, window)
        return [
            HistoryEventContext(
                id=str(read_field(e, "id")),
                type=read_field(e, "type") or "OTHER",
                timestamp=to_iso(read_field(e, "timestamp")) or "",
                actor_id=read_field(e, "actor_id"),
                summary=read_field(e, "summary"),
            )
            for e in list(events)[:window]
        ]
