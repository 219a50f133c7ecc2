"""Project context aggregation.

Builds a bounded, best-effort snapshot of a project for prompting:

  project   -> metadata (missing project = no context, returns None)
  tasks     -> normalized, sorted, capped at 200
  team      -> contributors
  history   -> recent events, window of 20

Only the project lookup decides whether there is a context at all. Every
other piece degrades to an empty list and sets meta.degraded instead of
raising. Reads only; nothing here writes.
"""

from typing import Awaitable, Optional, TypeVar

from src.context.adapters import (
    HistoryContextAdapter,
    ProjectsContextAdapter,
    TasksContextAdapter,
    TeamContextAdapter,
)
from src.schemas.context import (
    DEFAULT_HISTORY_WINDOW,
    TASKS_CAP,
    AggregatedContext,
    AggregatedContextMeta,
    HistoryEventContext,
    ProjectContext,
    TaskContext,
    TeamMemberContext,
)
from src.utils.logging import log, get_logger

MODULE = "context"
logger = get_logger()

T = TypeVar("T")


class ContextService:

    def __init__(
        self,
        projects: ProjectsContextAdapter,
        tasks: TasksContextAdapter,
        team: TeamContextAdapter,
        history: Optional[HistoryContextAdapter] = None,
    ):
        self._projects = projects
        self._tasks = tasks
        self._team = team
        self._history = history or HistoryContextAdapter()

    async def get_project(self, project_id: str, user_id: Optional[str] = None) -> Optional[ProjectContext]:
        if not project_id:
            return None
        return await self._projects.get_project(project_id, user_id)

    async def get_tasks(self, project_id: str) -> list[TaskContext]:
        if not project_id:
            return []
        return await self._tasks.get_tasks(project_id)

    async def get_team(self, project_id: str) -> list[TeamMemberContext]:
        if not project_id:
            return []
        return await self._team.get_team(project_id)

    async def get_recent_history(
        self,
        project_id: str,
        window: int = DEFAULT_HISTORY_WINDOW,
    ) -> list[HistoryEventContext]:
        """Best-effort: any failure yields []."""
        if not project_id:
            return []
        try:
            return await self._history.get_recent_history(project_id, window)
        except Exception as e:
            log.warning(logger, MODULE, "history_failed",
                        "History retrieval failed, continuing without it",
                        project_id=project_id, error=str(e))
            return []

    async def get_aggregated_context(
        self,
        project_id: str,
        user_id: Optional[str] = None,
    ) -> Optional[AggregatedContext]:
        project = await self.get_project(project_id, user_id)
        if project is None:
            log.debug(logger, MODULE, "context_skipped", "No project, no context",
                      project_id=project_id)
            return None

        degraded = False

        async def best_effort(part: str, call: Awaitable[list[T]]) -> list[T]:
            nonlocal degraded
            try:
                return await call
            except Exception as e:
                degraded = True
                log.warning(logger, MODULE, "context_part_failed",
                            f"Context {part} unavailable",
                            project_id=project_id, error=str(e),
                            error_type=type(e).__name__)
                return []

        tasks = await best_effort("tasks", self.get_tasks(project_id))
        team = await best_effort("team", self.get_team(project_id))
        history = await self.get_recent_history(project_id)
        if not history:
            degraded = True

        meta = AggregatedContextMeta(
            degraded=degraded,
            tasks_truncated=len(tasks) > TASKS_CAP,
            tasks_returned=min(len(tasks), TASKS_CAP),
            history_window=DEFAULT_HISTORY_WINDOW,
        )
        log.debug(logger, MODULE, "context_done", "Context aggregated",
                  project_id=project_id, tasks=meta.tasks_returned,
                  truncated=meta.tasks_truncated, team=len(team),
                  history=len(history), degraded=degraded)
        return AggregatedContext(
            project=project,
            tasks=tasks[:TASKS_CAP],
            team=team,
            history=history,
            meta=meta,
        )
