"""Collaborator protocols.

Project/task persistence, permission checks and link validation live in
other services. This package only needs the narrow slice below; anything
that quacks like these protocols can be injected (ORM services, HTTP
clients, in-memory fakes in tests).

Returned records may be ORM objects or plain dicts; adapters read fields
from either.
"""

from typing import Any, Optional, Protocol, Sequence

from src.schemas.relationships import CreateTaskBulk, CreateTaskLink


class ProjectsService(Protocol):
    async def find_one(self, project_id: str, user_id: Optional[str]) -> Any:
        """Return the project (id, name, description) or raise if not found/allowed."""
        ...

    async def get_contributors(self, project_id: str) -> Sequence[Any]:
        """Return contributors (user_id, user.name)."""
        ...


class TasksService(Protocol):
    async def find_all(self, project_id: str) -> Sequence[Any]:
        ...

    async def create_many(self, bulk: CreateTaskBulk, project_id: str) -> Sequence[Any]:
        """Persist all items; returns the saved tasks in submission order."""
        ...


class TaskLinkService(Protocol):
    async def create_link(self, link: CreateTaskLink) -> Any:
        """Create a link or raise (circular, duplicate, cross-project...)."""
        ...


class HistoryService(Protocol):
    async def get_recent_history(self, project_id: str, window: int) -> Sequence[Any]:
        ...
