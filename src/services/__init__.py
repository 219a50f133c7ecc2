"""Contracts for the persistence collaborators this package consumes."""

from src.services.protocols import (
    HistoryService,
    ProjectsService,
    TaskLinkService,
    TasksService,
)

__all__ = [
    "HistoryService",
    "ProjectsService",
    "TaskLinkService",
    "TasksService",
]
