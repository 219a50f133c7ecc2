"""Schemas for task generation.

TaskDraftList is what the LLM must return. It is validated BEFORE anything
else sees it. A response with fewer than 3 or more than 12 tasks, an
over-long title, or an unknown priority fails here and the generator
degrades to its fixed fallback set.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Priority = Literal["LOW", "MEDIUM", "HIGH"]

MIN_TASKS = 3
MAX_TASKS = 12
TITLE_MAX = 80
DESCRIPTION_MAX = 240

OptionValue = Union[bool, int, float, str]


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# LLM OUTPUT
# =============================================================================

class GeneratedTask(CamelModel):
    """A task draft. Never carries an id; ids exist only after persistence."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, max_length=TITLE_MAX)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX)
    priority: Optional[Priority] = None


class TaskDraftList(BaseModel):
    """Exact shape expected from the task generation call."""

    tasks: list[GeneratedTask] = Field(..., min_length=MIN_TASKS, max_length=MAX_TASKS)


# =============================================================================
# TOOL REQUEST / RESPONSE
# =============================================================================

class GenerateTasksRequest(CamelModel):
    """Input of generate_tasks_from_requirement."""

    prompt: str = Field(..., min_length=1, max_length=500)
    project_id: Optional[str] = None
    locale: Optional[str] = None
    options: Optional[dict[str, OptionValue]] = None


class GenerateTasksMeta(CamelModel):
    model: str
    provider: str
    degraded: bool
    locale: str
    options: Optional[dict[str, OptionValue]] = None
    usage_metadata: Optional[dict] = None


class GenerateTasksResult(CamelModel):
    tasks: list[GeneratedTask] = Field(..., min_length=MIN_TASKS, max_length=MAX_TASKS)
    meta: GenerateTasksMeta
