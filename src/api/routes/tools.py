"""AI tool endpoints.

  POST /ai/tools/generate_tasks_from_requirement
  POST /ai/tools/generate_task_relationships_preview
  POST /ai/tools/confirm_task_relationships
  POST /ai/tools/normalize_title
  POST /ai/tools/estimate_effort
  POST /ai/tools/validate_dates

Caller identity comes from X-User-Id, locale from X-Locale (a body
locale on generate_tasks_from_requirement wins over the header).
Bodies and responses are camelCase.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from src.api.deps import AITools, get_locale, get_tools, get_user_id
from src.schemas import (
    ConfirmRelationshipsRequest,
    ConfirmRelationshipsResult,
    EstimateEffortRequest,
    EstimateEffortResult,
    GenerateRelationshipsRequest,
    GenerateTasksRequest,
    GenerateTasksResult,
    NormalizeTitleRequest,
    NormalizeTitleResult,
    RelationshipPreviewResult,
    ValidateDatesRequest,
    ValidateDatesResult,
)
from src.tools.estimate_effort import estimate_effort
from src.tools.normalize_title import normalize_title
from src.tools.validate_dates import validate_dates

router = APIRouter()


@router.post("/generate_tasks_from_requirement", response_model=GenerateTasksResult)
async def generate_tasks_from_requirement(
    body: GenerateTasksRequest,
    tools: AITools = Depends(get_tools),
    user_id: Optional[str] = Depends(get_user_id),
    locale: Optional[str] = Depends(get_locale),
):
    if body.locale is None and locale:
        body = body.model_copy(update={"locale": locale})
    return await tools.task_generator.generate_tasks(body, user_id)


@router.post("/generate_task_relationships_preview", response_model=RelationshipPreviewResult)
async def generate_task_relationships_preview(
    body: GenerateRelationshipsRequest,
    tools: AITools = Depends(get_tools),
    user_id: Optional[str] = Depends(get_user_id),
    locale: Optional[str] = Depends(get_locale),
):
    return await tools.relationships.generate_preview(body, user_id, locale)


@router.post("/confirm_task_relationships", response_model=ConfirmRelationshipsResult)
async def confirm_task_relationships(
    body: ConfirmRelationshipsRequest,
    tools: AITools = Depends(get_tools),
    user_id: Optional[str] = Depends(get_user_id),
    locale: Optional[str] = Depends(get_locale),
):
    return await tools.relationships.confirm_and_create(body, user_id, locale)


@router.post("/normalize_title", response_model=NormalizeTitleResult)
async def normalize_title_endpoint(body: NormalizeTitleRequest):
    return normalize_title(body)


@router.post("/estimate_effort", response_model=EstimateEffortResult)
async def estimate_effort_endpoint(body: EstimateEffortRequest):
    return estimate_effort(body)


@router.post("/validate_dates", response_model=ValidateDatesResult)
async def validate_dates_endpoint(body: ValidateDatesRequest):
    return validate_dates(body)
