"""Schemas for the small deterministic tools (no LLM involved)."""

from typing import Literal, Optional

from pydantic import Field

from src.schemas.tasks import CamelModel

Complexity = Literal["LOW", "MEDIUM", "HIGH"]


class NormalizeTitleRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)


class NormalizeTitleResult(CamelModel):
    normalized: str = Field(..., max_length=80)
    original_length: int
    was_truncated: bool


class EstimateEffortRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    complexity: Optional[Complexity] = None


class EstimateEffortResult(CamelModel):
    estimated_hours: float = Field(..., ge=0.5, le=40)
    confidence: Complexity
    reasoning: str = Field(..., max_length=200)


class ValidateDatesRequest(CamelModel):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    due_date: Optional[str] = None


class ValidateDatesResult(CamelModel):
    is_valid: bool
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    due_date: Optional[str] = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
