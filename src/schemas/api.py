"""Pydantic schemas for the HTTP surface (health, errors)."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    version: str
    ai_tools_enabled: bool


class ServiceInfo(BaseModel):
    service: str
    version: str


class ErrorResponse(BaseModel):
    """Body of every error the AI endpoints return."""
    code: str = Field(..., description="Stable machine-readable error code")
    detail: str
