"""Health check endpoint."""

from fastapi import APIRouter, Request

from src.schemas.api import HealthResponse, ServiceInfo

SERVICE_NAME = "taskpilot-ai"
VERSION = "0.1.0"

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    return HealthResponse(
        service=SERVICE_NAME,
        version=VERSION,
        ai_tools_enabled=request.app.state.settings.ai_tools_enabled,
    )


@router.get("/", response_model=ServiceInfo)
async def root():
    return ServiceInfo(service=SERVICE_NAME, version=VERSION)
