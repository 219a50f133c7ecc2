"""FastAPI application for the TaskPilot AI tools.

Logging: Uses structured JSON logging.
Set LOG_FORMAT=pretty for development-friendly output.

The app owns no persistence. Project, task, link and history services are
injected into create_app() by whatever hosts it.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.api.deps import build_ai_tools
from src.api.routes.health import SERVICE_NAME, VERSION, router as health_router
from src.api.routes.tools import router as tools_router
from src.config import Settings, load_settings
from src.llm.bootstrap import AIBootstrapError, verify_ai_bootstrap
from src.llm.errors import (
    LLMError,
    ProviderAuthError,
    ProviderBadRequestError,
    ProviderConfigError,
    ProviderTimeoutError,
)
from src.llm.factory import ProviderFactory
from src.schemas.api import ErrorResponse
from src.services.protocols import (
    HistoryService,
    ProjectsService,
    TaskLinkService,
    TasksService,
)
from src.tools.feature import AIDisabledError
from src.utils.logging import configure_logging, get_logger, log

MODULE = "api"
logger = get_logger()

# Most specific first.
LLM_ERROR_STATUS: list[tuple[type[LLMError], int]] = [
    (ProviderTimeoutError, 504),
    (ProviderAuthError, 502),
    (ProviderBadRequestError, 502),
    (ProviderConfigError, 503),
]


def _error(status_code: int, code: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(code=code, detail=detail).model_dump(),
    )


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AIDisabledError)
    async def ai_disabled(request: Request, exc: AIDisabledError):
        return _error(503, exc.code, str(exc))

    @app.exception_handler(AIBootstrapError)
    async def ai_bootstrap(request: Request, exc: AIBootstrapError):
        return _error(503, exc.code, str(exc))

    @app.exception_handler(LLMError)
    async def llm_error(request: Request, exc: LLMError):
        status_code = next(
            (status for cls, status in LLM_ERROR_STATUS if isinstance(exc, cls)), 502,
        )
        log.error(logger, MODULE, "request_failed", "AI request failed",
                  path=request.url.path, code=exc.code, status=status_code,
                  error=str(exc))
        return _error(status_code, exc.code, str(exc))


def create_app(
    settings: Optional[Settings] = None,
    *,
    projects_service: ProjectsService,
    tasks_service: TasksService,
    link_service: TaskLinkService,
    history_service: Optional[HistoryService] = None,
    factory: Optional[ProviderFactory] = None,
) -> FastAPI:
    """Build the app. Raises nothing here; bootstrap runs at startup."""
    settings = settings or load_settings()
    tools = build_ai_tools(
        settings,
        projects_service=projects_service,
        tasks_service=tasks_service,
        link_service=link_service,
        history_service=history_service,
        factory=factory,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup/shutdown."""
        configure_logging()
        verify_ai_bootstrap(settings, tools.factory)
        log.info(logger, MODULE, "startup_done", "Application ready",
                 ai_tools_enabled=settings.ai_tools_enabled,
                 environment=settings.environment)
        yield
        log.info(logger, MODULE, "shutdown", "Application shutdown complete")

    app = FastAPI(
        title="TaskPilot AI",
        description="AI task and task-relationship generation",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.tools = tools

    _register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(tools_router, prefix="/ai/tools", tags=["ai-tools"])

    log.debug(logger, MODULE, "app_created", "App created", service=SERVICE_NAME)
    return app
