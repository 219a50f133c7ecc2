"""Startup check for the AI feature.

When AI tools are enabled we want to fail at boot, not on the first user
request, if the provider cannot possibly work.
"""

from src.config import Settings
from src.llm.factory import ProviderFactory
from src.utils.logging import log, get_logger

MODULE = "bootstrap"
logger = get_logger()


class AIBootstrapError(Exception):
    """AI is enabled but misconfigured."""

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code)
        self.code = code


def verify_ai_bootstrap(settings: Settings, factory: ProviderFactory) -> None:
    """Validate AI configuration. No-op when AI tools are disabled.

    Raises:
        AIBootstrapError: AI_DISABLED_MISSING_API_KEY or AI_BOOTSTRAP_FAILED
    """
    if not settings.ai_tools_enabled:
        log.info(logger, MODULE, "bootstrap_skipped", "AI tools disabled")
        return

    if not settings.llm_api_key.get_secret_value():
        log.error(logger, MODULE, "bootstrap_failed", "AI enabled without LLM_API_KEY")
        raise AIBootstrapError("AI_DISABLED_MISSING_API_KEY", "LLM_API_KEY is required")

    try:
        info = factory.get().get_info()
    except Exception as e:
        log.error(logger, MODULE, "bootstrap_failed", "Provider info unavailable",
                  error=str(e), error_type=type(e).__name__)
        raise AIBootstrapError("AI_BOOTSTRAP_FAILED", str(e)) from e

    if not info.provider or not info.model:
        log.error(logger, MODULE, "bootstrap_failed", "Provider info incomplete",
                  provider=info.provider, model=info.model)
        raise AIBootstrapError("AI_BOOTSTRAP_FAILED", "Invalid provider info")

    log.info(logger, MODULE, "bootstrap_done", "AI tools ready",
             provider=info.provider, model=info.model)
