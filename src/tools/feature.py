"""AI feature flag."""

from src.config import Settings


class AIDisabledError(Exception):
    """AI tools are switched off for this deployment (service unavailable)."""

    code = "AI_DISABLED"

    def __init__(self):
        super().__init__("AI tools are disabled")


def ensure_ai_enabled(settings: Settings) -> None:
    if not settings.ai_tools_enabled:
        raise AIDisabledError()
