"""Application settings.

Settings are read from the environment ONCE at startup via load_settings()
and then passed to every component that needs them. Nothing downstream
reads os.environ at call time: the AI feature flag and provider selection
are per-deployment values, not per-request ones.

Environment:
  AI_TOOLS_ENABLED  "true" enables the AI tool endpoints (anything else = off)
  LLM_PROVIDER      "mistral" (default) or "openai"
  LLM_CLIENT        "native" (default) or "unified" (LangChain init_chat_model)
  LLM_MODEL         model name; default depends on LLM_PROVIDER
  LLM_API_KEY       provider API key
  LLM_MAX_TOKENS    completion token cap (default 2000)
  LLM_TEMPERATURE   sampling temperature (default 0.3)
  LLM_TIMEOUT_S     HTTP timeout for the provider client (default: client's own)
  APP_ENV           "development" (default), "test", "production"
"""

import os
from typing import Literal, Optional

from pydantic import BaseModel, Field, SecretStr

from src.utils.logging import log, get_logger

MODULE = "config"
logger = get_logger()

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "mistral": "mistral-small-latest",
}


class Settings(BaseModel):
    """Process-wide configuration, read-only once loaded."""

    ai_tools_enabled: bool = False
    llm_provider: Literal["openai", "mistral"] = "mistral"
    llm_client: Literal["native", "unified"] = "native"
    llm_model: str = DEFAULT_MODELS["mistral"]
    llm_api_key: SecretStr = SecretStr("")
    llm_max_tokens: int = Field(default=2000, ge=1)
    llm_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    llm_timeout_s: Optional[float] = Field(default=None, gt=0)
    environment: str = "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _read_number(name: str, cast, default, valid=lambda value: True):
    """Read a numeric env var; unparseable or out-of-range values keep `default`."""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        value = None
    if value is None or not valid(value):
        log.warning(logger, MODULE, "invalid_number",
                    "Ignoring invalid numeric setting, using default",
                    env_var=name, value=raw, fallback=default)
        return default
    return value


def load_settings() -> Settings:
    """Build Settings from environment variables."""
    provider = os.getenv("LLM_PROVIDER", "mistral").strip().lower()
    if provider != "openai":
        provider = "mistral"

    client = os.getenv("LLM_CLIENT", "native").strip().lower()
    if client != "unified":
        client = "native"

    settings = Settings(
        ai_tools_enabled=os.getenv("AI_TOOLS_ENABLED", "false") == "true",
        llm_provider=provider,
        llm_client=client,
        llm_model=os.getenv("LLM_MODEL") or DEFAULT_MODELS[provider],
        llm_api_key=SecretStr(os.getenv("LLM_API_KEY", "")),
        llm_max_tokens=_read_number("LLM_MAX_TOKENS", int, 2000, lambda v: v >= 1),
        llm_temperature=_read_number("LLM_TEMPERATURE", float, 0.3, lambda v: 0.0 <= v <= 2.0),
        llm_timeout_s=_read_number("LLM_TIMEOUT_S", float, None, lambda v: 0 < v < float("inf")),
        environment=os.getenv("APP_ENV", "development").strip().lower(),
    )

    log.debug(logger, MODULE, "loaded", "Settings loaded",
              ai_tools_enabled=settings.ai_tools_enabled,
              provider=settings.llm_provider, client=settings.llm_client,
              model=settings.llm_model, environment=settings.environment)
    return settings
