"""Provider selection.

The active provider is chosen ONCE, when the factory is constructed, from
Settings.llm_client / Settings.llm_provider. There is no per-request
re-selection: get() always returns the same instance.

  llm_client="unified"                       -> UnifiedProvider
  llm_client="native", llm_provider="openai" -> OpenAIProvider
  llm_client="native", anything else         -> MistralProvider
"""

from src.config import Settings
from src.llm.providers import LLMProvider, MistralProvider, OpenAIProvider, UnifiedProvider
from src.utils.logging import log, get_logger

MODULE = "provider"
logger = get_logger()


def select_provider(settings: Settings) -> LLMProvider:
    if settings.llm_client == "unified":
        return UnifiedProvider(settings)
    if settings.llm_provider == "openai":
        return OpenAIProvider(settings)
    return MistralProvider(settings)


class ProviderFactory:
    """Holds the provider selected from configuration."""

    def __init__(self, settings: Settings, provider: LLMProvider | None = None):
        self._provider = provider or select_provider(settings)
        info = self._provider.get_info()
        log.info(logger, MODULE, "provider_selected", "LLM provider selected",
                 provider=info.provider, model=info.model,
                 provider_class=type(self._provider).__name__,
                 structured_output=self._provider.supports_structured_output)

    def get(self) -> LLMProvider:
        return self._provider
