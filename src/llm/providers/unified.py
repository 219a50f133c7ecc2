"""Unified chat-model provider.

Builds the client through LangChain's init_chat_model() so the same code
path serves every vendor LangChain knows about. Model ids are prefixed with
the LangChain integration name: "openai:gpt-4o-mini",
"mistralai:mistral-small-latest".
"""

from langchain.chat_models import init_chat_model
from langchain_core.language_models import BaseChatModel

from src.llm.providers.base import LLMProvider, ProviderInfo

INTEGRATION_PREFIX = {
    "openai": "openai",
    "mistral": "mistralai",
}


class UnifiedProvider(LLMProvider):
    supports_structured_output = True

    @property
    def provider_name(self) -> str:
        return self._settings.llm_provider

    @property
    def model_id(self) -> str:
        prefix = INTEGRATION_PREFIX.get(self._settings.llm_provider, "mistralai")
        return f"{prefix}:{self._settings.llm_model}"

    def get_info(self) -> ProviderInfo:
        return ProviderInfo(provider=self._settings.llm_provider, model=self._settings.llm_model)

    def _build_client(self) -> BaseChatModel:
        return init_chat_model(
            self.model_id,
            api_key=self._require_api_key(),
            temperature=self._settings.llm_temperature,
            max_tokens=self._settings.llm_max_tokens,
            timeout=self._settings.llm_timeout_s,
        )
