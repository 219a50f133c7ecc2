"""OpenAI provider (api.openai.com, native structured output)."""

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from src.llm.providers.base import LLMProvider


class OpenAIProvider(LLMProvider):
    provider_name = "openai"
    supports_structured_output = True

    def _build_client(self) -> BaseChatModel:
        return ChatOpenAI(
            api_key=self._require_api_key(),
            model=self._settings.llm_model,
            temperature=self._settings.llm_temperature,
            max_tokens=self._settings.llm_max_tokens,
            timeout=self._settings.llm_timeout_s,
        )
