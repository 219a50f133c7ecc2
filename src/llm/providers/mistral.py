"""Mistral provider.

Mistral exposes an OpenAI-compatible /v1/chat/completions endpoint, so we
reuse ChatOpenAI with a different base_url. We do not rely on tool-calling
for structured output here: JSON is requested in the prompt and parsed
out of the text response.
"""

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from src.llm.providers.base import LLMProvider

MISTRAL_BASE_URL = "https://api.mistral.ai/v1"


class MistralProvider(LLMProvider):
    provider_name = "mistral"
    supports_structured_output = False

    def _build_client(self) -> BaseChatModel:
        return ChatOpenAI(
            base_url=MISTRAL_BASE_URL,
            api_key=self._require_api_key(),
            model=self._settings.llm_model,
            temperature=self._settings.llm_temperature,
            max_tokens=self._settings.llm_max_tokens,
            timeout=self._settings.llm_timeout_s,
        )
