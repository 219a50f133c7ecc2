"""Concrete LLM providers.

  OpenAIProvider   -> api.openai.com via ChatOpenAI (native structured output)
  MistralProvider  -> api.mistral.ai OpenAI-compatible endpoint via ChatOpenAI
                     (no native structured output: JSON is parsed from text)
  UnifiedProvider  -> LangChain init_chat_model("openai:..." / "mistralai:...")
"""

from src.llm.providers.base import LLMProvider, LLMResult, ProviderInfo
from src.llm.providers.mistral import MistralProvider
from src.llm.providers.openai import OpenAIProvider
from src.llm.providers.unified import UnifiedProvider

__all__ = [
    "LLMProvider",
    "LLMResult",
    "ProviderInfo",
    "MistralProvider",
    "OpenAIProvider",
    "UnifiedProvider",
]
