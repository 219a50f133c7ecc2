"""LLM invocation package.

  from src.llm import LLMService, ProviderFactory, Tracer

  service = LLMService(ProviderFactory(settings), Tracer())
  text = await service.call_llm(messages)
  tasks = await service.call_llm_with_structured_output(messages, TaskDraftList)

Architecture:
  providers/   -> one class per backend (OpenAI, Mistral, unified init_chat_model)
  factory.py   -> picks the provider from Settings once
  service.py   -> facade used by tools, wraps calls in tracing spans
  tracing.py   -> latency spans
  parser.py    -> JSON extraction from raw LLM output
  messages.py  -> prompt message building, response content flattening
  errors.py    -> typed provider error taxonomy
  bootstrap.py -> startup configuration check
"""

from src.llm.bootstrap import AIBootstrapError, verify_ai_bootstrap
from src.llm.errors import (
    LLMError,
    ProviderAuthError,
    ProviderBadRequestError,
    ProviderConfigError,
    ProviderTimeoutError,
    StructuredOutputError,
    map_provider_error,
)
from src.llm.factory import ProviderFactory
from src.llm.messages import build_messages, normalize_output_content
from src.llm.parser import JSONExtractionError, extract_json, extract_json_payload
from src.llm.providers import LLMProvider, LLMResult, ProviderInfo
from src.llm.service import LLMService
from src.llm.tracing import Tracer

__all__ = [
    "AIBootstrapError",
    "verify_ai_bootstrap",
    "LLMError",
    "ProviderAuthError",
    "ProviderBadRequestError",
    "ProviderConfigError",
    "ProviderTimeoutError",
    "StructuredOutputError",
    "map_provider_error",
    "ProviderFactory",
    "build_messages",
    "normalize_output_content",
    "JSONExtractionError",
    "extract_json",
    "extract_json_payload",
    "LLMProvider",
    "LLMResult",
    "ProviderInfo",
    "LLMService",
    "Tracer",
]
