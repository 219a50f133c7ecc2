"""Provider contract shared by every LLM backend.

A provider wraps ONE chat-model client and exposes:

  get_info()                            which backend/model answers
  complete(messages)                    free text
  complete_with_structured_output(...)  a validated pydantic instance
  invoke(messages, schema=None)         either of the above plus the token
                                        usage of that one call (LLMResult)

Providers are shared by every request, so they keep no per-call state:
usage travels back with the result it belongs to.

`supports_structured_output` tells callers which path is native. When it
is False, complete_with_structured_output() still works: it asks for text,
extracts the JSON payload and validates it against the schema. Either way
a parse/validation failure surfaces as StructuredOutputError. The caller
decides how to degrade, the provider never swallows it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from pydantic import BaseModel, ValidationError

from src.config import Settings
from src.llm.errors import (
    LLMError,
    ProviderConfigError,
    StructuredOutputError,
    map_provider_error,
)
from src.llm.messages import normalize_output_content
from src.llm.parser import JSONExtractionError, extract_json
from src.utils.logging import log, get_logger

MODULE = "provider"
logger = get_logger()

T = TypeVar("T", bound=BaseModel)
V = TypeVar("V")


class ProviderInfo(BaseModel):
    """Identifies which backend answered a request."""

    provider: str
    model: str


@dataclass(frozen=True)
class LLMResult(Generic[V]):
    """One call's output and the token usage the backend reported for it."""

    value: V
    usage_metadata: Optional[dict] = None


class LLMProvider(ABC):
    """Base class for chat-model backed providers."""

    provider_name: str = ""
    supports_structured_output: bool = False

    def __init__(self, settings: Settings, client: Optional[BaseChatModel] = None):
        self._settings = settings
        self._client = client

    def get_info(self) -> ProviderInfo:
        return ProviderInfo(provider=self.provider_name, model=self._settings.llm_model)

    @abstractmethod
    def _build_client(self) -> BaseChatModel:
        """Create the underlying LangChain chat model."""

    def _get_client(self) -> BaseChatModel:
        if self._client is None:
            self._client = self._build_client()
            log.debug(logger, MODULE, "client_init", "LLM client created",
                      provider=self.provider_name, model=self._settings.llm_model)
        return self._client

    def _require_api_key(self) -> str:
        api_key = self._settings.llm_api_key.get_secret_value()
        if not api_key:
            raise ProviderConfigError("LLM_API_KEY is required")
        return api_key

    async def complete(self, messages: Sequence[BaseMessage]) -> str:
        """Send messages and return the response text."""
        return (await self.invoke(messages)).value

    async def complete_with_structured_output(
        self,
        messages: Sequence[BaseMessage],
        schema: Type[T],
    ) -> T:
        """Send messages and return an instance of `schema`.

        Raises:
            StructuredOutputError: output could not be parsed or validated
            ProviderTimeoutError / ProviderAuthError / ProviderBadRequestError
        """
        return (await self.invoke(messages, schema)).value

    async def invoke(
        self,
        messages: Sequence[BaseMessage],
        schema: Optional[Type[T]] = None,
    ) -> LLMResult:
        """complete() or complete_with_structured_output(), with usage attached."""
        if schema is None:
            return await self._invoke_text(messages)
        if not self.supports_structured_output:
            return await self._invoke_and_parse(messages, schema)
        return await self._invoke_structured(messages, schema)

    async def _invoke_text(self, messages: Sequence[BaseMessage]) -> LLMResult[str]:
        try:
            response = await self._get_client().ainvoke(list(messages))
        except Exception as e:
            mapped = self._translate(e, "complete")
            if mapped is None:
                raise
            raise mapped from e

        return LLMResult(normalize_output_content(response.content), self._usage(response))

    async def _invoke_structured(self, messages: Sequence[BaseMessage], schema: Type[T]) -> LLMResult[T]:
        structured = self._get_client().with_structured_output(
            schema, method="function_calling", include_raw=True,
        )
        try:
            result = await structured.ainvoke(list(messages))
        except (OutputParserException, ValidationError) as e:
            raise StructuredOutputError(f"Structured output rejected: {e}") from e
        except Exception as e:
            mapped = self._translate(e, "complete_structured")
            if mapped is None:
                raise
            raise mapped from e

        parsed = result.get("parsed")
        if result.get("parsing_error") is not None or parsed is None:
            raise StructuredOutputError(
                f"Structured output rejected for {schema.__name__}: "
                f"{result.get('parsing_error') or 'no parsed output'}",
                raw_output=normalize_output_content(result.get("raw")),
            )
        if not isinstance(parsed, schema):
            try:
                parsed = schema.model_validate(parsed)
            except ValidationError as e:
                raise StructuredOutputError(f"Structured output rejected: {e}") from e
        return LLMResult(parsed, self._usage(result.get("raw")))

    async def _invoke_and_parse(self, messages: Sequence[BaseMessage], schema: Type[T]) -> LLMResult[T]:
        text = await self._invoke_text(messages)
        try:
            parsed = schema.model_validate(extract_json(text.value))
        except (JSONExtractionError, ValidationError) as e:
            raise StructuredOutputError(
                f"Could not parse {schema.__name__} from text output: {e}",
                raw_output=text.value,
            ) from e
        return LLMResult(parsed, text.usage_metadata)

    def _usage(self, response: Any) -> Optional[dict]:
        usage = getattr(response, "usage_metadata", None)
        if not usage:
            return None
        return {
            **dict(usage),
            "provider": self.provider_name,
            "model": self._settings.llm_model,
        }

    def _translate(self, exc: Exception, call: str) -> Optional[LLMError]:
        """Map an SDK exception to the typed taxonomy; None means re-raise as-is."""
        mapped = map_provider_error(exc)
        log.error(logger, MODULE, "provider_call_failed", f"LLM {call} failed",
                  error=str(exc), error_type=type(exc).__name__,
                  provider=self.provider_name, model=self._settings.llm_model,
                  mapped_code=mapped.code if mapped else None)
        if mapped is None or mapped is exc:
            return None
        return mapped
