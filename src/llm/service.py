"""LLM service: the one entry point tools use to talk to a model.

Thin facade over ProviderFactory. Every call runs inside a tracing span
named after the call site so latency shows up per operation.

call_llm / call_llm_with_structured_output return just the output.
invoke() returns an LLMResult carrying that call's token usage too.
"""

from typing import Optional, Sequence, Type, TypeVar

from langchain_core.messages import BaseMessage
from pydantic import BaseModel

from src.llm.factory import ProviderFactory
from src.llm.providers.base import LLMResult, ProviderInfo
from src.llm.tracing import Tracer

T = TypeVar("T", bound=BaseModel)


class LLMService:

    def __init__(self, factory: ProviderFactory, tracer: Tracer):
        self._factory = factory
        self._tracer = tracer

    def get_info(self) -> ProviderInfo:
        return self._factory.get().get_info()

    @property
    def supports_structured_output(self) -> bool:
        return self._factory.get().supports_structured_output

    async def call_llm(self, messages: Sequence[BaseMessage]) -> str:
        return (await self.invoke(messages)).value

    async def call_llm_with_structured_output(
        self,
        messages: Sequence[BaseMessage],
        schema: Type[T],
    ) -> T:
        return (await self.invoke(messages, schema)).value

    async def invoke(
        self,
        messages: Sequence[BaseMessage],
        schema: Optional[Type[T]] = None,
    ) -> LLMResult:
        provider = self._factory.get()
        span = "llm.call" if schema is None else "llm.call.structured"
        return await self._tracer.with_span(
            span, lambda: provider.invoke(messages, schema),
        )
