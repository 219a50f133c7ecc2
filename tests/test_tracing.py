"""Tests for latency spans."""

import pytest

from src.llm.tracing import Tracer


@pytest.mark.asyncio
async def test_span_returns_result():
    tracer = Tracer()

    async def work():
        return 42

    assert await tracer.with_span("work", work) == 42
    assert tracer.last_durations_ms["work"] >= 0


@pytest.mark.asyncio
async def test_span_reraises_and_records():
    tracer = Tracer()

    async def fail():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await tracer.with_span("fail", fail)
    assert "fail" in tracer.last_durations_ms
