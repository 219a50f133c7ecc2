"""Latency spans around async operations.

with_span() records wall-clock duration of whatever it wraps and logs it.
It never alters control flow: the wrapped result is returned as-is and
any exception is re-raised untouched, with the duration still recorded.
"""

import time
from typing import Awaitable, Callable, TypeVar

from src.utils.logging import log, get_logger

MODULE = "tracing"
logger = get_logger()

T = TypeVar("T")


class Tracer:
    """Measures async operations. Keeps the last duration per span name."""

    def __init__(self):
        self.last_durations_ms: dict[str, int] = {}

    async def with_span(self, name: str, fn: Callable[[], Awaitable[T]]) -> T:
        start = time.monotonic()
        failed = False
        try:
            return await fn()
        except BaseException:
            failed = True
            raise
        finally:
            duration_ms = int((time.monotonic() - start) * 1000)
            self.last_durations_ms[name] = duration_ms
            if failed:
                log.debug(logger, MODULE, "span_failed", f"Span {name} failed",
                          span=name, duration_ms=duration_ms)
            else:
                log.debug(logger, MODULE, "span_done", f"Span {name} complete",
                          span=name, duration_ms=duration_ms)
