"""
Structured Logging

One JSON object per line, with the same keys on every record:

  ts, level, module, action, msg, + any context fields

Query logs by module and action (plus project_id, provider, span...).

EXAMPLE QUERIES
===============
# All errors
{service="taskpilot-ai"} | json | level="ERROR"

# Task generation that fell back to the fixed task set
{service="taskpilot-ai"} | json | module="taskgen" action="taskgen_fallback"

# Links the link service refused, by reason
{service="taskpilot-ai"} | json | action="link_rejected" | line_format "{{.reason_code}}"

# LLM latency per call site
{service="taskpilot-ai"} | json | action="span_done" | unwrap duration_ms

# Provider failures (timeout / auth / bad request)
{service="taskpilot-ai"} | json | action="provider_call_failed"

USAGE
=====
from src.utils.logging import log, get_logger

MODULE = "taskgen"
logger = get_logger()

log.info(logger, MODULE, "taskgen_start", "Generating tasks",
         project_id=project_id, desired=6)
log.error(logger, MODULE, "taskgen_fallback", "Validation failed",
          error=str(e), error_type=type(e).__name__)

ACTION NAMING
=============
  *_start     beginning of an operation
  *_done      successful completion
  *_failed    error/failure
  *_skipped   intentionally skipped
  *_fallback  degraded to an alternative path

Context fields that are None are dropped. Never pass raw user text as a
field; run it through src.utils.redaction.sanitize_text first.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

APP_LOGGER_NAME = "taskpilot.ai"

# Third-party loggers pinned to WARNING by configure_logging()
QUIET_LOGGERS = (
    "langchain",
    "langchain_core",
    "langchain_openai",
    "langchain_mistralai",
    "openai",
    "httpx",
    "httpcore",
    "asyncio",
)

_RESERVED = ("ts", "level", "module", "action", "msg")


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class StructuredFormatter(logging.Formatter):
    """JSON lines for shipping; `pretty=True` for a terminal."""

    def __init__(self, pretty: bool = False):
        super().__init__()
        self.pretty = pretty

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": _timestamp(),
            "level": record.levelname,
            "module": getattr(record, "_module", record.name),
            "action": getattr(record, "_action", "log"),
            "msg": record.getMessage(),
        }
        payload.update(getattr(record, "_fields", {}))
        if record.exc_info:
            payload["traceback"] = self.formatException(record.exc_info)

        if self.pretty:
            return self._pretty(payload)
        return json.dumps(payload, default=str, separators=(",", ":"))

    @staticmethod
    def _pretty(payload: dict) -> str:
        head = (
            f"{payload['ts'][11:23]} {payload['level'][0]} "
            f"[{payload['module'].upper()[:13]:<13}] {payload['action']}: {payload['msg']}"
        )
        ctx = " ".join(f"{k}={v}" for k, v in payload.items() if k not in _RESERVED)
        return f"{head} | {ctx}" if ctx else head


class StructuredLogger:
    """log.<level>(logger, module, action, msg, **fields)."""

    def _emit(self, logger: logging.Logger, level: int, module: str, action: str,
              msg: str, fields: dict) -> None:
        if not logger.isEnabledFor(level):
            return
        logger.log(level, msg, extra={
            "_module": module,
            "_action": action,
            "_fields": {k: v for k, v in fields.items() if v is not None},
        })

    def debug(self, logger: logging.Logger, module: str, action: str, msg: str, **fields) -> None:
        self._emit(logger, logging.DEBUG, module, action, msg, fields)

    def info(self, logger: logging.Logger, module: str, action: str, msg: str, **fields) -> None:
        self._emit(logger, logging.INFO, module, action, msg, fields)

    def warning(self, logger: logging.Logger, module: str, action: str, msg: str, **fields) -> None:
        self._emit(logger, logging.WARNING, module, action, msg, fields)

    def error(self, logger: logging.Logger, module: str, action: str, msg: str, **fields) -> None:
        """ERROR level. By convention pass error=str(e), error_type=type(e).__name__."""
        self._emit(logger, logging.ERROR, module, action, msg, fields)


log = StructuredLogger()


def get_logger() -> logging.Logger:
    """The application logger shared by every module."""
    return logging.getLogger(APP_LOGGER_NAME)


def configure_logging() -> None:
    """Install the structured handler on the root logger. Call once at startup.

    LOG_FORMAT  "json" (default) or "pretty"
    LOG_LEVEL   "INFO" (default), "DEBUG", "WARNING", "ERROR"
    """
    pretty = os.getenv("LOG_FORMAT", "json") == "pretty"
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(pretty=pretty))
    logging.basicConfig(level=level, handlers=[handler], force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
