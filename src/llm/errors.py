"""Error taxonomy for LLM provider calls.

Every concrete provider maps its transport failures onto the same three
typed errors so callers never have to know which SDK answered:

  ProviderTimeoutError     the request timed out
  ProviderAuthError        credentials rejected (HTTP 401)
  ProviderBadRequestError  malformed request (HTTP 400)

Anything else propagates unchanged.
"""

import httpx
import openai


class LLMError(Exception):
    """Base class for LLM-layer errors."""

    code = "AI_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProviderTimeoutError(LLMError):
    code = "AI_PROVIDER_TIMEOUT"


class ProviderAuthError(LLMError):
    code = "AI_PROVIDER_AUTH"


class ProviderBadRequestError(LLMError):
    code = "AI_PROVIDER_BAD_REQUEST"


class ProviderConfigError(LLMError):
    """Provider cannot be built (e.g. no API key configured)."""

    code = "AI_PROVIDER_CONFIG"


class StructuredOutputError(LLMError):
    """Model output could not be parsed/validated against the requested schema."""

    code = "AI_STRUCTURED_OUTPUT"

    def __init__(self, message: str, raw_output: str | None = None):
        super().__init__(message)
        self.raw_output = raw_output


_TIMEOUT_TYPES = (
    TimeoutError,
    httpx.TimeoutException,
    openai.APITimeoutError,
)


def map_provider_error(exc: Exception) -> LLMError | None:
    """Translate an SDK/transport exception into the typed taxonomy.

    Checks exception types and HTTP status first, then falls back to the
    message text (some wrappers only surface "401" or "timeout" in str(e)).

    Returns:
        The typed error, or None when the exception is not one we classify
        (the caller re-raises the original).
    """
    if isinstance(exc, LLMError):
        return exc

    message = str(exc).lower()
    status = getattr(exc, "status_code", None)

    if isinstance(exc, _TIMEOUT_TYPES) or "timeout" in message or "timed out" in message:
        return ProviderTimeoutError("LLM request timed out")
    if status == 401 or isinstance(exc, openai.AuthenticationError) \
            or "unauthorized" in message or "401" in message:
        return ProviderAuthError("Invalid API key")
    if status == 400 or isinstance(exc, openai.BadRequestError) or "400" in message:
        return ProviderBadRequestError("Invalid request")
    return None
