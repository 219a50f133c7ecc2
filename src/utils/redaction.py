"""Redaction of free text before it reaches logs or LLM prompts.

In production the text is replaced wholesale; we never echo raw user
content into telemetry there. Elsewhere the obvious PII/credential shapes
are masked so logs stay readable during development.

Order matters: masking runs BEFORE truncation so a marker is never cut
in half at the 512-char boundary.
"""

import re

REDACTED = "[REDACTED]"
MAX_SANITIZED_LENGTH = 512

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
# \b anchors keep digit runs inside longer numbers (ids, timestamps) unmasked.
PHONE_PATTERN = re.compile(r"\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b")
SECRET_PATTERN = re.compile(r"(Bearer|apikey|token)\s+[A-Za-z0-9._-]+", re.IGNORECASE)


def sanitize_text(text: str | None, env: str) -> str:
    """Mask emails, phone numbers and credentials; redact everything in production.

    Args:
        text: Free text (project description, prompt, error message...)
        env: Deployment environment name ("production" redacts fully)

    Returns:
        Sanitized text, at most 512 characters.
    """
    if env == "production":
        return REDACTED
    if not text:
        return ""
    masked = EMAIL_PATTERN.sub("[EMAIL]", text)
    masked = PHONE_PATTERN.sub("[PHONE]", masked)
    masked = SECRET_PATTERN.sub(r"\1 [SECRET]", masked)
    return masked[:MAX_SANITIZED_LENGTH]
