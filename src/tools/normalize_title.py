"""normalize_title: tidy a task title for display and storage."""

import re

from src.schemas.tasks import TITLE_MAX
from src.schemas.tools import NormalizeTitleRequest, NormalizeTitleResult

_WHITESPACE = re.compile(r"\s+")
_TRAILING_PUNCTUATION = re.compile(r"[.!?]+$")


def normalize_title(params: NormalizeTitleRequest) -> NormalizeTitleResult:
    """Trim, collapse whitespace, drop trailing .!? and cut to 80 chars."""
    title = params.title
    normalized = _WHITESPACE.sub(" ", title.strip())
    normalized = _TRAILING_PUNCTUATION.sub("", normalized)[:TITLE_MAX]
    return NormalizeTitleResult(
        normalized=normalized,
        original_length=len(title),
        was_truncated=len(title) > TITLE_MAX,
    )
