"""JSON extraction from LLM responses.

LLMs often wrap JSON in markdown code blocks, ad-hoc <json> tags, or
preamble text. This module pulls out the JSON payload and parses it.

Extraction order (first match wins):
  1. ```json ... ``` (or bare ```) fenced block
  2. <json> ... </json> tag
  3. first "{" through last "}" (or "[" ... "]" for arrays)
  4. the whole response, trimmed
"""

import json
import re
from typing import Any

from src.utils.logging import log, get_logger

MODULE = "llm.parser"
logger = get_logger()

FENCED_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
TAG_PATTERN = re.compile(r"<json>\s*(.*?)\s*</json>", re.DOTALL | re.IGNORECASE)
OBJECT_PATTERN = re.compile(r"(\{.*\})", re.DOTALL)
ARRAY_PATTERN = re.compile(r"(\[.*\])", re.DOTALL)


class JSONExtractionError(Exception):
    """Raised when JSON cannot be extracted from LLM output."""

    def __init__(self, message: str, raw_output: str):
        super().__init__(message)
        self.raw_output = raw_output


def extract_json_payload(raw: str, *, expect_array: bool = False) -> str:
    """Return the most likely JSON substring of a raw LLM response.

    Args:
        raw: Raw LLM output
        expect_array: Look for a top-level [...] instead of {...} in the
            bare-blob step.

    Returns:
        Candidate JSON text (not yet parsed). Falls back to raw.strip().
    """
    blob_pattern = ARRAY_PATTERN if expect_array else OBJECT_PATTERN
    for pattern in (FENCED_PATTERN, TAG_PATTERN, blob_pattern):
        match = pattern.search(raw)
        if match:
            candidate = match.group(1).strip()
            if candidate:
                return candidate
    return raw.strip()


def extract_json(raw: str, *, expect_array: bool = False) -> Any:
    """Extract and parse JSON from LLM output.

    Handles:
    - Raw JSON: {"key": "value"}
    - Markdown blocks: ```json\\n{"key": "value"}\\n```
    - Tagged: <json>{"key": "value"}</json>
    - Preamble/trailing prose around a single object

    Raises:
        JSONExtractionError: If the candidate payload is not valid JSON
    """
    candidate = extract_json_payload(raw, expect_array=expect_array)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        log.debug(logger, MODULE, "extract_failed",
                  "Candidate payload is not valid JSON",
                  error=str(e), raw_length=len(raw))
        raise JSONExtractionError(
            f"Could not extract valid JSON from LLM output ({len(raw)} chars): {e}",
            raw_output=raw,
        ) from e
