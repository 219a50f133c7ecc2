"""Message construction and response-content normalisation.

Providers speak LangChain messages (SystemMessage / HumanMessage / AIMessage).
Responses come back with `content` as either a plain string or a list of
content parts depending on the backend; normalize_output_content() flattens
both into text.
"""

from typing import Any, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from src.utils.text import normalize_multiline


def build_messages(system: str, user: str, ai: Optional[str] = None) -> list[BaseMessage]:
    """Build a [system, user(, ai)] message list from (possibly indented) prompt text."""
    messages: list[BaseMessage] = [
        SystemMessage(content=normalize_multiline(system)),
        HumanMessage(content=normalize_multiline(user)),
    ]
    if ai:
        messages.append(AIMessage(content=normalize_multiline(ai)))
    return messages


def normalize_output_content(value: Any) -> str:
    """Flatten a model response into text.

    - "text"                           -> "text"
    - ["a", {"text": "b"}]             -> "a\\nb"
    - AIMessage / {"content": ...}     -> recurse into content
    - anything else                    -> ""
    """
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        parts = []
        for part in value:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "\n".join(p for p in parts if p)
    if isinstance(value, BaseMessage):
        return normalize_output_content(value.content)
    if isinstance(value, dict) and "content" in value:
        return normalize_output_content(value["content"])
    return ""
