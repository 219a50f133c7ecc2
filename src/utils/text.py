"""Prompt text helpers."""

import re


def normalize_multiline(text: str) -> str:
    """Dedent and tidy a multi-line prompt.

    - CRLF/CR -> LF
    - strip the common leading indentation of non-blank lines
    - strip trailing whitespace on every line
    - trim the whole block and collapse 3+ newlines into one blank line

    Lets prompts be written as indented triple-quoted strings inside
    functions without the indentation leaking into what the model sees.
    """
    unix = re.sub(r"\r\n?", "\n", text)
    lines = unix.split("\n")
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    min_indent = min(indents) if indents else 0
    dedented = [line[min_indent:] if min_indent else line for line in lines]
    trimmed = "\n".join(line.rstrip() for line in dedented).strip()
    return re.sub(r"\n{3,}", "\n\n", trimmed)
