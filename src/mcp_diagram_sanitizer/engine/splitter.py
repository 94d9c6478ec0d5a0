# src/mcp_diagram_sanitizer/engine/splitter.py
from __future__ import annotations

from typing import List

_DELIMITERS = {"\n", ";"}


def split_statements(text: str) -> List[str]:
    """
    Split diagram text into trimmed statements on newlines and semicolons.
    Delimiters inside a double-quoted span do not end a statement; a quote
    preceded by a backslash does not toggle the span.
    """
    statements: List[str] = []
    current: List[str] = []
    in_quote = False
    prev = ""

    for ch in text or "":
        if ch == '"' and prev != "\\":
            in_quote = not in_quote
        prev = ch
        if not in_quote and ch in _DELIMITERS:
            stmt = "".join(current).strip()
            if stmt:
                statements.append(stmt)
            current = []
            continue
        current.append(ch)

    tail = "".join(current).strip()
    if tail:
        statements.append(tail)
    return statements
