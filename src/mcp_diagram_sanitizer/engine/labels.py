# src/mcp_diagram_sanitizer/engine/labels.py
from __future__ import annotations

import re

# e.g. "fa:user-circle Login"
_ICON_RE = re.compile(r"^([A-Za-z]{2}:[\w-]+)(?:\s+(.*))?$", flags=re.DOTALL)


def escape_label(text: str) -> str:
    # backslash before quote
    return text.replace("\\", "\\\\").replace('"', '\\"')


def clean_label(text: str) -> str:
    """
    Normalize one raw label fragment so it can sit inside double quotes.

    Not idempotent: feeding the result back in escapes it a second time.
    """
    s = (text or "").strip()
    if not s:
        return ""
    if len(s) >= 2 and s[0] == s[-1] and s[0] in {'"', "'"}:
        s = s[1:-1]
    s = s.strip("_").strip()
    return escape_label(s)


def quote_label(text: str) -> str:
    return f'"{clean_label(text)}"'


def format_node_content(raw: str) -> str:
    trimmed = (raw or "").strip()
    if not trimmed:
        return '""'

    m = _ICON_RE.match(trimmed)
    if m:
        icon, rest = m.group(1), (m.group(2) or "").strip()
        if not rest:
            return icon
        return f"{icon} {quote_label(rest)}"

    return quote_label(trimmed)
