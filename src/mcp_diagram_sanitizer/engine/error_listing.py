# src/mcp_diagram_sanitizer/engine/error_listing.py
from __future__ import annotations

import re
from typing import Optional

_PARSE_ERROR_LINE_RE = re.compile(r"Parse error on line (\d+):")


def parse_error_line(message: str) -> Optional[int]:
    m = _PARSE_ERROR_LINE_RE.search(message or "")
    return int(m.group(1)) if m else None


def format_error_listing(text: str, message: str = "") -> str:
    """
    Raw diagram text numbered from 1, for display when the renderer rejects it.
    The line named by a "Parse error on line N:" message is flagged with '>>'.
    """
    error_line = parse_error_line(message)
    lines = (text or "").strip().split("\n")
    width = len(str(len(lines)))
    out = []
    for n, line in enumerate(lines, start=1):
        marker = ">>" if n == error_line else "  "
        out.append(f"{marker} {n:>{width}} | {line}")
    return "\n".join(out)
