# src/mcp_diagram_sanitizer/engine/sequence.py
from __future__ import annotations

import re
from typing import List, Set

from .labels import quote_label

_MESSAGE_ARROWS = ("-->>", "->>", "--x", "-x", "--)", "-)", "-->", "->")
_MESSAGE_RE = re.compile(
    r"^(?P<head>.*?(?:" + "|".join(re.escape(a) for a in _MESSAGE_ARROWS) + r")[+-]?\s*[^:\s][^:]*?)"
    r"\s*:\s*(?P<msg>.*?)\s*$"
)
_ACTIVATE_RE = re.compile(r"^\s*activate\s+(.+)$", flags=re.IGNORECASE)
_DEACTIVATE_RE = re.compile(r"^\s*deactivate\s+(.+)$", flags=re.IGNORECASE)


def normalize_participant_id(raw: str) -> str:
    return re.sub(r"[\"']", "", raw or "").strip().lower()


def quote_message(line: str) -> str:
    m = _MESSAGE_RE.match(line)
    if not m:
        return line
    msg = m.group("msg")
    if not msg or msg.startswith('"'):
        return line
    return f"{m.group('head')}: {quote_label(msg)}"


def normalize_sequence(text: str) -> str:
    """
    Quote message text and drop `deactivate` lines for participants that are
    not currently activated. Semicolons are left alone: the dialect is
    line-oriented.
    """
    active: Set[str] = set()
    out: List[str] = []

    for line in (text or "").split("\n"):
        current = quote_message(line)

        m = _ACTIVATE_RE.match(current)
        if m:
            pid = normalize_participant_id(m.group(1))
            if pid:
                active.add(pid)
            out.append(current)
            continue

        m = _DEACTIVATE_RE.match(current)
        if m:
            pid = normalize_participant_id(m.group(1))
            if not pid or pid not in active:
                continue
            active.discard(pid)
            out.append(current)
            continue

        out.append(current)

    return "\n".join(out)
