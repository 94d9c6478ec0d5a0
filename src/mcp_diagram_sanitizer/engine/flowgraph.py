# src/mcp_diagram_sanitizer/engine/flowgraph.py
from __future__ import annotations

import re
from typing import List, Optional, Pattern, Tuple

from .labels import format_node_content, quote_label
from .splitter import split_statements

# longest spelling first so alternation never stops on a prefix
FLOW_ARROWS: Tuple[str, ...] = ("-.->", "-->>", "-+->", "-->", "---", "==>", "--x", "=>", "-x")
# cross arrows must not be read out of hyphenated words like "Pre-xray" or "Fix-x"
_ARROW_GUARDS = {"--x": (r"", r"(?!\w)"), "-x": (r"(?<!\w)", r"(?!\w)")}


def _arrow_pattern(arrow: str) -> str:
    before, after = _ARROW_GUARDS.get(arrow, ("", ""))
    return f"{before}{re.escape(arrow)}{after}"


ARROW_ALTERNATION = "|".join(_arrow_pattern(a) for a in FLOW_ARROWS)

_HEADER_RE = re.compile(r"^graph\b\s*([A-Za-z]+)?", flags=re.IGNORECASE)

# (pattern, replacement) applied to every body statement before token rewriting
_STATEMENT_RULES: List[Tuple[Pattern[str], str]] = [
    (re.compile(r";"), ""),
    (re.compile(rf"(?:{ARROW_ALTERNATION})\s*$"), ""),
]

_QUOTED = r'\s*"(?:[^"\\]|\\.)*"\s*'
_BRACKETS = (("[", "]"), ("(", ")"), ("{", "}"))


def _node_alternative(open_: str, close: str, idx: int) -> str:
    o, c = re.escape(open_), re.escape(close)
    return rf"{o}(?P<body{idx}>{_QUOTED}|[^{c}]*){c}"


# Edge labels and node bodies in one left-to-right scan; rewritten text is never rescanned.
_TOKEN_RE = re.compile(
    rf"(?P<arrow>{ARROW_ALTERNATION})\s*\|\s*(?P<label>[^|]+?)\s*\|"
    rf"|(?P<id>\w+)(?:"
    + "|".join(_node_alternative(o, c, i) for i, (o, c) in enumerate(_BRACKETS))
    + ")"
)


def _rewrite_token(m: "re.Match[str]") -> str:
    if m.group("arrow"):
        return f"{m.group('arrow')}|{quote_label(m.group('label'))}|"
    for idx, (open_, close) in enumerate(_BRACKETS):
        body = m.group(f"body{idx}")
        if body is not None:
            return f"{m.group('id')}{open_}{format_node_content(body)}{close}"
    return m.group(0)


def normalize_statement(statement: str) -> str:
    s = statement
    for pattern, repl in _STATEMENT_RULES:
        s = pattern.sub(repl, s).strip()
    if not s:
        return ""
    return _TOKEN_RE.sub(_rewrite_token, s)


def parse_header(statement: str) -> Optional[Tuple[str, str]]:
    """
    Return (header, remainder) when the statement opens a flow graph.
    Anything other than LR collapses to TD.
    """
    m = _HEADER_RE.match(statement)
    if not m:
        return None
    direction = (m.group(1) or "").upper()
    header = "graph LR" if direction == "LR" else "graph TD"
    return header, statement[m.end():].strip()


def normalize_flow_graph(text: str) -> str:
    header = "graph TD"
    header_found = False
    body: List[str] = []

    for statement in split_statements(text):
        parsed = None if header_found else parse_header(statement)
        if parsed is None:
            body.append(statement)
            continue
        header, remainder = parsed
        header_found = True
        if remainder:
            body.extend(split_statements(remainder))

    lines = [header]
    for statement in body:
        normalized = normalize_statement(statement)
        if normalized:
            lines.append(normalized)
    return "\n".join(lines)
