# src/mcp_diagram_sanitizer/engine/sanity.py
from __future__ import annotations

import re
from enum import Enum

from .erd import normalize_er_diagram
from .flowgraph import ARROW_ALTERNATION, normalize_flow_graph
from .sequence import normalize_sequence


class Dialect(str, Enum):
    FLOW_GRAPH = "graph"
    ER = "erDiagram"
    SEQUENCE = "sequenceDiagram"
    UNRECOGNIZED = "unrecognized"
    EMPTY = "empty"


_KEYWORD_RE = re.compile(r"^(graph|erDiagram|sequenceDiagram)\b")
_GRAPH_HEADER_RE = re.compile(r"^graph\s", flags=re.IGNORECASE)
_NODE_RE = re.compile(r"\w+[\[({]")
_EDGE_RE = re.compile(ARROW_ALTERNATION)

_NORMALIZERS = {
    Dialect.FLOW_GRAPH: normalize_flow_graph,
    Dialect.ER: normalize_er_diagram,
    Dialect.SEQUENCE: normalize_sequence,
}


def strip_code_fences(text: str) -> str:
    s = (text or "").strip()
    if s.startswith("```"):
        s = re.sub(r"^```[a-zA-Z0-9]*\s*", "", s)
        s = re.sub(r"\s*```$", "", s)
    return s.strip()


def classify_dialect(text: str) -> Dialect:
    s = (text or "").strip()
    if not s:
        return Dialect.EMPTY
    m = _KEYWORD_RE.match(s)
    if not m:
        return Dialect.UNRECOGNIZED
    return Dialect(m.group(1))


def sanitize(text: str) -> str:
    """
    Route diagram text to the normalizer for its dialect.
    Unrecognized dialects come back trimmed but otherwise untouched.
    """
    s = (text or "").strip()
    dialect = classify_dialect(s)
    if dialect is Dialect.EMPTY:
        return ""
    if dialect is Dialect.UNRECOGNIZED:
        return s
    return _NORMALIZERS[dialect](s)


def sanitize_diagram_text(text: str) -> str:
    """Same as sanitize() but tolerant of a ```mermaid fence around the reply."""
    return sanitize(strip_code_fences(text))


def is_renderable_flow_graph(text: str) -> bool:
    s = (text or "").strip()
    if not s:
        return False
    if not _GRAPH_HEADER_RE.match(s):
        return False

    statements = [ln.strip() for ln in s.splitlines()[1:]]
    statements = [ln for ln in statements if ln]
    if not statements:
        return False

    has_node = any(_NODE_RE.search(ln) for ln in statements)
    has_edge = any(_EDGE_RE.search(ln) for ln in statements)
    return has_node and has_edge
