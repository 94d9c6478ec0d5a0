# src/mcp_diagram_sanitizer/engine/erd.py
from __future__ import annotations

import re
from typing import List

from .labels import quote_label

_FENCE_RE = re.compile(r"```")
_INLINE_CLASS_RE = re.compile(r"([A-Za-z0-9_]+)\s*:::\s*(\w+)")
_CLASSDEF_RE = re.compile(r"classDef\s+[^\n]+")
# "}  ORDER {" -> "}\nORDER {"; "}o--" cardinalities carry no whitespace
_RUN_TOGETHER_RE = re.compile(r"\}\s+(?=[A-Za-z0-9_])")
_CLASS_LINE_RE = re.compile(r"^class(?:Def)?\b")
_RELATIONSHIP_RE = re.compile(r"^(.*\s:\s*)(.*?)\s*$")
_CARDINALITY_RE = re.compile(r"[|o}][|.-]{2}[o|{]")


def _quote_relationship(line: str) -> str:
    m = _RELATIONSHIP_RE.match(line)
    if not m or not _CARDINALITY_RE.search(line):
        return line
    label = m.group(2).strip()
    if not label or label.startswith('"') or label.endswith('"'):
        return line
    return f"{m.group(1).strip()} {quote_label(label)}"


def normalize_er_diagram(text: str) -> str:
    """
    Repair an LLM-written erDiagram.

    Inline `Entity:::cls` shorthand becomes a `class Entity cls` statement and
    every classDef is moved after the body, followed by those class statements.
    Relationship labels next to a cardinality token are double-quoted.
    """
    class_defs: List[str] = []
    class_assignments: List[str] = []

    def _take_inline_class(m: "re.Match[str]") -> str:
        entity = m.group(1).strip()
        class_assignments.append(f"class {entity} {m.group(2)}")
        return entity

    def _take_class_def(m: "re.Match[str]") -> str:
        class_defs.append(m.group(0).replace(";", "").strip())
        return ""

    working = _FENCE_RE.sub("", text or "")
    working = _INLINE_CLASS_RE.sub(_take_inline_class, working)
    working = _CLASSDEF_RE.sub(_take_class_def, working)
    working = _RUN_TOGETHER_RE.sub("}\n", working)

    body: List[str] = []
    for raw in working.split("\n"):
        line = raw.strip()
        if not line:
            continue
        if _CLASS_LINE_RE.match(line):
            line = line.replace(";", "").strip()
        else:
            line = _quote_relationship(line)
        body.append(line)

    return "\n".join(ln for ln in body + class_defs + class_assignments if ln)
