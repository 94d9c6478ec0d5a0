# src/mcp_diagram_sanitizer/engine/fallback.py
from __future__ import annotations

import re
from typing import List, Pattern, Sequence

from ..models.analysis import AnalysisResult, ComponentInfo, GraphDiagramKind, ScreenDescription
from .labels import clean_label

LOGIC_KEYWORDS = re.compile(r"(service|controller|api|logic|backend|handler)", flags=re.IGNORECASE)
DATA_KEYWORDS = re.compile(r"(repository|dao|model|entity|database|db|storage|persistence)", flags=re.IGNORECASE)

LOGIC_FALLBACK = "Application Logic Layer"
DATA_FALLBACK = "Data Store"

MAX_BUSINESS_SCREENS = 3


def pick_component_label(components: Sequence[ComponentInfo], keywords: Pattern[str], fallback: str) -> str:
    for comp in components or []:
        if keywords.search(comp.name or "") or keywords.search(comp.path or ""):
            desc = f" - {comp.description}" if comp.description else ""
            return f"{comp.name}{desc}"
    return fallback


def _node(node_id: str, label: str) -> str:
    return f'  {node_id}["{clean_label(label)}"]'


def _chain(ids: List[str]) -> List[str]:
    return [f"  {a} --> {b}" for a, b in zip(ids, ids[1:])]


def build_business_flow_fallback(
    screens: Sequence[ScreenDescription],
    components: Sequence[ComponentInfo],
) -> str:
    chosen = list(screens or [])[:MAX_BUSINESS_SCREENS] or [
        ScreenDescription(screen_name="Primary Screen", description="Key user interaction surface")
    ]
    logic = pick_component_label(components, LOGIC_KEYWORDS, LOGIC_FALLBACK)
    data = pick_component_label(components, DATA_KEYWORDS, DATA_FALLBACK)

    ui_ids = [f"UI{i}" for i in range(len(chosen))]
    lines = ["graph TD", _node("User", "User initiates action")]
    lines += [_node(uid, s.screen_name) for uid, s in zip(ui_ids, chosen)]
    lines += [
        _node("Logic", logic),
        _node("Data", data),
        _node("Outcome", "Business outcome delivered"),
    ]

    lines += _chain(["User", *ui_ids, "Logic"])
    lines += ["  Logic --> Data", "  Data --> Logic", "  Logic --> Outcome"]
    return "\n".join(lines)


def build_screen_transition_fallback(screens: Sequence[ScreenDescription]) -> str:
    listed = list(screens or []) or [ScreenDescription(screen_name="Main Screen")]

    ids = [f"Screen{i}" for i in range(len(listed))]
    lines = ["graph TD", _node("Start", "User Entry")]
    for i, (sid, screen) in enumerate(zip(ids, listed)):
        lines.append(_node(sid, (screen.screen_name or "").strip() or f"Screen {i + 1}"))
    lines.append(_node("EndPoint", "Goal Achieved"))

    lines += _chain(["Start", *ids, "EndPoint"])
    return "\n".join(lines)


def build_fallback_diagram(kind: GraphDiagramKind, result: AnalysisResult) -> str:
    if kind == "screen_transition":
        return build_screen_transition_fallback(result.screen_descriptions)
    return build_business_flow_fallback(result.screen_descriptions, result.components)
