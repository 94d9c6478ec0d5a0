# src/mcp_diagram_sanitizer/engine/screens.py
from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Set

from ..models.analysis import AnalysisResult, ScreenDescription
from .labels import clean_label

_LABELED_NODE_RE = re.compile(
    r'(\w+)\s*(?:\[\s*"([^"]+)"\s*\]|\(\s*"([^"]+)"\s*\)|\{\s*"([^"]+)"\s*\})'
)


def _key(name: str) -> str:
    return (name or "").strip().lower()


def _screen_keys(screen: ScreenDescription) -> Set[str]:
    # fallback diagrams carry the cleaned spelling, model output may carry the raw one
    return {_key(screen.screen_name), _key(clean_label(screen.screen_name))}


def extract_screen_names(diagram: Optional[str]) -> List[str]:
    """Quoted node labels in first-seen order, de-duplicated ignoring case."""
    names: List[str] = []
    seen: Set[str] = set()
    for m in _LABELED_NODE_RE.finditer(diagram or ""):
        label = (m.group(2) or m.group(3) or m.group(4) or "").strip()
        if not label or _key(label) in seen:
            continue
        seen.add(_key(label))
        names.append(label)
    return names


def placeholder_screen(name: str) -> ScreenDescription:
    return ScreenDescription(
        screen_name=name,
        description=f"{name} screen (auto-generated placeholder).",
        ui_elements=["Main content panel", "Summary widget"],
        events=["User reviews data", "User navigates to other screens"],
        validations=["Basic validation is not specified"],
    )


def synchronize_screen_descriptions(
    labels: Sequence[str],
    screens: Sequence[ScreenDescription],
) -> List[ScreenDescription]:
    if not labels:
        return list(screens)

    existing: Dict[str, ScreenDescription] = {}
    for screen in screens:
        for key in _screen_keys(screen):
            existing.setdefault(key, screen)

    ordered = [existing.get(_key(label)) or placeholder_screen(label) for label in labels]
    label_keys = {_key(label) for label in labels}
    extras = [s for s in screens if not _screen_keys(s) & label_keys]
    return ordered + extras


def ensure_screen_descriptions_match_diagram(result: AnalysisResult) -> AnalysisResult:
    labels = extract_screen_names(result.screen_transition_diagram)
    if not labels:
        return result
    synced = synchronize_screen_descriptions(labels, result.screen_descriptions)
    return result.model_copy(update={"screen_descriptions": synced})
