# src/mcp_diagram_sanitizer/engine/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_PROJECT_CONTEXT_LIMIT = 120_000

_UNAVAILABLE = "[context unavailable; rely on the screen descriptions]"


@dataclass(frozen=True)
class ProjectContext:
    """Project source text handed to regeneration prompts, capped at `limit` characters."""

    text: str = ""
    limit: int = DEFAULT_PROJECT_CONTEXT_LIMIT

    @classmethod
    def remember(cls, text: Optional[str], limit: int = DEFAULT_PROJECT_CONTEXT_LIMIT) -> "ProjectContext":
        limit = max(0, int(limit))
        return cls(text=(text or "")[:limit], limit=limit)

    @property
    def available(self) -> bool:
        return bool(self.text.strip())

    def for_prompt(self) -> str:
        return self.text if self.available else _UNAVAILABLE
