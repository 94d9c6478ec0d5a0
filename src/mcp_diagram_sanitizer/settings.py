# src/mcp_diagram_sanitizer/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass

from .engine.context import DEFAULT_PROJECT_CONTEXT_LIMIT

def _truthy(v: str | None) -> bool:
    return str(v or "").strip().lower() in {"1", "true", "yes", "y", "on"}

def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default

def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default

@dataclass
class Settings:
    llm_provider: str = "none"
    llm_model: str = "none"
    temperature: float = 0.1
    max_tokens: int = 1200
    enable_real_llm: bool = False
    project_context_limit: int = DEFAULT_PROJECT_CONTEXT_LIMIT
    history_path: str = "project-history.json"

    @classmethod
    def from_env(cls) -> "Settings":
        provider = os.getenv("LLM_PROVIDER", "none")
        model = os.getenv("LLM_MODEL", "none")
        enable = _truthy(os.getenv("ENABLE_REAL_LLM")) and provider != "none" and model != "none"
        return cls(
            llm_provider=provider,
            llm_model=model,
            temperature=_float_env("LLM_TEMPERATURE", 0.1),
            max_tokens=_int_env("LLM_MAX_TOKENS", 1200),
            enable_real_llm=enable,
            project_context_limit=_int_env("PROJECT_CONTEXT_LIMIT", DEFAULT_PROJECT_CONTEXT_LIMIT),
            history_path=os.getenv("HISTORY_PATH", "project-history.json"),
        )
