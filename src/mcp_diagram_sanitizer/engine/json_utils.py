# src/mcp_diagram_sanitizer/engine/json_utils.py
from __future__ import annotations

import json
from typing import Any


def minify_json(obj: Any) -> str:
    try:
        return json.dumps(obj or {}, ensure_ascii=False, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return "{}"


def unwrap_json_string(text: str) -> str:
    """
    Models asked for a JSON string schema reply with `"graph TD\\n..."`.
    Decode that; any other payload is returned as received.
    """
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError):
        return text
    return parsed if isinstance(parsed, str) else text
