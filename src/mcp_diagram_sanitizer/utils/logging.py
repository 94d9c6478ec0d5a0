from __future__ import annotations

import json
import logging
import os
import re
import sys
from typing import Any, Optional

# ---------- small helpers ----------

_SECRET_KEY_RE = re.compile(r"(sk-[a-zA-Z0-9_\-]{8,})")
_API_KEY_ASSIGN_RE = re.compile(r"(?i)(api[_-]?key\s*[:=]\s*)([A-Za-z0-9_\-]{6,})")

def preview(s: str | bytes | Any, n: int = 300) -> str:
    if isinstance(s, bytes):
        s = s.decode("utf-8", "replace")
    s = str(s).strip()
    return s if len(s) <= n else (s[: n - 20] + "... <truncated>")

def _truthy(v: str | None) -> bool:
    return str(v or "").strip().lower() in {"1", "true", "yes", "y", "on"}

def want_verbose_inputs() -> bool:
    return _truthy(os.getenv("LOG_VERBOSE_INPUTS"))

def want_verbose_llm() -> bool:
    return _truthy(os.getenv("LOG_VERBOSE_LLM"))

def redact_env(s: str) -> str:
    """Mask API keys that leak into prompts before they reach the log."""
    s2 = _SECRET_KEY_RE.sub("sk-***REDACTED***", s or "")
    return _API_KEY_ASSIGN_RE.sub(r"\1***REDACTED***", s2)

# ---------- logging setup ----------

_STD_ATTRS = {
    "name","msg","args","levelname","levelno","pathname","filename","module","exc_info",
    "exc_text","stack_info","lineno","funcName","created","msecs","relativeCreated",
    "thread","threadName","processName","process","message","asctime","taskName",
}

class ExtraJSONFormatter(logging.Formatter):
    """
    Format: "YYYY-mm-dd HH:MM:SS.mmm | LEVEL | logger | message | {json of extras}"
    """
    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()

        base_dt = self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S")
        ts = f"{base_dt}.{int(record.msecs):03d}"

        extras = {k: v for k, v in record.__dict__.items() if k not in _STD_ATTRS}

        base = f"{ts} | {record.levelname} | {record.name} | {record.message}"
        if record.exc_info:
            base = f"{base}\n{self.formatException(record.exc_info)}"
        if extras:
            try:
                j = json.dumps(extras, ensure_ascii=False, default=str)
            except (TypeError, ValueError):
                j = '{"_format_error":"<unserializable extras>"}'
            return f"{base} | {j}"
        return base

def setup_logging(level: Optional[str] = None) -> None:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    lvl = getattr(logging, name, logging.INFO)
    if not isinstance(lvl, int):
        lvl = logging.INFO

    root = logging.getLogger()
    if getattr(root, "_diagram_logging_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(ExtraJSONFormatter())
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(lvl)
    root._diagram_logging_configured = True  # type: ignore[attr-defined]
