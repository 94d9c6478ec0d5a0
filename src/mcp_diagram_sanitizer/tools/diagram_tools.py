from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from ..engine.error_listing import format_error_listing
from ..engine.fallback import build_business_flow_fallback, build_screen_transition_fallback
from ..engine.sanity import Dialect, classify_dialect, is_renderable_flow_graph, sanitize_diagram_text, strip_code_fences
from ..errors import InvalidRequestError
from ..models.io_contracts import ErrorListingRequest, FallbackRequest, SanitizeRequest, SanitizeResponse
from ..utils.logging import preview, want_verbose_inputs

log = logging.getLogger("mcp.diagram.tools.diagram")

def sanitize_diagram(text: str) -> Dict[str, Any]:
    t0 = time.time()
    req = SanitizeRequest(text=text or "")
    dialect = classify_dialect(strip_code_fences(req.text))
    cleaned = sanitize_diagram_text(req.text)
    resp = SanitizeResponse(
        dialect=dialect.value,
        instructions=cleaned,
        renderable=is_renderable_flow_graph(cleaned) if dialect is Dialect.FLOW_GRAPH else None,
    )
    log.info("tool.sanitize", extra={
        "dialect": dialect.value,
        "in_len": len(req.text),
        "out_len": len(cleaned),
        "took_ms": int((time.time() - t0) * 1000),
        **({"input": req.text} if want_verbose_inputs() else {"preview": preview(cleaned, 200)}),
    })
    return resp.model_dump()

def validate_diagram(text: str) -> Dict[str, Any]:
    renderable = is_renderable_flow_graph(strip_code_fences(text or ""))
    log.info("tool.validate", extra={"renderable": renderable, "len": len(text or "")})
    return {"renderable": renderable}

def fallback_diagram(
    kind: str = "business_flow",
    screens: Optional[List[Dict[str, Any]]] = None,
    components: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    try:
        req = FallbackRequest(kind=kind, screens=screens or [], components=components or [])
    except ValidationError as e:
        log.exception("tool.fallback.invalid")
        err = InvalidRequestError(f"invalid_request: {e}", data={"errors": e.error_count()})
        return err.to_tool_result(instructions="")

    if req.kind == "screen_transition":
        instr = build_screen_transition_fallback(req.screens)
    else:
        instr = build_business_flow_fallback(req.screens, req.components)
    log.info("tool.fallback", extra={"kind": req.kind, "screens": len(req.screens), "components": len(req.components)})
    return {"instructions": instr}

def error_listing(text: str, message: str = "") -> Dict[str, Any]:
    req = ErrorListingRequest(text=text or "", message=message or "")
    return {"listing": format_error_listing(req.text, req.message)}

def register_diagram_tools(mcp: FastMCP) -> None:
    mcp.tool(name="diagram.sanitize", title="Sanitize Mermaid Diagram")(sanitize_diagram)
    mcp.tool(name="diagram.validate", title="Check Flow Graph Renderability")(validate_diagram)
    mcp.tool(name="diagram.fallback", title="Synthesize Fallback Flow Graph")(fallback_diagram)
    mcp.tool(name="diagram.error_listing", title="Numbered Diagram Error Listing")(error_listing)
    log.info("tool.register", extra={"tools": ["diagram.sanitize", "diagram.validate", "diagram.fallback", "diagram.error_listing"]})
