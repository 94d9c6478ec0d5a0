from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Sequence, Tuple

from ..errors import EmptyModelResponseError
from ..models.analysis import AnalysisResult, GraphDiagramKind, ScreenDescription
from ..utils.logging import preview, redact_env, want_verbose_llm
from .context import ProjectContext
from .fallback import build_fallback_diagram
from .json_utils import unwrap_json_string
from .sanity import is_renderable_flow_graph, strip_code_fences
from .screens import ensure_screen_descriptions_match_diagram

log = logging.getLogger("mcp.diagram.engine.driver")

LLMCallable = Callable[[str, str, float, int], Awaitable[str]]

GRAPH_DIAGRAM_KINDS: Tuple[GraphDiagramKind, ...] = ("business_flow", "screen_transition")

_GRAPH_RULES = (
    "1. The very first line must be exactly: graph TD\n"
    "2. Never include semicolons anywhere in the diagram.\n"
    '3. Every node or subgraph label MUST be wrapped in double quotes, e.g., A["User"].\n'
    "4. Node identifiers (A, Step1, Backend) must be ASCII-only with no spaces.\n"
    '5. Every edge label must be wrapped like -->|"Some Label"|, with no spaces between the pipe and the quote.\n'
    "6. Each statement must be on its own line: node definitions and edges on separate lines.\n"
    "7. Do not add comments, markdown, or code fences; only the diagram content."
)

def _system_prompt() -> str:
    return (
        "You are a senior analyst. Output ONLY a valid Mermaid 'graph TD' diagram. "
        "No prose. No code fences."
    )

def build_graph_prompt(
    kind: GraphDiagramKind,
    language: str,
    context: ProjectContext,
    screens: Sequence[ScreenDescription],
) -> str:
    base = (
        "Critical rules (violating any of these makes the diagram unusable):\n"
        f"{_GRAPH_RULES}\n"
        f"Keep all labels strictly in {language}.\n"
    )
    if kind == "screen_transition":
        summary = "\n".join(f"- {s.screen_name}: {s.description}" for s in screens)
        return (
            f"{base}\n"
            "Diagram Type: Screen Transition Diagram.\n"
            "Goal: Visualize how a user moves between the major UI screens or flows.\n"
            "Use the inferred navigation paths from the project plus these screen descriptions:\n"
            f"{summary or 'No screen descriptions were provided; infer from the project structure.'}\n\n"
            f"Project context (files and contents):\n{context.for_prompt()}"
        )
    return (
        f"{base}\n"
        "Diagram Type: Business Flow Diagram.\n"
        "Goal: Capture the primary business/user process end-to-end "
        "(e.g., user action -> backend -> database).\n\n"
        f"Project context (files and contents):\n{context.for_prompt()}"
    )

def _log_diagram(source: str, kind: GraphDiagramKind, diagram: Optional[str]) -> None:
    if not diagram:
        log.warning("engine.diagram.empty", extra={"source": source, "kind": kind})
        return
    log.info("engine.diagram", extra={"source": source, "kind": kind, "preview": preview(diagram, 600)})

async def regenerate_graph_diagram(
    kind: GraphDiagramKind,
    *,
    llm_call: LLMCallable,
    context: ProjectContext,
    language: str,
    screens: Sequence[ScreenDescription],
    temperature: float = 0.1,
    max_tokens: int = 1200,
) -> str:
    """One model round-trip for a corrected diagram. Raises when the reply is empty."""
    system = _system_prompt()
    user = build_graph_prompt(kind, language, context, screens)
    if want_verbose_llm():
        log.info("engine.llm.request.verbose", extra={
            "kind": kind,
            "system_preview": preview(redact_env(system)),
            "user_preview": preview(redact_env(user)),
        })
    else:
        log.info("engine.llm.request", extra={"kind": kind, "temperature": temperature, "max_tokens": max_tokens})

    text = await llm_call(system, user, temperature, max_tokens)
    cleaned = strip_code_fences(unwrap_json_string((text or "").strip()))
    if not cleaned:
        raise EmptyModelResponseError(f"Received an empty response while regenerating the {kind} diagram.")
    return cleaned

def ensure_graph_diagrams(result: AnalysisResult) -> AnalysisResult:
    """
    Replace every non-renderable flow-graph field with its deterministic
    fallback, then line the screen descriptions up with the transition diagram.
    Needs no I/O; also applied to entries reloaded from history.
    """
    normalized = result
    for kind in GRAPH_DIAGRAM_KINDS:
        if not is_renderable_flow_graph(normalized.graph_diagram(kind)):
            log.info("engine.guard.fallback", extra={"kind": kind})
            normalized = normalized.with_graph_diagram(kind, build_fallback_diagram(kind, normalized))
    return ensure_screen_descriptions_match_diagram(normalized)

async def guarantee_graph_diagrams(
    result: AnalysisResult,
    *,
    llm_call: Optional[LLMCallable] = None,
    context: Optional[ProjectContext] = None,
    language: str = "English",
    temperature: float = 0.1,
    max_tokens: int = 1200,
) -> AnalysisResult:
    """
    Classify each flow-graph field; a rejected field gets a single regeneration
    attempt when a model is available, and the deterministic fallback otherwise.
    """
    ctx = context or ProjectContext()
    current = result

    for kind in GRAPH_DIAGRAM_KINDS:
        diagram = current.graph_diagram(kind)
        _log_diagram("initial", kind, diagram)
        if is_renderable_flow_graph(diagram) or llm_call is None:
            continue
        try:
            regenerated = await regenerate_graph_diagram(
                kind,
                llm_call=llm_call,
                context=ctx,
                language=language,
                screens=current.screen_descriptions,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception:
            log.exception("engine.guard.regenerate_failed", extra={"kind": kind})
            continue
        _log_diagram("regenerated", kind, regenerated)
        if is_renderable_flow_graph(regenerated):
            current = current.with_graph_diagram(kind, regenerated)
        else:
            log.warning("engine.guard.regenerated_invalid", extra={"kind": kind})

    return ensure_graph_diagrams(current)
