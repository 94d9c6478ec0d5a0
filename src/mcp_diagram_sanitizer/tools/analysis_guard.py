from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from ..engine.context import ProjectContext
from ..engine.driver import LLMCallable, guarantee_graph_diagrams
from ..engine.json_utils import minify_json
from ..errors import InvalidRequestError, ModelUnavailableError
from ..models.analysis import AnalysisResult
from ..models.io_contracts import EnsureDiagramsRequest
from ..settings import Settings
from ..utils.logging import preview, want_verbose_inputs

log = logging.getLogger("mcp.diagram.tools.analysis")

def build_llm_call(settings: Settings) -> Optional[LLMCallable]:
    """
    OpenAI-backed callable when real LLM use is enabled; None means fallback-only mode.
    Raises ModelUnavailableError when the provider is selected but its client cannot start.
    """
    if not settings.enable_real_llm:
        log.info("tool.register.dummy_mode", extra={"reason": "ENABLE_REAL_LLM is false"})
        return None

    provider = (settings.llm_provider or "").strip().lower()
    if provider != "openai":
        log.warning("tool.register.llm_unsupported", extra={"provider": provider})
        return None

    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ModelUnavailableError("OPENAI_API_KEY is not set", data={"provider": provider})
    try:
        from openai import AsyncOpenAI
        client = AsyncOpenAI(api_key=api_key)
    except Exception as e:
        raise ModelUnavailableError(f"OpenAI client init failed: {e}", data={"provider": provider}) from e

    model = settings.llm_model

    async def _llm_call(system: str, user: str, temperature: float, max_tokens: int) -> str:
        resp = await client.chat.completions.create(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )
        return (resp.choices[0].message.content or "").strip()

    log.info("tool.register.llm_ready", extra={"provider": "OpenAI", "model": model})
    return _llm_call

async def ensure_analysis_diagrams(
    result: Dict[str, Any],
    project_context: Optional[str] = None,
    language: str = "English",
    *,
    settings: Optional[Settings] = None,
    llm_call: Optional[LLMCallable] = None,
) -> Dict[str, Any]:
    settings = settings or Settings()
    t0 = time.time()
    try:
        req = EnsureDiagramsRequest(result=result, project_context=project_context, language=language)
        analysis = AnalysisResult.model_validate(req.result)
        result_min = minify_json(req.result)
        if want_verbose_inputs():
            log.info("tool.request.verbose", extra={
                "language": req.language,
                "result": req.result,
                "result_size": len(result_min),
            })
        else:
            log.info("tool.request", extra={
                "language": req.language,
                "result_preview": preview(result_min),
                "result_size": len(result_min),
                "context_size": len(req.project_context or ""),
            })
    except ValidationError as e:
        log.exception("tool.request.invalid")
        err = InvalidRequestError(f"invalid_request: {e}", data={"errors": e.error_count()})
        return err.to_tool_result()

    guaranteed = await guarantee_graph_diagrams(
        analysis,
        llm_call=llm_call,
        context=ProjectContext.remember(req.project_context, settings.project_context_limit),
        language=req.language,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )
    log.info("tool.response", extra={
        "took_ms": int((time.time() - t0) * 1000),
        "mode": "llm" if llm_call else "fallback-only",
        "screens": len(guaranteed.screen_descriptions),
    })
    return {"result": guaranteed.model_dump(by_alias=True)}

def register_analysis_tools(mcp: FastMCP) -> None:
    settings = Settings.from_env()
    try:
        llm_call = build_llm_call(settings)
    except ModelUnavailableError as e:
        log.error("tool.register.llm_init_failed", extra={"error": e.message, "code": e.code, **e.data})
        llm_call = None
    log.info("tool.register", extra={
        "tool": "analysis.ensure_diagrams",
        "llm_enabled": llm_call is not None,
        "llm_provider": settings.llm_provider,
        "llm_model": settings.llm_model,
    })

    @mcp.tool(name="analysis.ensure_diagrams", title="Guarantee Renderable Flow Graphs")
    async def analysis_ensure_diagrams(
        result: Dict[str, Any],
        project_context: Optional[str] = None,
        language: str = "English",
    ) -> Dict[str, Any]:
        """
        - result: analysis JSON (camelCase keys as persisted in history)
        - project_context: project source text used if a diagram is regenerated
        - language: language the regenerated labels should use
        """
        return await ensure_analysis_diagrams(
            result, project_context, language, settings=settings, llm_call=llm_call
        )
