# src/mcp_diagram_sanitizer/models/io_contracts.py
from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .analysis import ComponentInfo, GraphDiagramKind, ScreenDescription


class SanitizeRequest(BaseModel):
    text: str = ""


class SanitizeResponse(BaseModel):
    dialect: str
    instructions: str
    renderable: Optional[bool] = None  # flow graphs only


class FallbackRequest(BaseModel):
    kind: GraphDiagramKind = "business_flow"
    screens: List[ScreenDescription] = Field(default_factory=list)
    components: List[ComponentInfo] = Field(default_factory=list)


class EnsureDiagramsRequest(BaseModel):
    result: Dict[str, Any]
    project_context: Optional[str] = None
    language: str = "English"


class ErrorListingRequest(BaseModel):
    text: str = ""
    message: str = ""
