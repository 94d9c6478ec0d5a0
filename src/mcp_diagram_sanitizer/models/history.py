# src/mcp_diagram_sanitizer/models/history.py
from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .analysis import AnalysisResult


class PrototypeArtifact(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    screens: List[str] = Field(default_factory=list)
    created_at: str = Field(default="", alias="createdAt")
    html: str = ""


class ProjectHistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    project_name: str = Field(default="", alias="projectName")
    file_name: str = Field(default="", alias="fileName")
    language: str = ""
    analyzed_at: str = Field(default="", alias="analyzedAt")  # ISO-8601
    summary: str = ""
    analysis_result: Optional[AnalysisResult] = Field(default=None, alias="analysisResult")
    prototypes: List[PrototypeArtifact] = Field(default_factory=list)
