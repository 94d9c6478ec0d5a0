# src/mcp_diagram_sanitizer/models/analysis.py
from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

GraphDiagramKind = Literal["business_flow", "screen_transition"]

GRAPH_DIAGRAM_FIELDS = {
    "business_flow": "business_flow_diagram",
    "screen_transition": "screen_transition_diagram",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ComponentInfo(_CamelModel):
    name: str = ""
    path: str = ""
    description: str = ""


class TechnologyInfo(_CamelModel):
    name: str = ""
    category: str = ""
    description: str = ""


class ScreenDescription(_CamelModel):
    screen_name: str = Field(default="", alias="screenName")
    description: str = ""
    ui_elements: List[str] = Field(default_factory=list, alias="uiElements")
    events: List[str] = Field(default_factory=list)
    validations: List[str] = Field(default_factory=list)


class CodeQualityAnalysis(_CamelModel):
    readability: str = ""
    extensibility: str = ""
    security: str = ""


class AnalysisResult(_CamelModel):
    overview: str = ""
    components: List[ComponentInfo] = Field(default_factory=list)
    technologies: List[TechnologyInfo] = Field(default_factory=list)
    business_flow_diagram: str = Field(default="", alias="businessFlowDiagram")
    sequence_diagram: str = Field(default="", alias="sequenceDiagram")
    screen_transition_diagram: str = Field(default="", alias="screenTransitionDiagram")
    database_erd: str = Field(default="", alias="databaseERD")
    screen_descriptions: List[ScreenDescription] = Field(default_factory=list, alias="screenDescriptions")
    code_quality_analysis: Optional[CodeQualityAnalysis] = Field(default=None, alias="codeQualityAnalysis")

    def graph_diagram(self, kind: GraphDiagramKind) -> str:
        return getattr(self, GRAPH_DIAGRAM_FIELDS[kind]) or ""

    def with_graph_diagram(self, kind: GraphDiagramKind, text: str) -> "AnalysisResult":
        return self.model_copy(update={GRAPH_DIAGRAM_FIELDS[kind]: text})
