from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from .analysis_guard import register_analysis_tools
from .diagram_tools import register_diagram_tools
from .history_tools import register_history_tools

def register(mcp: FastMCP) -> None:
    register_diagram_tools(mcp)
    register_analysis_tools(mcp)
    register_history_tools(mcp)
