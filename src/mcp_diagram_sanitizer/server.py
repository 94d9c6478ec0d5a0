from __future__ import annotations
from mcp.server.fastmcp import FastMCP
from .tools import register as register_tools

mcp = FastMCP("diagram-sanitizer")

# Register tools once at import time
register_tools(mcp)
