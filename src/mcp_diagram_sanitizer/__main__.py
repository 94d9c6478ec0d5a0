from __future__ import annotations
import logging
import os
import sys
from .utils.logging import setup_logging

def main() -> None:
    """
    Entry point for running the server via the official SDK runner.

    Examples:
      MCP_TRANSPORT=streamable-http python -m mcp_diagram_sanitizer
      MCP_TRANSPORT=stdio           python -m mcp_diagram_sanitizer
    """
    setup_logging()
    log = logging.getLogger("mcp.diagram.main")

    if any(a in ("-h", "--help") for a in sys.argv[1:]):
        sys.stderr.write("mcp-diagram-sanitizer: runs an MCP server using the official SDK runner.\n")
        sys.stderr.flush()
        return

    from .server import mcp

    transport = os.getenv("MCP_TRANSPORT", "streamable-http").strip().lower()
    host = os.getenv("MCP_HOST", "0.0.0.0")
    try:
        port = int(os.getenv("MCP_PORT", "8001"))
    except ValueError:
        port = 8001
    mcp.settings.host = host
    mcp.settings.port = port

    if transport == "streamable-http":
        mcp.settings.streamable_http_path = os.getenv("MCP_MOUNT_PATH", "/mcp")
    elif transport == "sse":
        mcp.settings.sse_path = os.getenv("MCP_SSE_PATH", "/sse")

    log.info(
        "server.start",
        extra={
            "transport": transport,
            "host": host,
            "port": port,
            "tools": ["diagram.sanitize", "diagram.validate", "diagram.fallback",
                      "diagram.error_listing", "analysis.ensure_diagrams"],
        },
    )

    mcp.run(transport=transport)

if __name__ == "__main__":
    main()
