"""
EntiToon - FastMCP server exposing TOON conversion tools.

Transports:
- "stdio" (default) for local MCP clients
- "http" for streaming HTTP on ENTITOON_HOST:ENTITOON_PORT
"""

import logging

from entitoon.integration.toon import get_toon_config
from entitoon.server.config import create_mcp_instance, get_server_address
from entitoon.tools import register_all_tools

logger = logging.getLogger(__name__)


def build_server():
    """Create the MCP instance and register every tool."""
    mcp = create_mcp_instance()
    register_all_tools(mcp)
    return mcp


def run_server(transport: str = "stdio", host: str = None, port: int = None) -> None:
    """Start the MCP server on the given transport."""
    mcp = build_server()
    config = get_toon_config()
    logger.info(f"Default key field: {config.default_key_field}")

    if transport == "http":
        default_host, default_port = get_server_address()
        host = host or default_host
        port = port or default_port
        logger.info(f"Starting EntiToon on http://{host}:{port}")
        mcp.run(transport="http", host=host, port=port)
    else:
        logger.info("Starting EntiToon on stdio")
        mcp.run(transport="stdio")


if __name__ == "__main__":
    from entitoon.utils.logging_config import setup_logging

    setup_logging(get_toon_config().log_level)
    run_server()
