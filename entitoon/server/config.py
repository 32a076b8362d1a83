"""Server configuration and MCP instance setup."""
import logging
import os

from fastmcp import FastMCP

logger = logging.getLogger(__name__)

SERVER_NAME = "EntiToon"


def create_mcp_instance() -> FastMCP:
    """Create the FastMCP instance.

    Returns:
        Configured FastMCP instance
    """
    mcp = FastMCP(SERVER_NAME)
    logger.info(f"Created MCP server '{SERVER_NAME}'")
    return mcp


def get_server_address() -> tuple:
    """Get host and port for the HTTP transport."""
    host = os.getenv("ENTITOON_HOST", "127.0.0.1")
    port = int(os.getenv("ENTITOON_PORT", "8080"))
    return host, port
