"""Tool registry for the EntiToon MCP server."""
import logging

from fastmcp import FastMCP

from entitoon.tools.toon_tools import register_tools as register_toon_tools

logger = logging.getLogger(__name__)


def register_all_tools(mcp: FastMCP):
    """Register all tools with the MCP instance."""
    register_toon_tools(mcp)
