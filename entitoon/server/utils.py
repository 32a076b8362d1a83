"""Shared utility functions for MCP tools."""

from typing import Any, Union

from entitoon.integration.toon import get_toon_config
from entitoon.integration.toon.converter import convert_to_toon
from entitoon.utils.errors import EntiToonError


def format_error(e: Exception, tool_name: str) -> dict:
    """Format error with context."""
    if isinstance(e, EntiToonError):
        return {**e.to_dict(), "error_type": type(e).__name__, "tool": tool_name}
    return {"error": str(e), "error_type": type(e).__name__, "tool": tool_name}


def format_response(data: Any, format: str = "json", key_field: str = None) -> Union[dict, str]:
    """Format response as JSON (default) or TOON.

    Args:
        data: Response payload (a record or list of records)
        format: 'json' for standard JSON, 'toon' for entity-tagged TOON lines
        key_field: Entity id field for TOON output; defaults to the configured one

    Returns:
        data unchanged for json format, str for toon format
    """
    if format == "toon":
        return convert_to_toon(data, key_field or get_toon_config().default_key_field)
    return data
