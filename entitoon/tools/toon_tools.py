"""TOON conversion tools for the EntiToon MCP server."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from fastmcp import FastMCP

from entitoon.integration.toon import get_toon_config
from entitoon.integration.toon.converter import estimate_savings, validate_records
from entitoon.server.utils import format_error, format_response

logger = logging.getLogger(__name__)

Records = Union[Dict[str, Any], List[Any]]


async def convert_records_tool(
    records: Records,
    key_field: Optional[str] = None,
    include_stats: Optional[bool] = None,
) -> dict:
    """Convert records to TOON and wrap the result for an MCP response."""
    try:
        config = get_toon_config()
        key_field = key_field or config.default_key_field
        if include_stats is None:
            include_stats = config.include_stats

        toon = format_response(records, format="toon", key_field=key_field)
        response = {
            "success": True,
            "key_field": key_field,
            "toon": toon,
            "timestamp": datetime.now().isoformat(),
        }

        if config.validate_input:
            report = validate_records(records, key_field)
            response["validation"] = report.to_summary()

        if include_stats:
            stats = estimate_savings(records, toon, key_field)
            response["stats"] = {
                **stats.model_dump(),
                "saved_chars": stats.saved_chars,
                "savings_ratio": stats.savings_ratio,
            }
        return response
    except Exception as e:
        logger.error(f"convert_to_toon failed: {e}")
        return {"success": False, **format_error(e, "convert_to_toon")}


async def validate_records_tool(records: Records, key_field: Optional[str] = None) -> dict:
    """Validate records and wrap the report for an MCP response."""
    try:
        key_field = key_field or get_toon_config().default_key_field
        report = validate_records(records, key_field)
        return {
            "success": True,
            "key_field": key_field,
            "summary": report.to_summary(),
            "issues": [issue.model_dump(mode="json") for issue in report.issues],
        }
    except Exception as e:
        logger.error(f"validate_toon_input failed: {e}")
        return {"success": False, **format_error(e, "validate_toon_input")}


def register_tools(mcp: FastMCP):
    """Register TOON conversion tools with MCP instance."""

    @mcp.tool()
    async def convert_to_toon(
        records: Records,
        key_field: Optional[str] = None,
        include_stats: Optional[bool] = None,
    ) -> dict:
        """Convert JSON records into compact entity-tagged TOON lines.

        Args:
            records: A JSON object or a list of JSON objects
            key_field: Field used as the entity id (default: configured key field)
            include_stats: Include a JSON vs TOON size comparison
        """
        return await convert_records_tool(records, key_field, include_stats)

    @mcp.tool()
    async def validate_toon_input(records: Records, key_field: Optional[str] = None) -> dict:
        """Report records that would produce ambiguous TOON output.

        Args:
            records: A JSON object or a list of JSON objects
            key_field: Field used as the entity id (default: configured key field)
        """
        return await validate_records_tool(records, key_field)

    logger.info("Registered TOON conversion tools")
