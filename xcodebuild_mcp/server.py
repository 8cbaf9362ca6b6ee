#!/usr/bin/env python3
"""
MCP server exposing the xcodebuild tools over stdio.

Tool parameters are validated by each tool's own handler, which owns the
error wording; the SDK's input validation is switched off.
"""

import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from xcodebuild_mcp import __version__
from xcodebuild_mcp.process_registry import get_process_registry
from xcodebuild_mcp.responses import create_error_response, create_text_response
from xcodebuild_mcp.tool_factory import ToolDefinition
from xcodebuild_mcp.tools import get_tools

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "Build, test and run Xcode projects and Swift packages. Set scheme, project or workspace "
    "and simulator once with session_set_defaults to omit them from later calls."
)

TOOLS: Dict[str, ToolDefinition] = {definition.name: definition for definition in get_tools()}

server = Server("xcodebuild-mcp", version=__version__, instructions=INSTRUCTIONS)


@server.list_tools()
async def list_tools() -> List[Tool]:
    return [
        Tool(name=definition.name, description=definition.description, inputSchema=definition.schema)
        for definition in TOOLS.values()
    ]


@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
    definition = TOOLS.get(name)
    if definition is None:
        return create_text_response(f"Unknown tool: {name}", is_error=True).to_call_tool_result()

    logger.debug("Calling tool %s", name)
    try:
        response = await definition.handler(arguments or {})
    except Exception as e:
        logger.exception("Tool %s raised", name)
        return create_error_response(f"Tool {name} failed", str(e)).to_call_tool_result()

    if response.is_error:
        logger.info("Tool %s returned an error", name)
    return response.to_call_tool_result()


async def run_server():
    """Serve on stdio until the client disconnects, then stop background processes."""
    logger.info("xcodebuild-mcp %s starting with %d tools", __version__, len(TOOLS))
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        stopped = await get_process_registry().force_terminate_all()
        if stopped:
            logger.info("Stopped %d background processes", stopped)
