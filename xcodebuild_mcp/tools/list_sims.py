#!/usr/bin/env python3
"""list_sims tool - List available simulators"""

import json
import logging

from pydantic import Field

from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.responses import ToolResponse, create_error_response, text_content
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool

logger = logging.getLogger(__name__)

_RUNTIME_PREFIX = "com.apple.CoreSimulator.SimRuntime."


class ListSimsParams(ToolParams):
    booted_only: bool = Field(False, description="Only list simulators that are currently booted")


def runtime_label(runtime_id: str) -> str:
    """'com.apple.CoreSimulator.SimRuntime.iOS-18-0' -> 'iOS 18.0'"""
    name = runtime_id[len(_RUNTIME_PREFIX):] if runtime_id.startswith(_RUNTIME_PREFIX) else runtime_id
    platform, _, version = name.partition("-")
    return f"{platform} {version.replace('-', '.')}".strip()


async def list_sims_logic(params: ListSimsParams, executor: CommandExecutor) -> ToolResponse:
    try:
        result = await executor(["xcrun", "simctl", "list", "devices", "available", "--json"], "List Simulators")
    except Exception as e:
        return create_error_response("Failed to list simulators", str(e))

    if not result.success:
        return create_error_response("Failed to list simulators", result.error)

    try:
        devices = json.loads(result.output).get("devices", {})
    except (ValueError, AttributeError) as e:
        logger.error("Unexpected simctl output: %s", e)
        return create_error_response("Failed to parse simulator list", str(e))

    lines = []
    for runtime in sorted(devices):
        simulators = [
            sim for sim in devices[runtime]
            if not params.booted_only or sim.get("state") == "Booted"
        ]
        if not simulators:
            continue
        lines.append(f"{runtime_label(runtime)}:")
        for sim in simulators:
            booted = " [Booted]" if sim.get("state") == "Booted" else ""
            lines.append(f"- {sim.get('name')} ({sim.get('udid')}){booted}")
        lines.append("")

    if not lines:
        return ToolResponse(content=[text_content("No booted simulators found." if params.booted_only
                                                  else "No available simulators found.")])

    return ToolResponse(content=[
        text_content("Available simulators:\n\n" + "\n".join(lines).rstrip()),
        text_content(
            "Next Steps:\n"
            "1. Build for a simulator: build_sim({ scheme: 'YOUR_SCHEME', simulatorId: 'UUID_FROM_ABOVE' })\n"
            "2. Or remember it for the session: session_set_defaults({ simulatorId: 'UUID_FROM_ABOVE' })"
        ),
    ])


tool = define_tool(
    "list_sims",
    "List the available simulators with their UUIDs, grouped by runtime.",
    ListSimsParams,
    create_typed_tool(ListSimsParams, list_sims_logic),
)
