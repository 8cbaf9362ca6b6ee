#!/usr/bin/env python3
"""stop_mac_app tool - Stop a running macOS app"""

from typing import Optional

from pydantic import Field

from xcodebuild_mcp.command import CommandExecutor, escape_applescript_string, fallback_chain
from xcodebuild_mcp.responses import ToolResponse, create_error_response, create_text_response
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool
from xcodebuild_mcp.validation import validate_at_least_one_param


class StopMacAppParams(ToolParams):
    app_name: Optional[str] = Field(None, description="Name of the app, e.g. 'Calculator'")
    process_id: Optional[int] = Field(None, description="PID of the app process")


def stop_command(params: StopMacAppParams):
    """
    A PID is killed directly. A name is tried with pkill first and, failing
    that, asked to quit through AppleScript.
    """
    if params.process_id is not None:
        return ["kill", str(params.process_id)], False
    quit_script = f'tell application "{escape_applescript_string(params.app_name)}" to quit'
    return [fallback_chain(["pkill", "-f", params.app_name], ["osascript", "-e", quit_script])], True


async def stop_mac_app_logic(params: StopMacAppParams, executor: CommandExecutor) -> ToolResponse:
    validation = validate_at_least_one_param("appName", params.app_name, "processId", params.process_id)
    if not validation.is_valid:
        return validation.error_response

    target = f"PID {params.process_id}" if params.process_id is not None else params.app_name
    command, use_shell = stop_command(params)

    try:
        result = await executor(command, "Stop macOS App", use_shell=use_shell)
    except Exception as e:
        return create_error_response(f"Stop macOS app operation failed for {target}", str(e))

    if not result.success:
        return create_error_response(f"Stop macOS app operation failed for {target}", result.error)
    return create_text_response(f"✅ macOS app stopped successfully: {target}")


tool = define_tool(
    "stop_mac_app",
    "Stop a running macOS app by name or process ID.",
    StopMacAppParams,
    create_typed_tool(StopMacAppParams, stop_mac_app_logic),
)
