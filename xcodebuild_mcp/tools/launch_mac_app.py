#!/usr/bin/env python3
"""launch_mac_app tool - Launch a built macOS app"""

from typing import List, Optional

from pydantic import Field

from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.filesystem import FileSystemExecutor
from xcodebuild_mcp.responses import ToolResponse, create_error_response, create_text_response
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool
from xcodebuild_mcp.validation import validate_file_exists


class LaunchMacAppParams(ToolParams):
    app_path: str = Field(description="Path to the .app bundle to launch")
    args: Optional[List[str]] = Field(None, description="Arguments passed to the app")


async def launch_mac_app_logic(params: LaunchMacAppParams,
                               executor: CommandExecutor,
                               fs: Optional[FileSystemExecutor] = None) -> ToolResponse:
    validation = validate_file_exists(params.app_path, fs)
    if not validation.is_valid:
        return validation.error_response

    command = ["open", params.app_path]
    if params.args:
        command.extend(["--args", *params.args])

    try:
        result = await executor(command, "Launch macOS App")
    except Exception as e:
        return create_error_response("Launch macOS app operation failed", str(e))

    if not result.success:
        return create_error_response("Launch macOS app operation failed", result.error)
    return create_text_response(f"✅ macOS app launched successfully: {params.app_path}")


tool = define_tool(
    "launch_mac_app",
    "Launch a macOS app bundle, optionally with arguments.",
    LaunchMacAppParams,
    create_typed_tool(LaunchMacAppParams, launch_mac_app_logic),
)
