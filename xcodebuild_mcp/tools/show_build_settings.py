#!/usr/bin/env python3
"""show_build_settings tool - Show the build settings of a scheme"""

from xcodebuild_mcp.build_settings import show_build_settings
from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.exceptions import BuildSettingsError
from xcodebuild_mcp.responses import ToolResponse, create_error_response, text_content
from xcodebuild_mcp.tool_factory import create_session_aware_tool, define_tool
from xcodebuild_mcp.tools.common import PROJECT_PAIR, PROJECT_REQUIREMENTS, SchemeParams


class ShowBuildSettingsParams(SchemeParams):
    pass


async def show_build_settings_logic(params: ShowBuildSettingsParams, executor: CommandExecutor) -> ToolResponse:
    try:
        output = await show_build_settings(params.build_params(), None, executor)
    except BuildSettingsError as e:
        return create_error_response("Failed to show build settings", e.message)

    return ToolResponse(content=[
        text_content(f"✅ Build settings for scheme {params.scheme}:"),
        text_content(output),
    ])


tool = define_tool(
    "show_build_settings",
    "Show the xcodebuild build settings of a scheme. Omitted parameters are taken from the session defaults.",
    ShowBuildSettingsParams,
    create_session_aware_tool(
        ShowBuildSettingsParams,
        show_build_settings_logic,
        requirements=PROJECT_REQUIREMENTS,
        exclusive_pairs=(PROJECT_PAIR,),
    ),
)
