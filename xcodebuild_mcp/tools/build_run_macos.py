#!/usr/bin/env python3
"""build_run_macos tool - Build a macOS app and launch it"""

import logging

from xcodebuild_mcp.build_settings import resolve_app_path
from xcodebuild_mcp.build_utils import execute_xcode_build_command
from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.exceptions import BuildSettingsError
from xcodebuild_mcp.responses import ToolResponse, create_error_response, text_content
from xcodebuild_mcp.tool_factory import create_session_aware_tool, define_tool
from xcodebuild_mcp.tools.build_macos import BuildMacOSParams, macos_options
from xcodebuild_mcp.tools.common import PROJECT_PAIR, PROJECT_REQUIREMENTS

logger = logging.getLogger(__name__)


async def build_run_macos_logic(params: BuildMacOSParams, executor: CommandExecutor, fs=None, config=None) -> ToolResponse:
    """
    Build the scheme, locate the app bundle from the build settings and open it.

    Returns:
        The build response (errors and warnings included) extended with the
        launch outcome; a failed build is returned as is.
    """
    build_params = params.build_params()
    build_response = await execute_xcode_build_command(
        build_params,
        macos_options(params),
        prefer_xcodebuild=params.prefer_xcodebuild,
        build_action="build",
        executor=executor,
        fs=fs,
        config=config,
    )
    if build_response.is_error:
        return build_response

    try:
        app_path = await resolve_app_path(build_params, macos_options(params), executor)
    except BuildSettingsError as e:
        return create_error_response("Build succeeded, but failed to get app path to launch", e.message)

    try:
        result = await executor(["open", app_path], "Launch macOS App")
    except Exception as e:
        return create_error_response(f"Build succeeded, but failed to launch app {app_path}", str(e))

    if not result.success:
        return create_error_response(
            f"Build succeeded, but failed to launch app {app_path}", result.error
        )

    logger.info("Launched %s", app_path)
    # Next steps of a plain build point at get_app_path/launch, which already ran
    content = [item for item in build_response.content if "Next Steps:" not in item.text]
    content.append(text_content(f"✅ macOS app launched: {app_path}"))
    return ToolResponse(content=content, is_error=False)


tool = define_tool(
    "build_run_macos",
    "Build a macOS app from a project or workspace and launch it. "
    "Omitted parameters are taken from the session defaults.",
    BuildMacOSParams,
    create_session_aware_tool(
        BuildMacOSParams,
        build_run_macos_logic,
        requirements=PROJECT_REQUIREMENTS,
        exclusive_pairs=(PROJECT_PAIR,),
    ),
)
