#!/usr/bin/env python3
"""clean tool - Clean build products of a scheme"""

from typing import Literal

from pydantic import Field

from xcodebuild_mcp.build_utils import PlatformBuildOptions, execute_xcode_build_command
from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.responses import ToolResponse
from xcodebuild_mcp.tool_factory import create_session_aware_tool, define_tool
from xcodebuild_mcp.tools.common import PROJECT_PAIR, PROJECT_REQUIREMENTS, SchemeParams
from xcodebuild_mcp.xcode import XcodePlatform


class CleanParams(SchemeParams):
    platform: Literal["iOS", "watchOS", "tvOS", "visionOS", "macOS"] = Field(
        "iOS", description="Platform whose build products are cleaned"
    )


async def clean_logic(params: CleanParams, executor: CommandExecutor) -> ToolResponse:
    options = PlatformBuildOptions(platform=XcodePlatform(params.platform), log_prefix="Clean")
    return await execute_xcode_build_command(
        params.build_params(),
        options,
        prefer_xcodebuild=True,
        build_action="clean",
        executor=executor,
    )


tool = define_tool(
    "clean",
    "Clean the build products of a scheme with xcodebuild clean. "
    "Omitted parameters are taken from the session defaults.",
    CleanParams,
    create_session_aware_tool(
        CleanParams,
        clean_logic,
        requirements=PROJECT_REQUIREMENTS,
        exclusive_pairs=(PROJECT_PAIR,),
    ),
)
