#!/usr/bin/env python3
"""build_macos tool - Build a macOS app"""

from typing import Optional

from pydantic import Field

from xcodebuild_mcp.build_utils import PlatformBuildOptions, execute_xcode_build_command
from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.responses import ToolResponse
from xcodebuild_mcp.tool_factory import create_session_aware_tool, define_tool
from xcodebuild_mcp.tools.common import PROJECT_PAIR, PROJECT_REQUIREMENTS, Arch, BuildCommandParams
from xcodebuild_mcp.xcode import XcodePlatform


class BuildMacOSParams(BuildCommandParams):
    arch: Optional[Arch] = Field(None, description="Architecture to build for (arm64 or x86_64)")


def macos_options(params: BuildMacOSParams, log_prefix: str = "macOS Build") -> PlatformBuildOptions:
    return PlatformBuildOptions(platform=XcodePlatform.MACOS, log_prefix=log_prefix, arch=params.arch)


async def build_macos_logic(params: BuildMacOSParams, executor: CommandExecutor, fs=None, config=None) -> ToolResponse:
    return await execute_xcode_build_command(
        params.build_params(),
        macos_options(params),
        prefer_xcodebuild=params.prefer_xcodebuild,
        build_action="build",
        executor=executor,
        fs=fs,
        config=config,
    )


tool = define_tool(
    "build_macos",
    "Build a macOS app from a project or workspace. Omitted parameters are taken from the session defaults.",
    BuildMacOSParams,
    create_session_aware_tool(
        BuildMacOSParams,
        build_macos_logic,
        requirements=PROJECT_REQUIREMENTS,
        exclusive_pairs=(PROJECT_PAIR,),
    ),
)
