#!/usr/bin/env python3
"""build_device tool - Build an app for a physical device"""

from typing import Optional

from pydantic import Field

from xcodebuild_mcp.build_utils import PlatformBuildOptions, execute_xcode_build_command
from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.responses import ToolResponse
from xcodebuild_mcp.tool_factory import create_session_aware_tool, define_tool
from xcodebuild_mcp.tools.common import PROJECT_PAIR, PROJECT_REQUIREMENTS, BuildCommandParams, DevicePlatform
from xcodebuild_mcp.xcode import XcodePlatform


class BuildDeviceParams(BuildCommandParams):
    platform: DevicePlatform = Field("iOS", description="Device platform to build for")
    device_id: Optional[str] = Field(None, description="UDID of the device; a generic destination is used when omitted")


async def build_device_logic(params: BuildDeviceParams, executor: CommandExecutor, fs=None, config=None) -> ToolResponse:
    options = PlatformBuildOptions(
        platform=XcodePlatform(params.platform),
        log_prefix=f"{params.platform} Device Build",
        device_id=params.device_id,
    )
    return await execute_xcode_build_command(
        params.build_params(),
        options,
        prefer_xcodebuild=params.prefer_xcodebuild,
        build_action="build",
        executor=executor,
        fs=fs,
        config=config,
    )


tool = define_tool(
    "build_device",
    "Build an app from a project or workspace for a physical Apple device. "
    "Omitted parameters are taken from the session defaults.",
    BuildDeviceParams,
    create_session_aware_tool(
        BuildDeviceParams,
        build_device_logic,
        requirements=PROJECT_REQUIREMENTS,
        exclusive_pairs=(PROJECT_PAIR,),
    ),
)
