#!/usr/bin/env python3
"""build_sim tool - Build an app for a simulator"""

from pydantic import Field

from xcodebuild_mcp.build_utils import execute_xcode_build_command
from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.responses import ToolResponse
from xcodebuild_mcp.tool_factory import create_session_aware_tool, define_tool
from xcodebuild_mcp.tools.common import (
    PROJECT_PAIR,
    PROJECT_REQUIREMENTS,
    SIMULATOR_PAIR,
    SIMULATOR_REQUIREMENT,
    BuildCommandParams,
    SimulatorPlatform,
    SimulatorTargetMixin,
)


class BuildSimParams(BuildCommandParams, SimulatorTargetMixin):
    platform: SimulatorPlatform = Field("iOS Simulator", description="Simulator platform to build for")


async def build_sim_logic(params: BuildSimParams, executor: CommandExecutor, fs=None, config=None) -> ToolResponse:
    return await execute_xcode_build_command(
        params.build_params(),
        params.simulator_options(params.platform, f"{params.platform} Build"),
        prefer_xcodebuild=params.prefer_xcodebuild,
        build_action="build",
        executor=executor,
        fs=fs,
        config=config,
    )


tool = define_tool(
    "build_sim",
    "Build an app from a project or workspace for a simulator, selected by simulatorId or simulatorName. "
    "Omitted parameters are taken from the session defaults.",
    BuildSimParams,
    create_session_aware_tool(
        BuildSimParams,
        build_sim_logic,
        requirements=PROJECT_REQUIREMENTS + (SIMULATOR_REQUIREMENT,),
        exclusive_pairs=(PROJECT_PAIR, SIMULATOR_PAIR),
    ),
)
