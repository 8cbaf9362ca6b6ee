#!/usr/bin/env python3
"""get_app_path tool - Get the path of a built app bundle"""

import logging
from typing import Literal, Optional

from pydantic import Field

from xcodebuild_mcp.build_settings import resolve_app_path
from xcodebuild_mcp.build_utils import PlatformBuildOptions
from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.exceptions import BuildSettingsError, InvalidParameterError
from xcodebuild_mcp.responses import ToolResponse, create_error_response, text_content
from xcodebuild_mcp.tool_factory import create_session_aware_tool, define_tool
from xcodebuild_mcp.tools.common import (
    PROJECT_PAIR,
    PROJECT_REQUIREMENTS,
    SIMULATOR_PAIR,
    Arch,
    SchemeParams,
    SimulatorTargetMixin,
)
from xcodebuild_mcp.xcode import XcodePlatform, is_simulator_platform

logger = logging.getLogger(__name__)

AnyPlatform = Literal[
    "iOS", "watchOS", "tvOS", "visionOS",
    "iOS Simulator", "watchOS Simulator", "tvOS Simulator", "visionOS Simulator",
    "macOS",
]


class AppPathParams(SchemeParams, SimulatorTargetMixin):
    platform: AnyPlatform = Field("iOS Simulator", description="Platform the app was built for")
    device_id: Optional[str] = Field(None, description="UDID of the device, for device platforms")
    arch: Optional[Arch] = Field(None, description="Architecture, for macOS")

    def platform_options(self, log_prefix: str) -> PlatformBuildOptions:
        return PlatformBuildOptions(
            platform=XcodePlatform(self.platform),
            log_prefix=log_prefix,
            simulator_id=self.simulator_id,
            simulator_name=self.simulator_name,
            device_id=self.device_id,
            use_latest_os=self.use_latest_os,
            arch=self.arch,
        )


def _launch_hint(params: AppPathParams, app_path: str) -> str:
    if params.platform == "macOS":
        return f"Launch App: launch_mac_app({{ appPath: '{app_path}' }})"
    if is_simulator_platform(XcodePlatform(params.platform)):
        return "Install and launch the app on the simulator with this path"
    return "Install the app on the device with this path"


async def get_app_path_logic(params: AppPathParams, executor: CommandExecutor) -> ToolResponse:
    try:
        app_path = await resolve_app_path(params.build_params(), params.platform_options("Get App Path"), executor)
    except (BuildSettingsError, InvalidParameterError) as e:
        logger.error("Failed to get app path for scheme %s: %s", params.scheme, e.message)
        return create_error_response(
            "Failed to get app path",
            f"{e.message}\nMake sure the scheme has been built, for example with build_sim or build_macos.",
        )

    content = [
        text_content(f"✅ App path retrieved successfully: {app_path}"),
        text_content(f"Next Steps:\n1. {_launch_hint(params, app_path)}"),
    ]
    next_step_params = {"launch_mac_app": {"appPath": app_path}} if params.platform == "macOS" else None
    return ToolResponse(content=content, next_step_params=next_step_params)


tool = define_tool(
    "get_app_path",
    "Get the path of the app bundle a scheme builds, read from xcodebuild -showBuildSettings. "
    "Omitted parameters are taken from the session defaults.",
    AppPathParams,
    create_session_aware_tool(
        AppPathParams,
        get_app_path_logic,
        requirements=PROJECT_REQUIREMENTS,
        exclusive_pairs=(PROJECT_PAIR, SIMULATOR_PAIR),
    ),
)
