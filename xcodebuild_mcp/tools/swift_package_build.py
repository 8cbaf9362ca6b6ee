#!/usr/bin/env python3
"""swift_package_build tool - Build a Swift package"""

from typing import List, Optional

from pydantic import Field

from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.responses import ToolResponse, create_error_response, text_content
from xcodebuild_mcp.tool_factory import create_typed_tool, define_tool
from xcodebuild_mcp.tools.common import SwiftPackageParams


class SwiftPackageBuildParams(SwiftPackageParams):
    target_name: Optional[str] = Field(None, description="Build only this target")
    arch: Optional[List[str]] = Field(None, description="Architectures to build for, e.g. ['arm64']")


async def swift_package_build_logic(params: SwiftPackageBuildParams, executor: CommandExecutor) -> ToolResponse:
    command = params.swift_command("build")
    if params.target_name:
        command.extend(["--target", params.target_name])
    for arch in params.arch or []:
        command.extend(["--arch", arch])

    try:
        result = await executor(command, "Swift Package Build")
    except Exception as e:
        return create_error_response("Failed to execute swift build", str(e))

    if not result.success:
        return create_error_response("Swift package build failed", result.error or result.output)

    content = [text_content("✅ Swift package build succeeded.")]
    if result.output.strip():
        content.append(text_content(result.output.strip()))
    return ToolResponse(content=content)


tool = define_tool(
    "swift_package_build",
    "Build a Swift package with swift build.",
    SwiftPackageBuildParams,
    create_typed_tool(SwiftPackageBuildParams, swift_package_build_logic),
)
