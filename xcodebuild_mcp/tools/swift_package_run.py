#!/usr/bin/env python3
"""swift_package_run tool - Run an executable target of a Swift package"""

import logging
from typing import Dict, List, Optional

from pydantic import Field

from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.exceptions import ProcessRegistryError
from xcodebuild_mcp.process_registry import ProcessRegistry, get_process_registry
from xcodebuild_mcp.responses import ToolResponse, create_error_response, text_content
from xcodebuild_mcp.tool_factory import create_typed_tool, define_tool
from xcodebuild_mcp.tools.common import SwiftPackageParams

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
MAX_TIMEOUT = 300


class SwiftPackageRunParams(SwiftPackageParams):
    executable_name: Optional[str] = Field(None, description="Executable product to run; the default one when omitted")
    arguments: Optional[List[str]] = Field(None, description="Arguments passed to the executable")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description=f"Seconds to wait in the foreground, at most {MAX_TIMEOUT}")
    background: bool = Field(False, description="Start the executable and return a token for swift_package_stop")
    env: Optional[Dict[str, str]] = Field(None, description="Extra environment variables for the executable")


def run_command(params: SwiftPackageRunParams) -> List[str]:
    command = params.swift_command("run")
    if params.executable_name:
        command.append(params.executable_name)
    if params.arguments:
        command.extend(["--", *params.arguments])
    return command


async def swift_package_run_logic(params: SwiftPackageRunParams,
                                  executor: CommandExecutor,
                                  registry: Optional[ProcessRegistry] = None) -> ToolResponse:
    command = run_command(params)
    label = params.executable_name or params.package_path

    if params.background:
        registry = registry or get_process_registry()
        try:
            tracked = await registry.spawn(
                command, f"swift run {label}", env=params.env, package_path=params.package_path
            )
        except ProcessRegistryError as e:
            return create_error_response("Failed to start swift run", e.message)
        return ToolResponse(
            content=[
                text_content(f"🚀 Started executable in background (PID {tracked.pid})."),
                text_content(f"Process token: {tracked.token}\n"
                             f"Stop it with swift_package_stop({{ token: '{tracked.token}' }})"),
            ],
            next_step_params={"swift_package_stop": {"token": tracked.token}},
        )

    timeout = min(params.timeout, MAX_TIMEOUT)
    try:
        result = await executor(command, "Swift Package Run", env=params.env, timeout=timeout)
    except Exception as e:
        return create_error_response("Failed to execute swift run", str(e))

    if not result.success:
        return create_error_response("Swift executable failed", result.error or result.output)

    content = [text_content("✅ Swift executable completed successfully.")]
    if result.output.strip():
        content.append(text_content(result.output.strip()))
    return ToolResponse(content=content)


tool = define_tool(
    "swift_package_run",
    "Run an executable target of a Swift package with swift run, in the foreground or in the background.",
    SwiftPackageRunParams,
    create_typed_tool(SwiftPackageRunParams, swift_package_run_logic),
)
