#!/usr/bin/env python3
"""swift_package_stop tool - Stop a background Swift package executable"""

from typing import Optional

from pydantic import Field

from xcodebuild_mcp.process_registry import DEFAULT_GRACE_PERIOD, ProcessRegistry, get_process_registry
from xcodebuild_mcp.responses import ToolResponse, create_text_response
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool


class SwiftPackageStopParams(ToolParams):
    token: str = Field(description="Process token returned by swift_package_run")


async def swift_package_stop_logic(params: SwiftPackageStopParams,
                                   executor=None,
                                   registry: Optional[ProcessRegistry] = None,
                                   grace_period: float = DEFAULT_GRACE_PERIOD) -> ToolResponse:
    registry = registry or get_process_registry()
    tracked = await registry.terminate(params.token, grace_period)
    if tracked is None:
        return create_text_response(
            f"⚠️ No running process found for token {params.token}. Use swift_package_list to see active processes.",
            is_error=True,
        )
    return create_text_response(f"✅ Stopped {tracked.label} (PID {tracked.pid}).")


tool = define_tool(
    "swift_package_stop",
    "Stop a Swift package executable started with swift_package_run in the background.",
    SwiftPackageStopParams,
    create_typed_tool(SwiftPackageStopParams, swift_package_stop_logic),
)
