#!/usr/bin/env python3
"""swift_package_list tool - List background Swift package executables"""

import datetime
from typing import Optional

from xcodebuild_mcp.process_registry import ProcessRegistry, get_process_registry
from xcodebuild_mcp.responses import ToolResponse, create_text_response
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool


class SwiftPackageListParams(ToolParams):
    pass


async def swift_package_list_logic(params: SwiftPackageListParams,
                                   executor=None,
                                   registry: Optional[ProcessRegistry] = None) -> ToolResponse:
    registry = registry or get_process_registry()
    processes = registry.list()
    if not processes:
        return create_text_response("ℹ️ No Swift package processes are currently running.")

    now = datetime.datetime.now()
    lines = [f"📋 Active Swift package processes ({len(processes)}):"]
    for tracked in processes:
        running = int((now - tracked.started_at).total_seconds())
        state = "running" if tracked.is_running else f"exited ({tracked.process.returncode})"
        lines.append(f"- {tracked.token}: {tracked.label} (PID {tracked.pid}, {state}, {running}s)")
    return create_text_response("\n".join(lines))


tool = define_tool(
    "swift_package_list",
    "List the Swift package executables running in the background.",
    SwiftPackageListParams,
    create_typed_tool(SwiftPackageListParams, swift_package_list_logic),
)
