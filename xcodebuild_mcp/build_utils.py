#!/usr/bin/env python3
"""
xcodebuild invocation engine.

execute_xcode_build_command() turns a structured build request into an
xcodebuild (or xcodemake) command line, runs it through a CommandExecutor and
classifies the outcome into a ToolResponse. It never retries: one failed
invocation is one reported failure.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from xcodebuild_mcp.command import CommandExecutor, get_default_command_executor
from xcodebuild_mcp.config import RuntimeConfig, get_runtime_config
from xcodebuild_mcp.exceptions import InvalidParameterError
from xcodebuild_mcp.filesystem import FileSystemExecutor, get_default_file_system_executor
from xcodebuild_mcp.responses import ToolResponse, create_text_response, text_content
from xcodebuild_mcp.xcode import XcodePlatform, construct_destination_string, is_simulator_platform
from xcodebuild_mcp.xcodemake import (
    does_makefile_exist,
    execute_make_command,
    execute_xcodemake_command,
    is_xcodemake_available,
)

logger = logging.getLogger(__name__)

MAX_BUILD_MESSAGES = 25

_WARNING_LINE = re.compile(r"warning:", re.IGNORECASE)
_ERROR_LINE = re.compile(r"error:", re.IGNORECASE)


@dataclass
class BuildParams:
    scheme: str
    configuration: str = "Debug"
    project_path: Optional[str] = None
    workspace_path: Optional[str] = None
    derived_data_path: Optional[str] = None
    extra_args: List[str] = field(default_factory=list)
    suppress_warnings: bool = False


@dataclass
class PlatformBuildOptions:
    platform: XcodePlatform
    log_prefix: str
    simulator_id: Optional[str] = None
    simulator_name: Optional[str] = None
    device_id: Optional[str] = None
    use_latest_os: bool = True
    arch: Optional[str] = None


def grep_warnings_and_errors(build_log: str, include_warnings: bool = True) -> List[Tuple[str, str]]:
    """
    Pick the warning and error lines out of xcodebuild output.

    Returns:
        (kind, line) pairs in output order, kind being "warning" or "error"
    """
    found = []
    for line in build_log.split("\n"):
        if _WARNING_LINE.search(line):
            if include_warnings:
                found.append(("warning", line))
        elif _ERROR_LINE.search(line):
            found.append(("error", line))
    return found


def _build_messages(output: str, error: Optional[str], include_warnings: bool) -> Tuple[List, int]:
    messages = []
    diagnostics = grep_warnings_and_errors(output, include_warnings)
    for kind, line in diagnostics[:MAX_BUILD_MESSAGES]:
        prefix = "⚠️ Warning" if kind == "warning" else "❌ Error"
        messages.append(text_content(f"{prefix}: {line}"))
    if len(diagnostics) > MAX_BUILD_MESSAGES:
        messages.append(text_content(
            f"… {len(diagnostics) - MAX_BUILD_MESSAGES} more warning/error lines omitted"
        ))

    if error:
        for line in error.split("\n"):
            if line.strip():
                messages.append(text_content(f"❌ [stderr] {line}"))
    return messages, len(diagnostics)


def add_project_or_workspace(command: List[str], params: BuildParams) -> None:
    if params.project_path and params.workspace_path:
        raise InvalidParameterError("projectPath and workspacePath are mutually exclusive. Provide only one.")
    if params.workspace_path:
        command.extend(["-workspace", params.workspace_path])
    elif params.project_path:
        command.extend(["-project", params.project_path])
    else:
        raise InvalidParameterError("Either projectPath or workspacePath is required.")


def destination_for(options: PlatformBuildOptions) -> str:
    return construct_destination_string(
        options.platform,
        simulator_name=options.simulator_name,
        simulator_id=options.simulator_id,
        use_latest=options.use_latest_os,
        arch=options.arch,
        device_id=options.device_id,
    )


def build_xcodebuild_command(params: BuildParams, options: PlatformBuildOptions, build_action: str) -> List[str]:
    command = ["xcodebuild"]
    add_project_or_workspace(command, params)
    command.extend(["-scheme", params.scheme])
    command.extend(["-configuration", params.configuration])
    command.append("-skipMacroValidation")

    if params.derived_data_path:
        command.extend(["-derivedDataPath", params.derived_data_path])

    command.extend(["-destination", destination_for(options)])

    if params.extra_args:
        command.extend(params.extra_args)

    command.append(build_action)
    return command


def _project_dir(params: BuildParams) -> str:
    return os.path.dirname(params.workspace_path or params.project_path or "")


def _next_steps(params: BuildParams, options: PlatformBuildOptions) -> Tuple[str, Dict]:
    source_key = "workspacePath" if params.workspace_path else "projectPath"
    source = {source_key: params.workspace_path or params.project_path, "scheme": params.scheme}
    app_path_args = dict(source, platform=options.platform.value)

    if options.platform == XcodePlatform.MACOS:
        text = (
            "Next Steps:\n"
            f"1. Get App Path: get_app_path({{ {source_key}: '{source[source_key]}', scheme: '{params.scheme}', platform: 'macOS' }})\n"
            "2. Launch App: launch_mac_app({ appPath: 'APP_PATH_FROM_STEP_1' })"
        )
        return text, {"get_app_path": app_path_args}

    if is_simulator_platform(options.platform):
        if options.simulator_id:
            app_path_args["simulatorId"] = options.simulator_id
        else:
            app_path_args["simulatorName"] = options.simulator_name
        sim_key = "simulatorId" if options.simulator_id else "simulatorName"
        text = (
            "Next Steps:\n"
            f"1. Get App Path: get_app_path({{ {sim_key}: '{app_path_args[sim_key]}', scheme: '{params.scheme}', platform: '{options.platform.value}' }})\n"
            "2. Install and launch the app on the simulator with the app path from step 1"
        )
        return text, {"get_app_path": app_path_args}

    if options.device_id:
        app_path_args["deviceId"] = options.device_id
    text = (
        "Next Steps:\n"
        f"1. Get App Path: get_app_path({{ scheme: '{params.scheme}', platform: '{options.platform.value}' }})\n"
        "2. Install the app on the device with the app path from step 1"
    )
    return text, {"get_app_path": app_path_args}


async def execute_xcode_build_command(params: BuildParams,
                                      platform_options: PlatformBuildOptions,
                                      prefer_xcodebuild: bool = False,
                                      build_action: str = "build",
                                      executor: Optional[CommandExecutor] = None,
                                      fs: Optional[FileSystemExecutor] = None,
                                      config: Optional[RuntimeConfig] = None) -> ToolResponse:
    """
    Run an xcodebuild action and classify the result.

    Args:
        params: project/workspace, scheme, configuration and extra arguments
        platform_options: target platform, destination details and log prefix
        prefer_xcodebuild: force plain xcodebuild even when incremental builds are on
        build_action: xcodebuild action, e.g. "build", "test" or "clean"
        executor: CommandExecutor used for every subprocess
        fs: FileSystemExecutor used to look for an existing Makefile
        config: runtime config; the global one when omitted

    Returns:
        ToolResponse with build messages first, then the status line
    """
    executor = executor or get_default_command_executor()
    fs = fs or get_default_file_system_executor()
    config = config or get_runtime_config()
    log_prefix = platform_options.log_prefix

    logger.info("Starting %s %s for scheme %s", log_prefix, build_action, params.scheme)

    notices = []
    use_xcodemake = False
    if config.incremental_builds_enabled and build_action == "build":
        available = await is_xcodemake_available(executor)
        if available and prefer_xcodebuild:
            notices.append(text_content(
                "⚠️ incremental build support is enabled but preferXcodebuild is set to true. Falling back to xcodebuild."
            ))
        elif not available:
            notices.append(text_content("⚠️ xcodemake is enabled but not available. Falling back to xcodebuild."))
        else:
            use_xcodemake = True
            notices.append(text_content("ℹ️ xcodemake is enabled and available, using it for incremental builds."))

    try:
        try:
            command = build_xcodebuild_command(params, platform_options, build_action)
        except InvalidParameterError as e:
            return create_text_response(e.message, is_error=True)

        if use_xcodemake:
            project_dir = _project_dir(params)
            if does_makefile_exist(project_dir, fs):
                notices.append(text_content("ℹ️ Using make for incremental build"))
                result = await execute_make_command(project_dir, log_prefix, executor)
            else:
                notices.append(text_content("ℹ️ Generating Makefile with xcodemake (first build may take longer)"))
                result = await execute_xcodemake_command(project_dir, command[1:], log_prefix, executor)
        else:
            result = await executor(command, f"{log_prefix} {build_action}")
    except Exception as e:
        logger.error("Error during %s %s: %s", log_prefix, build_action, e)
        return create_text_response(f"Error during {log_prefix} {build_action}: {e}", is_error=True)

    build_messages, diagnostic_count = _build_messages(
        result.output, result.error, include_warnings=not params.suppress_warnings
    )
    messages = notices + build_messages

    if not result.success:
        logger.error("%s %s failed: %s", log_prefix, build_action, result.error)
        content = messages + [text_content(f"❌ {log_prefix} {build_action} failed for scheme {params.scheme}.")]
        if use_xcodemake and diagnostic_count == 0:
            content.append(text_content(
                "💡 Incremental build using xcodemake failed, suggest using preferXcodebuild option "
                "to try build again using slower xcodebuild command."
            ))
        return ToolResponse(content=content, is_error=True)

    logger.info("✅ %s %s succeeded.", log_prefix, build_action)

    content = messages + [text_content(f"✅ {log_prefix} {build_action} succeeded for scheme {params.scheme}.")]
    next_step_params = None
    if build_action == "build":
        next_steps, next_step_params = _next_steps(params, platform_options)
        if use_xcodemake:
            next_steps = (
                "xcodemake: Using faster incremental builds with xcodemake.\n"
                "Future builds will use the generated Makefile for improved performance.\n\n" + next_steps
            )
        content.append(text_content(next_steps))

    return ToolResponse(content=content, is_error=False, next_step_params=next_step_params)
