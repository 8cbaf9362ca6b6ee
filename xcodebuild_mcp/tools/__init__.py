"""Tool definitions served by xcodebuild-mcp"""

from typing import List

from xcodebuild_mcp.tool_factory import ToolDefinition
from xcodebuild_mcp.tools import (
    build_device,
    build_macos,
    build_run_macos,
    build_sim,
    clean,
    discover_projects,
    get_app_path,
    launch_mac_app,
    list_schemes,
    list_sims,
    session_clear_defaults,
    session_set_defaults,
    session_show_defaults,
    session_use_defaults_profile,
    show_build_settings,
    stop_mac_app,
    swift_package_build,
    swift_package_list,
    swift_package_run,
    swift_package_stop,
    swift_package_test,
    test_sim,
)

_TOOL_MODULES = (
    session_set_defaults,
    session_show_defaults,
    session_clear_defaults,
    session_use_defaults_profile,
    discover_projects,
    list_schemes,
    show_build_settings,
    build_sim,
    build_device,
    build_macos,
    build_run_macos,
    test_sim,
    clean,
    get_app_path,
    list_sims,
    launch_mac_app,
    stop_mac_app,
    swift_package_build,
    swift_package_test,
    swift_package_run,
    swift_package_stop,
    swift_package_list,
)


def get_tools() -> List[ToolDefinition]:
    return [module.tool for module in _TOOL_MODULES]
