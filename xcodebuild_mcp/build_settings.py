#!/usr/bin/env python3
"""Build settings queries and app bundle path resolution"""

import logging
import re
from typing import List, Optional

from xcodebuild_mcp.build_utils import BuildParams, PlatformBuildOptions, add_project_or_workspace, destination_for
from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.exceptions import BuildSettingsError

logger = logging.getLogger(__name__)

APP_PATH_NOT_FOUND = "Could not extract app path from build settings"

# xcodebuild indents every setting, the key still has to start its line
_BUILT_PRODUCTS_DIR = re.compile(r"^\s*BUILT_PRODUCTS_DIR = (.+)$", re.MULTILINE)
_FULL_PRODUCT_NAME = re.compile(r"^\s*FULL_PRODUCT_NAME = (.+)$", re.MULTILINE)


def extract_app_path(build_settings_output: str) -> Optional[str]:
    """
    Combine BUILT_PRODUCTS_DIR and FULL_PRODUCT_NAME into the app bundle path.

    Returns None unless both settings are present.
    """
    built_products_dir = _BUILT_PRODUCTS_DIR.search(build_settings_output)
    full_product_name = _FULL_PRODUCT_NAME.search(build_settings_output)
    if not built_products_dir or not full_product_name:
        return None
    return f"{built_products_dir.group(1).strip()}/{full_product_name.group(1).strip()}"


def build_show_settings_command(params: BuildParams, options: Optional[PlatformBuildOptions] = None) -> List[str]:
    command = ["xcodebuild", "-showBuildSettings"]
    add_project_or_workspace(command, params)
    command.extend(["-scheme", params.scheme])
    command.extend(["-configuration", params.configuration])
    if params.derived_data_path:
        command.extend(["-derivedDataPath", params.derived_data_path])
    if options is not None:
        command.extend(["-destination", destination_for(options)])
    if params.extra_args:
        command.extend(params.extra_args)
    return command


async def show_build_settings(params: BuildParams,
                              options: Optional[PlatformBuildOptions],
                              executor: CommandExecutor) -> str:
    """
    Run `xcodebuild -showBuildSettings` and return its output.

    Raises:
        BuildSettingsError: if xcodebuild fails or prints nothing
    """
    command = build_show_settings_command(params, options)
    try:
        result = await executor(command, "Show Build Settings")
    except Exception as e:
        raise BuildSettingsError(f"Error running xcodebuild -showBuildSettings: {e}")
    if not result.success:
        raise BuildSettingsError(result.error)
    if not result.output.strip():
        raise BuildSettingsError("Failed to extract build settings output from the result")
    return result.output


async def resolve_app_path(params: BuildParams,
                           options: Optional[PlatformBuildOptions],
                           executor: CommandExecutor) -> str:
    """
    Locate the built app bundle for a scheme.

    Raises:
        BuildSettingsError: if the settings can't be read or either key is missing
    """
    output = await show_build_settings(params, options, executor)
    app_path = extract_app_path(output)
    if app_path is None:
        logger.warning("Build settings for scheme %s lack BUILT_PRODUCTS_DIR or FULL_PRODUCT_NAME", params.scheme)
        raise BuildSettingsError(APP_PATH_NOT_FOUND)
    return app_path
