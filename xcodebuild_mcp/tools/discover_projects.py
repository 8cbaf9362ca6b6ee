#!/usr/bin/env python3
"""discover_projects tool - Find Xcode projects and workspaces"""

import logging
import os
from typing import List, Optional, Tuple

from pydantic import Field

from xcodebuild_mcp.filesystem import FileSystemExecutor, get_default_file_system_executor
from xcodebuild_mcp.responses import ToolResponse, create_error_response, text_content
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 5
SKIPPED_DIRS = {"build", "DerivedData", "Pods", "Carthage", "node_modules", ".build"}


class DiscoverProjectsParams(ToolParams):
    workspace_root: str = Field(description="Absolute path of the directory to search")
    scan_path: Optional[str] = Field(None, description="Subdirectory of workspaceRoot to search instead")
    max_depth: int = Field(DEFAULT_MAX_DEPTH, ge=0, description="How many directory levels to descend")


def _is_within(path: str, root: str) -> bool:
    try:
        return os.path.commonpath([root, path]) == root
    except ValueError:
        # mixed absolute and relative paths
        return False


async def find_projects(root: str, max_depth: int, fs: FileSystemExecutor) -> Tuple[List[str], List[str]]:
    """
    Walk the tree below `root` looking for Xcode bundles.

    Bundles are not descended into, so the project.xcworkspace inside every
    .xcodeproj is never reported.

    Returns:
        (projects, workspaces), each sorted
    """
    projects, workspaces = [], []
    pending = [(root, 0)]
    while pending:
        directory, depth = pending.pop()
        try:
            entries = await fs.readdir(directory)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            continue

        for name in entries:
            path = os.path.join(directory, name)
            if name.startswith(".") or name in SKIPPED_DIRS:
                continue
            if not await fs.is_dir(path):
                continue
            if name.endswith(".xcodeproj"):
                projects.append(path)
            elif name.endswith(".xcworkspace"):
                workspaces.append(path)
            elif depth < max_depth:
                pending.append((path, depth + 1))
    return sorted(projects), sorted(workspaces)


async def discover_projects_logic(params: DiscoverProjectsParams,
                                  executor=None,
                                  fs: Optional[FileSystemExecutor] = None) -> ToolResponse:
    fs = fs or get_default_file_system_executor()

    root = os.path.normpath(params.workspace_root)
    search_root = os.path.normpath(os.path.join(root, params.scan_path)) if params.scan_path else root
    if not _is_within(search_root, root):
        return create_error_response("scanPath must stay inside workspaceRoot", search_root)
    if not await fs.is_dir(search_root):
        return create_error_response("Scan path is not a directory", search_root)

    logger.info("Discovering Xcode projects under %s (max depth %s)", search_root, params.max_depth)
    projects, workspaces = await find_projects(search_root, params.max_depth, fs)

    content = [text_content(
        f"Discovery finished. Found {len(projects)} projects and {len(workspaces)} workspaces."
    )]
    if projects:
        content.append(text_content("Projects found:\n" + "\n".join(f" - {p}" for p in projects)))
    if workspaces:
        content.append(text_content("Workspaces found:\n" + "\n".join(f" - {w}" for w in workspaces)))
    return ToolResponse(content=content)


tool = define_tool(
    "discover_projects",
    "Scan a directory tree for .xcodeproj and .xcworkspace bundles.",
    DiscoverProjectsParams,
    create_typed_tool(DiscoverProjectsParams, discover_projects_logic),
)
