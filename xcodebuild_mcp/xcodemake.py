#!/usr/bin/env python3
"""xcodemake support for faster incremental builds"""

import logging
import os
from typing import List

from xcodebuild_mcp.command import CommandExecutor, CommandResult
from xcodebuild_mcp.filesystem import FileSystemExecutor

logger = logging.getLogger(__name__)


async def is_xcodemake_available(executor: CommandExecutor) -> bool:
    try:
        result = await executor(["which", "xcodemake"], "Check xcodemake")
    except Exception as e:
        logger.debug("Could not check for xcodemake: %s", e)
        return False
    return result.success and bool(result.output.strip())


def does_makefile_exist(project_dir: str, fs: FileSystemExecutor) -> bool:
    return fs.exists(os.path.join(project_dir, "Makefile"))


async def execute_xcodemake_command(project_dir: str,
                                    build_args: List[str],
                                    log_prefix: str,
                                    executor: CommandExecutor) -> CommandResult:
    """Generate a Makefile with xcodemake; build_args excludes the leading 'xcodebuild'."""
    return await executor(["xcodemake", *build_args], f"{log_prefix}: xcodemake", cwd=project_dir)


async def execute_make_command(project_dir: str, log_prefix: str, executor: CommandExecutor) -> CommandResult:
    return await executor(["make"], f"{log_prefix}: make", cwd=project_dir)
