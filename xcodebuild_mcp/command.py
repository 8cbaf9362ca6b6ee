#!/usr/bin/env python3
"""
Command execution seam.

Every external tool (xcodebuild, xcrun simctl, swift, open, kill, ...) is run
through a CommandExecutor so tools can be exercised without spawning real
processes. A failed external command is a normal return value; executors only
raise when they are misused.
"""

import asyncio
import logging
import os
import shlex
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence

from xcodebuild_mcp.exceptions import ExecutorConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    success: bool
    output: str = ""
    error: Optional[str] = None
    exit_code: Optional[int] = None
    pid: Optional[int] = None

    def __post_init__(self):
        # A failure always carries a diagnostic
        if not self.success and not self.error:
            if self.exit_code is not None:
                self.error = f"Command failed with exit code {self.exit_code}"
            else:
                self.error = "Command failed"


class CommandExecutor(Protocol):
    async def __call__(self,
                       command: List[str],
                       description: str = "",
                       use_shell: bool = False,
                       env: Optional[Dict[str, str]] = None,
                       cwd: Optional[str] = None,
                       timeout: Optional[float] = None) -> CommandResult:
        ...


def quote_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in argv)


def shell_join(command: Sequence[str]) -> str:
    """
    Quote an argv for /bin/sh.

    A single-element command is taken as an already composed shell string,
    which is how `||` fallback chains are passed in.
    """
    if len(command) == 1:
        return command[0]
    return quote_argv(command)


def fallback_chain(*commands: Sequence[str]) -> str:
    """Shell string running each argv in turn until one succeeds."""
    return " || ".join(quote_argv(command) for command in commands)


def escape_applescript_string(s: str) -> str:
    """
    Escape a string for safe use in AppleScript.

    Args:
        s: String to escape

    Returns:
        Escaped string safe for AppleScript
    """
    # Escape backslashes first, then quotes
    s = s.replace("\\", "\\\\")
    s = s.replace('"', '\\"')
    return s


async def execute_command(command: List[str],
                          description: str = "",
                          use_shell: bool = False,
                          env: Optional[Dict[str, str]] = None,
                          cwd: Optional[str] = None,
                          timeout: Optional[float] = None) -> CommandResult:
    """
    Run an external command and capture its output.

    Args:
        command: argv-style list, the first element is the executable
        description: Label used in log messages only
        use_shell: Run through /bin/sh -c instead of spawning directly
        env: Variables merged over the current process environment
        cwd: Working directory for the process
        timeout: Seconds before the process is killed and reported as failed

    Returns:
        CommandResult; never raises for a failing or missing executable
    """
    if not command:
        raise ExecutorConfigurationError("Command must contain at least the executable")

    label = description or command[0]
    merged_env = {**os.environ, **env} if env else None

    if use_shell:
        shell_command = shell_join(command)
        logger.debug("%s: executing shell command: %s", label, shell_command)
    else:
        logger.debug("%s: executing: %s", label, " ".join(command))

    try:
        if use_shell:
            process = await asyncio.create_subprocess_exec(
                "/bin/sh", "-c", shell_command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=merged_env,
                cwd=cwd,
            )
        else:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=merged_env,
                cwd=cwd,
            )
    except OSError as e:
        logger.error("%s: failed to start %s: %s", label, command[0], e)
        return CommandResult(success=False, output="", error=str(e))

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        try:
            process.kill()
        except ProcessLookupError:
            pass
        stdout, stderr = await process.communicate()
        logger.warning("%s: timed out after %ss", label, timeout)
        return CommandResult(
            success=False,
            output=stdout.decode(errors="replace"),
            error=f"Command timed out after {timeout:g} seconds",
            exit_code=process.returncode,
            pid=process.pid,
        )

    output = stdout.decode(errors="replace")
    error = stderr.decode(errors="replace")
    success = process.returncode == 0

    if not success:
        logger.debug("%s: exited with code %s", label, process.returncode)

    return CommandResult(
        success=success,
        output=output,
        error=error or None,
        exit_code=process.returncode,
        pid=process.pid,
    )


def get_default_command_executor() -> CommandExecutor:
    return execute_command
