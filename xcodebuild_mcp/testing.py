#!/usr/bin/env python3
"""
Mock executors for tests.

Every tool's tests depend on these, so their behaviour is part of the public
surface: canned results, simulated spawn failures, command pattern matching
and call recording.
"""

import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from xcodebuild_mcp.command import CommandResult

MOCK_PID = 12345


@dataclass
class ExecutorCall:
    command: List[str]
    description: str = ""
    use_shell: bool = False
    env: Optional[Dict[str, str]] = None
    cwd: Optional[str] = None
    timeout: Optional[float] = None

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


class UnexpectedCommandError(AssertionError):
    pass


def create_mock_command_result(**overrides) -> CommandResult:
    success = overrides.pop("success", True)
    overrides.setdefault("exit_code", 0 if success else 1)
    overrides.setdefault("pid", MOCK_PID)
    return CommandResult(success=success, **overrides)


class _RecordingExecutor:
    def __init__(self):
        self.calls: List[ExecutorCall] = []

    def _record(self, command, description, use_shell, env, cwd, timeout) -> ExecutorCall:
        call = ExecutorCall(list(command), description, use_shell, env, cwd, timeout)
        self.calls.append(call)
        return call

    @property
    def commands(self) -> List[List[str]]:
        return [call.command for call in self.calls]


class MockCommandExecutor(_RecordingExecutor):
    """
    Returns the same canned result for every invocation.

    Args:
        success, output, error, exit_code: fields of the canned CommandResult
        raise_error: exception raised instead of returning, simulating a
            process that could not be spawned
        on_execute: callback receiving each ExecutorCall
    """

    def __init__(self,
                 success: bool = True,
                 output: str = "",
                 error: Optional[str] = None,
                 exit_code: Optional[int] = None,
                 raise_error: Optional[BaseException] = None,
                 on_execute: Optional[Callable[[ExecutorCall], None]] = None):
        super().__init__()
        self.success = success
        self.output = output
        self.error = error
        self.exit_code = exit_code
        self.raise_error = raise_error
        self.on_execute = on_execute

    async def __call__(self, command, description="", use_shell=False, env=None, cwd=None, timeout=None):
        call = self._record(command, description, use_shell, env, cwd, timeout)
        if self.on_execute:
            self.on_execute(call)
        if self.raise_error is not None:
            raise self.raise_error
        return create_mock_command_result(
            success=self.success,
            output=self.output,
            error=self.error,
            exit_code=self.exit_code if self.exit_code is not None else (0 if self.success else 1),
        )


class CommandMatchingMockExecutor(_RecordingExecutor):
    """
    Picks a canned result by substring match on the joined command line.

    When several patterns match, the longest one wins. A command matching no
    pattern raises UnexpectedCommandError.

    Example:
        CommandMatchingMockExecutor({
            "xcodebuild -showBuildSettings": {"output": "BUILT_PRODUCTS_DIR = /a"},
            "xcodebuild": {"output": "BUILD SUCCEEDED"},
        })
    """

    def __init__(self, command_map: Dict[str, dict]):
        super().__init__()
        self.command_map = command_map

    def match(self, command_line: str) -> Optional[str]:
        matches = [pattern for pattern in self.command_map if pattern in command_line]
        if not matches:
            return None
        return max(matches, key=len)

    async def __call__(self, command, description="", use_shell=False, env=None, cwd=None, timeout=None):
        call = self._record(command, description, use_shell, env, cwd, timeout)
        pattern = self.match(call.command_line)
        if pattern is None:
            raise UnexpectedCommandError(
                f"Unexpected command: {call.command_line}\n"
                f"Expected one of: {', '.join(self.command_map)}"
            )
        result = dict(self.command_map[pattern])
        if "raise_error" in result:
            raise result["raise_error"]
        return create_mock_command_result(**result)


class NoopCommandExecutor(_RecordingExecutor):
    """Fails the test if anything tries to run a command."""

    async def __call__(self, command, description="", use_shell=False, env=None, cwd=None, timeout=None):
        self._record(command, description, use_shell, env, cwd, timeout)
        raise UnexpectedCommandError(
            f"No command should run in this test, got: {' '.join(command)}"
        )


@dataclass
class MockFileSystemExecutor:
    """In-memory filesystem keyed by absolute path."""
    files: Dict[str, str] = field(default_factory=dict)
    directories: Set[str] = field(default_factory=set)

    def __post_init__(self):
        for path in list(self.files):
            self._add_parents(path)
        for path in list(self.directories):
            self._add_parents(path)

    def _add_parents(self, path: str):
        parent = os.path.dirname(path.rstrip("/"))
        while parent and parent not in self.directories:
            self.directories.add(parent)
            if parent == "/":
                break
            parent = os.path.dirname(parent)

    def exists(self, path: str) -> bool:
        path = path.rstrip("/") or "/"
        return path in self.files or path in self.directories

    async def is_dir(self, path: str) -> bool:
        return (path.rstrip("/") or "/") in self.directories

    async def read_file(self, path: str) -> str:
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    async def write_file(self, path: str, content: str) -> None:
        self.files[path] = content
        self._add_parents(path)

    async def mkdir(self, path: str, parents: bool = True) -> None:
        self.directories.add(path.rstrip("/"))
        self._add_parents(path)

    async def copy(self, src: str, dst: str) -> None:
        self.files[dst] = self.files[src]
        self._add_parents(dst)

    async def readdir(self, path: str) -> List[str]:
        path = path.rstrip("/") or "/"
        if path not in self.directories:
            raise FileNotFoundError(path)
        children = {
            entry for entry in list(self.files) + list(self.directories)
            if entry != path and os.path.dirname(entry) == path
        }
        return sorted(os.path.basename(entry) for entry in children)
