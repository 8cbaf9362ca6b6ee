"""Tests for the mock executors every tool test relies on."""

import pytest

from xcodebuild_mcp.testing import (
    MOCK_PID,
    CommandMatchingMockExecutor,
    MockCommandExecutor,
    MockFileSystemExecutor,
    NoopCommandExecutor,
    UnexpectedCommandError,
    create_mock_command_result,
)


def test_create_mock_command_result_defaults():
    result = create_mock_command_result(output="ok")
    assert result.success
    assert result.output == "ok"
    assert result.exit_code == 0
    assert result.pid == MOCK_PID


def test_create_mock_command_result_failure_gets_exit_code():
    result = create_mock_command_result(success=False)
    assert result.exit_code == 1
    assert result.error == "Command failed with exit code 1"


@pytest.mark.asyncio
async def test_mock_executor_returns_canned_result_and_records_calls():
    executor = MockCommandExecutor(output="BUILD SUCCEEDED")
    result = await executor(["xcodebuild", "build"], "Build", env={"A": "1"}, cwd="/tmp")

    assert result.success
    assert result.output == "BUILD SUCCEEDED"
    assert executor.commands == [["xcodebuild", "build"]]
    assert executor.calls[0].description == "Build"
    assert executor.calls[0].env == {"A": "1"}
    assert executor.calls[0].cwd == "/tmp"


@pytest.mark.asyncio
async def test_mock_executor_raise_error_simulates_spawn_failure():
    executor = MockCommandExecutor(raise_error=RuntimeError("boom"))
    with pytest.raises(RuntimeError, match="boom"):
        await executor(["xcodebuild"])
    assert len(executor.calls) == 1


@pytest.mark.asyncio
async def test_mock_executor_on_execute_callback():
    seen = []
    executor = MockCommandExecutor(on_execute=seen.append)
    await executor(["swift", "build"], use_shell=True)
    assert seen[0].command_line == "swift build"
    assert seen[0].use_shell


@pytest.mark.asyncio
async def test_command_matching_prefers_longest_pattern():
    executor = CommandMatchingMockExecutor({
        "xcodebuild": {"output": "generic"},
        "xcodebuild -showBuildSettings": {"output": "settings"},
    })
    assert (await executor(["xcodebuild", "-showBuildSettings", "-scheme", "S"])).output == "settings"
    assert (await executor(["xcodebuild", "build"])).output == "generic"


@pytest.mark.asyncio
async def test_command_matching_unmatched_command_raises():
    executor = CommandMatchingMockExecutor({"xcodebuild": {}})
    with pytest.raises(UnexpectedCommandError):
        await executor(["swift", "build"])


@pytest.mark.asyncio
async def test_command_matching_can_raise():
    executor = CommandMatchingMockExecutor({"xcrun": {"raise_error": OSError("no xcrun")}})
    with pytest.raises(OSError):
        await executor(["xcrun", "simctl"])


@pytest.mark.asyncio
async def test_noop_executor_fails_on_any_command():
    executor = NoopCommandExecutor()
    with pytest.raises(UnexpectedCommandError):
        await executor(["ls"])


@pytest.mark.asyncio
async def test_mock_file_system_tracks_parents_and_listing():
    fs = MockFileSystemExecutor(files={"/w/App/Info.plist": "x"}, directories={"/w/App.xcodeproj"})

    assert fs.exists("/w/App")
    assert await fs.is_dir("/w")
    assert await fs.readdir("/w") == ["App", "App.xcodeproj"]

    await fs.write_file("/w/new/file.txt", "hello")
    assert await fs.read_file("/w/new/file.txt") == "hello"
    assert await fs.is_dir("/w/new")

    with pytest.raises(FileNotFoundError):
        await fs.read_file("/missing")
