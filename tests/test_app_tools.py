"""Tests for project discovery, simulator listing and macOS app control."""

import json

import pytest

from xcodebuild_mcp.testing import MockCommandExecutor, MockFileSystemExecutor, NoopCommandExecutor
from xcodebuild_mcp.tools import list_sims, stop_mac_app
from xcodebuild_mcp.tools.discover_projects import DiscoverProjectsParams, discover_projects_logic
from xcodebuild_mcp.tools.launch_mac_app import LaunchMacAppParams, launch_mac_app_logic
from xcodebuild_mcp.tools.list_sims import runtime_label

SIMCTL_OUTPUT = json.dumps({
    "devices": {
        "com.apple.CoreSimulator.SimRuntime.iOS-18-0": [
            {"name": "iPhone 16", "udid": "AAA", "state": "Booted"},
            {"name": "iPad Air", "udid": "BBB", "state": "Shutdown"},
        ],
        "com.apple.CoreSimulator.SimRuntime.watchOS-11-0": [
            {"name": "Apple Watch", "udid": "CCC", "state": "Shutdown"},
        ],
    }
})


def project_tree():
    return MockFileSystemExecutor(
        files={"/work/README.md": "hi"},
        directories={
            "/work/App/App.xcodeproj/project.xcworkspace",
            "/work/App.xcworkspace",
            "/work/.git/hidden.xcodeproj",
            "/work/build/Stale.xcodeproj",
            "/work/Libs/Deep/Lib.xcodeproj",
        },
    )


@pytest.mark.asyncio
async def test_discover_projects_skips_bundles_hidden_and_build_dirs():
    response = await discover_projects_logic(DiscoverProjectsParams(workspace_root="/work"), fs=project_tree())

    assert not response.is_error
    assert response.content[0].text == "Discovery finished. Found 2 projects and 1 workspaces."
    assert response.content[1].text == "Projects found:\n - /work/App/App.xcodeproj\n - /work/Libs/Deep/Lib.xcodeproj"
    assert response.content[2].text == "Workspaces found:\n - /work/App.xcworkspace"


@pytest.mark.asyncio
async def test_discover_projects_respects_max_depth():
    response = await discover_projects_logic(
        DiscoverProjectsParams(workspace_root="/work", max_depth=1), fs=project_tree()
    )
    assert "/work/Libs/Deep/Lib.xcodeproj" not in response.text
    assert "/work/App/App.xcodeproj" in response.text


@pytest.mark.asyncio
async def test_discover_projects_scan_path_must_stay_inside_root():
    response = await discover_projects_logic(
        DiscoverProjectsParams(workspace_root="/work", scan_path="../etc"), fs=project_tree()
    )
    assert response.is_error
    assert "scanPath must stay inside workspaceRoot" in response.text


@pytest.mark.asyncio
async def test_discover_projects_scan_path_below_filesystem_root():
    response = await discover_projects_logic(
        DiscoverProjectsParams(workspace_root="/", scan_path="work/App"), fs=project_tree()
    )
    assert not response.is_error
    assert "/work/App/App.xcodeproj" in response.text


@pytest.mark.asyncio
async def test_discover_projects_missing_root():
    response = await discover_projects_logic(DiscoverProjectsParams(workspace_root="/nope"), fs=project_tree())
    assert response.is_error


def test_runtime_label():
    assert runtime_label("com.apple.CoreSimulator.SimRuntime.iOS-18-0") == "iOS 18.0"
    assert runtime_label("com.apple.CoreSimulator.SimRuntime.xrOS-2-1") == "xrOS 2.1"


@pytest.mark.asyncio
async def test_list_sims():
    executor = MockCommandExecutor(output=SIMCTL_OUTPUT)

    response = await list_sims.tool.handler({}, executor)

    assert executor.commands == [["xcrun", "simctl", "list", "devices", "available", "--json"]]
    text = response.content[0].text
    assert "iOS 18.0:\n- iPhone 16 (AAA) [Booted]\n- iPad Air (BBB)" in text
    assert "watchOS 11.0:\n- Apple Watch (CCC)" in text


@pytest.mark.asyncio
async def test_list_sims_booted_only():
    response = await list_sims.tool.handler({"bootedOnly": True}, MockCommandExecutor(output=SIMCTL_OUTPUT))
    text = response.content[0].text
    assert "iPhone 16" in text
    assert "iPad Air" not in text
    assert "watchOS" not in text


@pytest.mark.asyncio
async def test_list_sims_failure_and_bad_json():
    failed = await list_sims.tool.handler({}, MockCommandExecutor(success=False, error="boom"))
    assert failed.is_error
    assert "boom" in failed.text

    garbled = await list_sims.tool.handler({}, MockCommandExecutor(output="not json"))
    assert garbled.is_error
    assert "Failed to parse simulator list" in garbled.text


@pytest.mark.asyncio
async def test_launch_mac_app():
    fs = MockFileSystemExecutor(directories={"/Apps/My App.app"})
    executor = MockCommandExecutor()

    response = await launch_mac_app_logic(
        LaunchMacAppParams(app_path="/Apps/My App.app", args=["--verbose"]), executor, fs=fs
    )

    assert response.text == "✅ macOS app launched successfully: /Apps/My App.app"
    assert executor.commands == [["open", "/Apps/My App.app", "--args", "--verbose"]]
    assert not executor.calls[0].use_shell


@pytest.mark.asyncio
async def test_launch_mac_app_missing_bundle():
    response = await launch_mac_app_logic(
        LaunchMacAppParams(app_path="/Apps/Gone.app"), NoopCommandExecutor(), fs=MockFileSystemExecutor()
    )
    assert response.is_error
    assert response.text == "File not found: '/Apps/Gone.app'. Please check the path and try again."


@pytest.mark.asyncio
async def test_stop_mac_app_by_pid():
    executor = MockCommandExecutor()
    response = await stop_mac_app.tool.handler({"processId": 4242}, executor)
    assert executor.commands == [["kill", "4242"]]
    assert response.text == "✅ macOS app stopped successfully: PID 4242"


@pytest.mark.asyncio
async def test_stop_mac_app_by_name_uses_quoted_fallback_chain():
    executor = MockCommandExecutor()

    await stop_mac_app.tool.handler({"appName": 'My "App"'}, executor)

    call = executor.calls[0]
    assert call.use_shell
    assert call.command == [
        "pkill -f 'My \"App\"' || osascript -e 'tell application \"My \\\"App\\\"\" to quit'"
    ]


@pytest.mark.asyncio
async def test_stop_mac_app_requires_name_or_pid():
    response = await stop_mac_app.tool.handler({}, NoopCommandExecutor())
    assert response.is_error
    assert response.text == "At least one of 'appName' or 'processId' must be provided."


@pytest.mark.asyncio
async def test_stop_mac_app_failure():
    response = await stop_mac_app.tool.handler({"appName": "Foo"}, MockCommandExecutor(success=False, error="boom"))
    assert response.is_error
    assert "boom" in response.text
