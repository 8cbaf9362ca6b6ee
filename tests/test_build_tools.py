"""Tests for the xcodebuild-backed tools."""

import pytest

from xcodebuild_mcp.session_store import get_session_store
from xcodebuild_mcp.testing import CommandMatchingMockExecutor, MockCommandExecutor, NoopCommandExecutor
from xcodebuild_mcp.tools import (
    build_device,
    build_macos,
    build_run_macos,
    build_sim,
    clean,
    get_app_path,
    list_schemes,
    show_build_settings,
)
from xcodebuild_mcp.tools import test_sim as test_sim_tool
from xcodebuild_mcp.tools.list_schemes import parse_schemes

SETTINGS = "    BUILT_PRODUCTS_DIR = /dd/Build/Products/Debug\n    FULL_PRODUCT_NAME = App.app\n"

XCODEBUILD_LIST = """\
Information about project "App":
    Targets:
        App
        AppTests

    Build Configurations:
        Debug
        Release

    Schemes:
        App
        App Extension

"""


@pytest.mark.asyncio
async def test_build_sim_with_explicit_params():
    executor = MockCommandExecutor(output="BUILD SUCCEEDED")

    response = await build_sim.tool.handler(
        {"projectPath": "/p/App.xcodeproj", "scheme": "App", "simulatorName": "iPhone 16"}, executor
    )

    assert not response.is_error
    assert response.content[0].text == "✅ iOS Simulator Build build succeeded for scheme App."
    command = executor.commands[0]
    assert command[command.index("-destination") + 1] == "platform=iOS Simulator,name=iPhone 16,OS=latest"
    assert command[-1] == "build"


@pytest.mark.asyncio
async def test_build_sim_uses_session_defaults():
    get_session_store().set_defaults({
        "workspacePath": "/w/App.xcworkspace", "scheme": "App", "simulatorId": "UUID", "configuration": "Release",
    })
    executor = MockCommandExecutor(output="BUILD SUCCEEDED")

    response = await build_sim.tool.handler({}, executor)

    assert not response.is_error
    assert executor.commands[0][:7] == [
        "xcodebuild", "-workspace", "/w/App.xcworkspace", "-scheme", "App", "-configuration", "Release",
    ]
    assert "platform=iOS Simulator,id=UUID" in executor.commands[0]


@pytest.mark.asyncio
async def test_build_sim_explicit_simulator_name_overrides_session_id():
    get_session_store().set_defaults({"projectPath": "/p.xcodeproj", "scheme": "App", "simulatorId": "UUID"})
    executor = MockCommandExecutor()

    await build_sim.tool.handler({"simulatorName": "iPad Air"}, executor)

    assert "platform=iOS Simulator,name=iPad Air,OS=latest" in executor.commands[0]


@pytest.mark.asyncio
async def test_build_sim_missing_defaults():
    response = await build_sim.tool.handler({"scheme": "App"}, NoopCommandExecutor())

    assert response.is_error
    assert "Missing required session defaults" in response.text
    assert "Provide a project or workspace" in response.text
    assert "Provide simulatorId or simulatorName" in response.text


@pytest.mark.asyncio
async def test_build_sim_failure_boom():
    response = await build_sim.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App", "simulatorId": "UUID"},
        MockCommandExecutor(success=False, error="boom"),
    )
    assert response.is_error
    assert "boom" in response.text


@pytest.mark.asyncio
async def test_build_macos_arch():
    executor = MockCommandExecutor()
    response = await build_macos.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App", "arch": "x86_64"}, executor
    )
    assert response.content[0].text == "✅ macOS Build build succeeded for scheme App."
    assert "platform=macOS,arch=x86_64" in executor.commands[0]


@pytest.mark.asyncio
async def test_build_macos_invalid_arch():
    response = await build_macos.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App", "arch": "ppc"}, NoopCommandExecutor()
    )
    assert response.is_error
    assert response.text.startswith("Error: Parameter validation failed")
    assert "arch:" in response.text


@pytest.mark.asyncio
async def test_build_device_generic_destination():
    executor = MockCommandExecutor()
    response = await build_device.tool.handler({"projectPath": "/p.xcodeproj", "scheme": "App"}, executor)
    assert response.content[0].text == "✅ iOS Device Build build succeeded for scheme App."
    assert "generic/platform=iOS" in executor.commands[0]


@pytest.mark.asyncio
async def test_test_sim_runs_test_action():
    executor = MockCommandExecutor(output="Test Suite 'All tests' passed")
    response = await test_sim_tool.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App", "simulatorId": "UUID"}, executor
    )
    assert executor.commands[0][-1] == "test"
    assert response.text == "✅ iOS Simulator Test test succeeded for scheme App."


@pytest.mark.asyncio
async def test_test_sim_reports_failures():
    log = "AppTests.swift:12: error: -[AppTests testExample] : XCTAssertTrue failed"
    response = await test_sim_tool.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App", "simulatorId": "UUID"},
        MockCommandExecutor(success=False, output=log, error="** TEST FAILED **"),
    )
    texts = [item.text for item in response.content]
    assert response.is_error
    assert texts[0] == f"❌ Error: {log}"
    assert texts[-1] == "❌ iOS Simulator Test test failed for scheme App."


@pytest.mark.asyncio
async def test_clean():
    executor = MockCommandExecutor()
    response = await clean.tool.handler({"workspacePath": "/w.xcworkspace", "scheme": "App", "platform": "macOS"}, executor)
    assert response.text == "✅ Clean clean succeeded for scheme App."
    assert executor.commands[0][-1] == "clean"


@pytest.mark.asyncio
async def test_build_run_macos_builds_resolves_and_opens():
    executor = CommandMatchingMockExecutor({
        "xcodebuild -project": {"output": "BUILD SUCCEEDED"},
        "xcodebuild -showBuildSettings": {"output": SETTINGS},
        "open": {},
    })

    response = await build_run_macos.tool.handler({"projectPath": "/p.xcodeproj", "scheme": "App"}, executor)

    assert not response.is_error
    assert executor.commands[-1] == ["open", "/dd/Build/Products/Debug/App.app"]
    assert response.content[-1].text == "✅ macOS app launched: /dd/Build/Products/Debug/App.app"
    assert "Next Steps:" not in response.text


@pytest.mark.asyncio
async def test_build_run_macos_stops_after_failed_build():
    executor = CommandMatchingMockExecutor({"xcodebuild -project": {"success": False, "error": "boom"}})
    response = await build_run_macos.tool.handler({"projectPath": "/p.xcodeproj", "scheme": "App"}, executor)
    assert response.is_error
    assert "boom" in response.text
    assert len(executor.calls) == 1


@pytest.mark.asyncio
async def test_build_run_macos_open_that_cannot_spawn_is_an_error_response():
    executor = CommandMatchingMockExecutor({
        "xcodebuild -project": {"output": "BUILD SUCCEEDED"},
        "xcodebuild -showBuildSettings": {"output": SETTINGS},
        "open": {"raise_error": OSError("No such file: open")},
    })

    response = await build_run_macos.tool.handler({"projectPath": "/p.xcodeproj", "scheme": "App"}, executor)

    assert response.is_error
    assert "Build succeeded, but failed to launch app /dd/Build/Products/Debug/App.app" in response.text
    assert "No such file: open" in response.text


@pytest.mark.asyncio
async def test_build_run_macos_missing_app_path():
    executor = CommandMatchingMockExecutor({
        "xcodebuild -project": {"output": "BUILD SUCCEEDED"},
        "xcodebuild -showBuildSettings": {"output": "FULL_PRODUCT_NAME = App.app"},
    })
    response = await build_run_macos.tool.handler({"projectPath": "/p.xcodeproj", "scheme": "App"}, executor)
    assert response.is_error
    assert "Could not extract app path from build settings" in response.text


@pytest.mark.asyncio
async def test_get_app_path_for_macos():
    executor = MockCommandExecutor(output=SETTINGS)

    response = await get_app_path.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App", "platform": "macOS"}, executor
    )

    assert response.content[0].text == "✅ App path retrieved successfully: /dd/Build/Products/Debug/App.app"
    assert response.next_step_params == {"launch_mac_app": {"appPath": "/dd/Build/Products/Debug/App.app"}}
    assert "platform=macOS" in executor.commands[0]


@pytest.mark.asyncio
async def test_get_app_path_failure_suggests_building():
    response = await get_app_path.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App", "simulatorName": "iPhone 16"},
        MockCommandExecutor(output="nothing useful"),
    )
    assert response.is_error
    assert response.text.startswith("Error: Failed to get app path\nDetails: Could not extract app path")
    assert "has been built" in response.text


@pytest.mark.asyncio
async def test_get_app_path_simulator_requires_simulator():
    response = await get_app_path.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App", "platform": "iOS Simulator"}, NoopCommandExecutor()
    )
    assert response.is_error
    assert "either simulatorId or simulatorName must be provided" in response.text


@pytest.mark.asyncio
async def test_show_build_settings():
    response = await show_build_settings.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App"}, MockCommandExecutor(output=SETTINGS)
    )
    assert response.content[0].text == "✅ Build settings for scheme App:"
    assert response.content[1].text == SETTINGS


@pytest.mark.asyncio
async def test_show_build_settings_failure():
    response = await show_build_settings.tool.handler(
        {"projectPath": "/p.xcodeproj", "scheme": "App"}, MockCommandExecutor(success=False, error="boom")
    )
    assert response.is_error
    assert "boom" in response.text


def test_parse_schemes():
    assert parse_schemes(XCODEBUILD_LIST) == ["App", "App Extension"]
    assert parse_schemes("no schemes here") == []


@pytest.mark.asyncio
async def test_list_schemes():
    executor = MockCommandExecutor(output=XCODEBUILD_LIST)

    response = await list_schemes.tool.handler({"projectPath": "/p.xcodeproj"}, executor)

    assert executor.commands[0] == ["xcodebuild", "-list", "-project", "/p.xcodeproj"]
    assert response.content[1].text == "App\nApp Extension"
    assert response.next_step_params == {"build_macos": {"projectPath": "/p.xcodeproj", "scheme": "App"}}


@pytest.mark.asyncio
async def test_list_schemes_failure():
    response = await list_schemes.tool.handler(
        {"workspacePath": "/w.xcworkspace"}, MockCommandExecutor(success=False, error="boom")
    )
    assert response.is_error
    assert response.text == "Error: Failed to list schemes\nDetails: boom"
