import pytest

from xcodebuild_mcp import server as mcp_server
from xcodebuild_mcp.session_store import get_session_store
from xcodebuild_mcp.tool_factory import ToolDefinition, ToolParams, create_typed_tool, define_tool
from xcodebuild_mcp.tools import get_tools


def test_tool_names_are_unique():
    names = [definition.name for definition in get_tools()]
    assert len(names) == len(set(names))
    assert {"build_sim", "session_use_defaults_profile", "swift_package_run"} <= set(names)


@pytest.mark.asyncio
async def test_list_tools_publishes_schemas():
    tools = await mcp_server.list_tools()
    by_name = {tool.name: tool for tool in tools}

    assert set(by_name) == set(mcp_server.TOOLS)
    schema = by_name["session_use_defaults_profile"].inputSchema
    assert set(schema["properties"]) == {"profile", "global", "persist", "create"}
    assert "simulatorId" in by_name["build_sim"].inputSchema["properties"]


@pytest.mark.asyncio
async def test_call_tool_unknown_tool_returns_error_result():
    result = await mcp_server.call_tool("not_a_tool", {})
    assert result.isError
    assert result.content[0].text == "Unknown tool: not_a_tool"


@pytest.mark.asyncio
async def test_call_tool_returns_tool_error_in_band():
    get_session_store().create_profile("ios")

    result = await mcp_server.call_tool("session_use_defaults_profile", {"global": True, "profile": "ios"})

    assert result.isError
    assert "either global=true or profile" in result.content[0].text
    assert get_session_store().get_active_profile() is None


@pytest.mark.asyncio
async def test_call_tool_success_with_none_arguments():
    result = await mcp_server.call_tool("session_show_defaults", None)
    assert not result.isError
    assert result.content[0].text.startswith("Active defaults profile: global")


@pytest.mark.asyncio
async def test_call_tool_converts_unexpected_exceptions(monkeypatch):
    class NoParams(ToolParams):
        pass

    async def explode(params, executor):
        raise RuntimeError("kaboom")

    definition = define_tool("explode", "Always fails", NoParams, create_typed_tool(NoParams, explode))
    monkeypatch.setitem(mcp_server.TOOLS, "explode", definition)

    result = await mcp_server.call_tool("explode", {})

    assert isinstance(definition, ToolDefinition)
    assert result.isError
    assert result.content[0].text == "Error: Tool explode failed\nDetails: kaboom"


def test_next_step_params_travel_in_meta():
    from xcodebuild_mcp.responses import ToolResponse, text_content

    result = ToolResponse(content=[text_content("ok")], next_step_params={"get_app_path": {"scheme": "S"}}).to_call_tool_result()
    assert result.meta == {"nextStepParams": {"get_app_path": {"scheme": "S"}}}
