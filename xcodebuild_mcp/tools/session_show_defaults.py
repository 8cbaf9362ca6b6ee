#!/usr/bin/env python3
"""session_show_defaults tool - Show the active session defaults"""

from xcodebuild_mcp.responses import create_text_response, format_json
from xcodebuild_mcp.session_store import get_session_store
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool


class SessionShowDefaultsParams(ToolParams):
    pass


async def session_show_defaults_logic(params: SessionShowDefaultsParams, executor=None, store=None):
    store = store or get_session_store()
    return create_text_response(
        f"Active defaults profile: {store.active_profile_label}\n{format_json(store.get_all())}"
    )


tool = define_tool(
    "session_show_defaults",
    "Show the session defaults of the active defaults profile.",
    SessionShowDefaultsParams,
    create_typed_tool(SessionShowDefaultsParams, session_show_defaults_logic),
)
