#!/usr/bin/env python3
"""session_clear_defaults tool - Clear session defaults"""

from typing import List, Optional

from pydantic import Field

from xcodebuild_mcp.responses import create_text_response
from xcodebuild_mcp.session_store import SessionStore, get_session_store
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool


class SessionClearDefaultsParams(ToolParams):
    keys: Optional[List[str]] = Field(None, description="Keys to remove from the active profile")
    clear_all: bool = Field(False, alias="all", description="Empty every profile and switch back to global")


async def session_clear_defaults_logic(params: SessionClearDefaultsParams,
                                       executor=None,
                                       store: Optional[SessionStore] = None):
    store = store or get_session_store()

    if params.clear_all:
        store.clear_all_values()
        return create_text_response("All session defaults cleared. Active defaults profile: global")

    if params.keys:
        store.clear_keys(params.keys)
        return create_text_response(
            f"Cleared {', '.join(params.keys)} from profile {store.active_profile_label}"
        )

    store.clear_profile()
    return create_text_response(f"Session defaults cleared for profile {store.active_profile_label}")


tool = define_tool(
    "session_clear_defaults",
    "Clear session defaults: specific keys, the whole active profile, or everything with all=true.",
    SessionClearDefaultsParams,
    create_typed_tool(SessionClearDefaultsParams, session_clear_defaults_logic),
)
