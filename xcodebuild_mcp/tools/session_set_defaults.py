#!/usr/bin/env python3
"""session_set_defaults tool - Set default tool parameters for the session"""

import logging
from typing import Dict, Optional

from pydantic import Field, model_validator

from xcodebuild_mcp.config import persist_session_defaults
from xcodebuild_mcp.exceptions import ConfigError
from xcodebuild_mcp.filesystem import FileSystemExecutor
from xcodebuild_mcp.responses import ToolResponse, create_error_response, create_text_response, format_json
from xcodebuild_mcp.session_store import SessionStore, get_session_store
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool
from xcodebuild_mcp.tools.common import Arch

logger = logging.getLogger(__name__)

# Setting one key of a pair drops the other from the profile
EXCLUSIVE_KEYS = (("projectPath", "workspacePath"), ("simulatorId", "simulatorName"))


class SessionSetDefaultsParams(ToolParams):
    scheme: Optional[str] = None
    configuration: Optional[str] = None
    simulator_id: Optional[str] = None
    simulator_name: Optional[str] = None
    device_id: Optional[str] = None
    project_path: Optional[str] = None
    workspace_path: Optional[str] = None
    use_latest_os: Optional[bool] = Field(None, alias="useLatestOS")
    arch: Optional[Arch] = None
    derived_data_path: Optional[str] = None
    prefer_xcodebuild: Optional[bool] = None
    platform: Optional[str] = None
    bundle_id: Optional[str] = None
    suppress_warnings: Optional[bool] = None
    env: Optional[Dict[str, str]] = Field(None, description="Environment variables passed to launched apps and tests")
    persist: bool = Field(False, description="Also write the defaults to .xcodebuildmcp/config.yaml")

    @model_validator(mode="after")
    def _no_conflicting_pairs(self):
        if self.project_path and self.workspace_path:
            raise ValueError("projectPath and workspacePath are mutually exclusive. Provide only one.")
        if self.simulator_id and self.simulator_name:
            raise ValueError("simulatorId and simulatorName are mutually exclusive. Provide only one.")
        return self


async def session_set_defaults_logic(params: SessionSetDefaultsParams,
                                     executor=None,
                                     store: Optional[SessionStore] = None,
                                     fs: Optional[FileSystemExecutor] = None) -> ToolResponse:
    store = store or get_session_store()
    values = params.model_dump(by_alias=True, exclude_none=True, exclude={"persist"})

    notices = []
    for pair in EXCLUSIVE_KEYS:
        for key in pair:
            if key not in values:
                continue
            for other in pair:
                if other != key and store.get(other) is not None:
                    store.clear_keys([other])
                    notices.append(f"Cleared {other} because {key} was set.")

    store.set_defaults(values)

    if params.persist:
        try:
            path = await persist_session_defaults(store.get_all(), store.get_active_profile(), fs=fs)
        except (ConfigError, OSError) as e:
            logger.error("Failed to persist session defaults: %s", e)
            return create_error_response("Defaults were updated but could not be persisted", str(e))
        notices.append(f"Persisted defaults for profile {store.active_profile_label} to {path}")

    text = f"Defaults updated for profile: {store.active_profile_label}\n{format_json(store.get_all())}"
    if notices:
        text += "\n\nNotices:\n" + "\n".join(f"- {notice}" for notice in notices)
    return create_text_response(text)


tool = define_tool(
    "session_set_defaults",
    "Set session defaults (scheme, project or workspace, simulator, device, ...) on the active "
    "defaults profile so later tool calls can omit them.",
    SessionSetDefaultsParams,
    create_typed_tool(SessionSetDefaultsParams, session_set_defaults_logic),
)
