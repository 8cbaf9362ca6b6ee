#!/usr/bin/env python3
"""session_use_defaults_profile tool - Switch the active session defaults profile"""

import logging
from typing import Optional

from pydantic import Field

from xcodebuild_mcp.config import persist_active_profile
from xcodebuild_mcp.exceptions import ConfigError
from xcodebuild_mcp.filesystem import FileSystemExecutor
from xcodebuild_mcp.responses import ToolResponse, create_error_response, create_text_response, format_json
from xcodebuild_mcp.session_store import SessionStore, get_session_store
from xcodebuild_mcp.tool_factory import ToolParams, create_typed_tool, define_tool

logger = logging.getLogger(__name__)


class SessionUseDefaultsProfileParams(ToolParams):
    profile: Optional[str] = Field(None, description="Name of the defaults profile to activate")
    global_: bool = Field(False, alias="global", description="Activate the global (unnamed) profile")
    persist: bool = Field(False, description="Record the active profile in .xcodebuildmcp/config.yaml")
    create: bool = Field(False, description="Create the profile if it does not exist yet")


def _resolve_profile(params: SessionUseDefaultsProfileParams, store: SessionStore):
    """
    Work out which profile to activate.

    Returns:
        (profile name or None for global, error message or None)
    """
    if params.global_ and params.profile is not None:
        return None, "Provide either global=true or profile, not both."
    if params.global_:
        return None, None
    if params.profile is None:
        return None, "Provide a profile name or global=true."

    name = params.profile.strip()
    if not name:
        return None, "Profile name cannot be empty."
    if not store.has_profile(name) and not params.create:
        return None, f'Profile "{name}" does not exist.'
    return name, None


async def session_use_defaults_profile_logic(params: SessionUseDefaultsProfileParams,
                                             executor=None,
                                             store: Optional[SessionStore] = None,
                                             fs: Optional[FileSystemExecutor] = None) -> ToolResponse:
    store = store or get_session_store()

    profile, error = _resolve_profile(params, store)
    if error:
        return create_text_response(error, is_error=True)

    # Persist first so a failed write leaves the active profile unchanged
    notices = []
    if params.persist:
        try:
            path = await persist_active_profile(profile, fs=fs)
        except (ConfigError, OSError) as e:
            logger.error("Failed to persist active defaults profile: %s", e)
            return create_error_response("Failed to persist active defaults profile", str(e))
        notices.append(f"Persisted active profile selection to {path}")

    if profile is not None and not store.has_profile(profile):
        store.create_profile(profile)
        logger.info("Created defaults profile %s", profile)
    store.set_active_profile(profile)

    known = store.list_profiles()
    text = (
        f"Active defaults profile: {store.active_profile_label}\n"
        f"Known profiles: {', '.join(known) if known else '(none)'}\n"
        f"Current defaults:\n{format_json(store.get_all())}"
    )
    if notices:
        text += "\n\nNotices:\n" + "\n".join(f"- {notice}" for notice in notices)
    return create_text_response(text)


tool = define_tool(
    "session_use_defaults_profile",
    "Select the active session defaults profile. Use global=true for the unnamed profile or "
    "profile=<name> for a named one (create=true to add it). persist=true records the choice "
    "in .xcodebuildmcp/config.yaml.",
    SessionUseDefaultsProfileParams,
    # Blank names are rejected explicitly instead of being treated as omitted
    create_typed_tool(SessionUseDefaultsProfileParams, session_use_defaults_profile_logic,
                      strip_blank_strings=False),
)
