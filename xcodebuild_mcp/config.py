#!/usr/bin/env python3
"""
Runtime configuration.

Settings are layered, lowest precedence first: built-in defaults, the
project config file (.xcodebuildmcp/config.yaml), environment variables,
then explicit overrides from the command line.
"""

import json
import logging
import os
import re
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from xcodebuild_mcp.exceptions import ConfigError
from xcodebuild_mcp.filesystem import FileSystemExecutor, get_default_file_system_executor
from xcodebuild_mcp.session_store import SessionStore

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".xcodebuildmcp"
CONFIG_FILE_NAME = "config.yaml"
ACTIVE_PROFILE_KEY = "activeSessionDefaultsProfile"

_ACTIVE_PROFILE_LINE = re.compile(rf"^{ACTIVE_PROFILE_KEY}\s*:")

ENV_FLAGS = {
    "debug": "XCODEBUILDMCP_DEBUG",
    "disable_session_defaults": "XCODEBUILDMCP_DISABLE_SESSION_DEFAULTS",
    "incremental_builds_enabled": "INCREMENTAL_BUILDS_ENABLED",
}


class RuntimeConfig(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    debug: bool = False
    disable_session_defaults: bool = False
    incremental_builds_enabled: bool = False
    session_defaults: Dict[str, Any] = Field(default_factory=dict)
    session_defaults_profiles: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    active_session_defaults_profile: Optional[str] = None


_runtime_config: Optional[RuntimeConfig] = None
_config_cwd: Optional[str] = None


def config_path(cwd: Optional[str] = None) -> str:
    return os.path.join(cwd or _config_cwd or os.getcwd(), CONFIG_DIR_NAME, CONFIG_FILE_NAME)


def parse_bool(value: Optional[str]) -> Optional[bool]:
    if not value:
        return None
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off"):
        return False
    return None


def read_env_config(env: Optional[Mapping[str, str]] = None) -> Dict[str, bool]:
    env = os.environ if env is None else env
    values = {}
    for field_name, variable in ENV_FLAGS.items():
        parsed = parse_bool(env.get(variable))
        if parsed is not None:
            values[field_name] = parsed
    return values


def _parse_yaml_mapping(text: str, path: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


async def load_project_config(cwd: Optional[str] = None,
                              fs: Optional[FileSystemExecutor] = None) -> Dict[str, Any]:
    """Read the project config file; a missing file is an empty config."""
    fs = fs or get_default_file_system_executor()
    path = config_path(cwd)
    if not fs.exists(path):
        logger.debug("No project config at %s", path)
        return {}
    return _parse_yaml_mapping(await fs.read_file(path), path)


async def init_runtime_config(cwd: Optional[str] = None,
                              fs: Optional[FileSystemExecutor] = None,
                              env: Optional[Mapping[str, str]] = None,
                              overrides: Optional[Dict[str, Any]] = None) -> RuntimeConfig:
    global _runtime_config, _config_cwd

    _config_cwd = cwd
    file_config = await load_project_config(cwd, fs)
    try:
        config = RuntimeConfig.model_validate(file_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path(cwd)}: {e}")

    config = config.model_copy(update=read_env_config(env))
    if overrides:
        config = config.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    _runtime_config = config
    return config


def get_runtime_config() -> RuntimeConfig:
    if _runtime_config is None:
        return RuntimeConfig()
    return _runtime_config


def reset_runtime_config() -> None:
    global _runtime_config, _config_cwd
    _runtime_config = None
    _config_cwd = None


def seed_session_store(store: SessionStore, config: RuntimeConfig) -> None:
    active = config.active_session_defaults_profile
    if active is not None and active not in config.session_defaults_profiles:
        logger.info("Active defaults profile '%s' has no defaults in the config file, starting it empty", active)
    store.load(config.session_defaults, config.session_defaults_profiles, active)


async def persist_active_profile(profile: Optional[str],
                                 cwd: Optional[str] = None,
                                 fs: Optional[FileSystemExecutor] = None) -> str:
    """
    Record the active profile in the config file.

    Only the activeSessionDefaultsProfile line is touched; every other line,
    comments included, is written back as it was. A None profile removes the key.

    Returns:
        Path of the config file written
    """
    fs = fs or get_default_file_system_executor()
    path = config_path(cwd)
    text = await fs.read_file(path) if fs.exists(path) else ""
    _parse_yaml_mapping(text, path)

    lines = text.splitlines()
    index = next((i for i, line in enumerate(lines) if _ACTIVE_PROFILE_LINE.match(line)), None)
    new_line = f"{ACTIVE_PROFILE_KEY}: {json.dumps(profile)}" if profile is not None else None

    if index is not None:
        if new_line is None:
            del lines[index]
        else:
            lines[index] = new_line
    elif new_line is not None:
        lines.append(new_line)

    await fs.mkdir(os.path.dirname(path))
    await fs.write_file(path, "\n".join(lines) + "\n" if lines else "")
    logger.info("Persisted active defaults profile %s to %s", profile or "global", path)
    return path


async def persist_session_defaults(defaults: Mapping[str, Any],
                                   profile: Optional[str],
                                   cwd: Optional[str] = None,
                                   fs: Optional[FileSystemExecutor] = None) -> str:
    """Write a profile's defaults into the config file, keeping the other keys."""
    fs = fs or get_default_file_system_executor()
    path = config_path(cwd)
    document = _parse_yaml_mapping(await fs.read_file(path), path) if fs.exists(path) else {}

    if profile is None:
        document["sessionDefaults"] = dict(defaults)
    else:
        profiles = document.get("sessionDefaultsProfiles") or {}
        if not isinstance(profiles, dict):
            raise ConfigError(f"sessionDefaultsProfiles in {path} must be a mapping")
        profiles[profile] = dict(defaults)
        document["sessionDefaultsProfiles"] = profiles

    await fs.mkdir(os.path.dirname(path))
    await fs.write_file(path, yaml.safe_dump(document, sort_keys=False, default_flow_style=False))
    logger.info("Persisted session defaults for %s to %s", profile or "global", path)
    return path
