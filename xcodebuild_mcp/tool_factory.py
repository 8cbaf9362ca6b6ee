#!/usr/bin/env python3
"""
Typed-tool factory.

Wraps a pydantic parameter model and a logic function into the uniform
handler signature `handler(args, executor=None) -> ToolResponse`. The factory
validates parameters and, for session-aware tools, fills omitted values from
the active session defaults profile. It does not catch exceptions raised by
the logic function.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from xcodebuild_mcp.command import CommandExecutor, get_default_command_executor
from xcodebuild_mcp.config import RuntimeConfig, get_runtime_config
from xcodebuild_mcp.responses import ToolResponse, create_error_response, create_text_response
from xcodebuild_mcp.session_store import SessionStore, get_session_store

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)

ToolHandler = Callable[..., Awaitable[ToolResponse]]
LogicFunction = Callable[[P, CommandExecutor], Awaitable[ToolResponse]]


class ToolParams(BaseModel):
    """Base for tool parameter models; callers use the camelCase names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    schema: Dict[str, Any]
    handler: ToolHandler


@dataclass(frozen=True)
class Requirement:
    """
    A parameter requirement checked after session defaults are merged.

    all_of: every key must be present
    one_of: at least one key must be present
    """
    all_of: Tuple[str, ...] = ()
    one_of: Tuple[str, ...] = ()
    message: Optional[str] = None


def define_tool(name: str, description: str, model: Type[BaseModel], handler: ToolHandler) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=description,
        schema=model.model_json_schema(by_alias=True),
        handler=handler,
    )


def nullify_empty_strings(args: Mapping[str, Any]) -> Dict[str, Any]:
    """Blank strings become None so optional fields don't trip validation."""
    return {
        key: (None if isinstance(value, str) and value.strip() == "" else value)
        for key, value in args.items()
    }


def format_validation_error(error: ValidationError) -> str:
    lines = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "root"
        reason = item["msg"]
        if reason.startswith("Value error, "):
            reason = reason[len("Value error, "):]
        lines.append(f"{field}: {reason}")
    return "Invalid parameters:\n" + "\n".join(lines)


def parameter_validation_error(details: str) -> ToolResponse:
    return create_error_response("Parameter validation failed", details)


def _validate(model: Type[P], args: Mapping[str, Any]) -> Tuple[Optional[P], Optional[ToolResponse]]:
    try:
        return model.model_validate(dict(args)), None
    except ValidationError as e:
        logger.debug("Parameter validation failed for %s: %s", model.__name__, e)
        return None, parameter_validation_error(format_validation_error(e))


def model_keys(model: Type[BaseModel]) -> set:
    return {field.alias or name for name, field in model.model_fields.items()}


def create_typed_tool(model: Type[P],
                      logic: LogicFunction,
                      get_executor: Callable[[], CommandExecutor] = get_default_command_executor,
                      strip_blank_strings: bool = True) -> ToolHandler:
    async def handler(args: Optional[Mapping[str, Any]] = None,
                      executor: Optional[CommandExecutor] = None) -> ToolResponse:
        args = args or {}
        if strip_blank_strings:
            args = nullify_empty_strings(args)
        params, error = _validate(model, args)
        if error is not None:
            return error
        return await logic(params, executor or get_executor())

    return handler


def _missing_requirements(merged: Mapping[str, Any], requirements: Iterable[Requirement]) -> list:
    missing = []
    for requirement in requirements:
        absent = [key for key in requirement.all_of if merged.get(key) is None]
        if absent:
            missing.append(requirement.message or f"{', '.join(absent)} is required")
        if requirement.one_of and not any(merged.get(key) is not None for key in requirement.one_of):
            missing.append(requirement.message or f"Provide one of: {', '.join(requirement.one_of)}")
    return missing


def _missing_response(missing: Sequence[str], session_defaults_disabled: bool) -> ToolResponse:
    details = "\n".join(missing)
    if session_defaults_disabled:
        return create_text_response(f"Error: Missing required parameters\nDetails: {details}", is_error=True)
    return create_text_response(
        f"Error: Missing required session defaults\nDetails: {details}\n"
        "Pass the values explicitly or set them once with session_set_defaults.",
        is_error=True,
    )


def merge_session_defaults(provided: Mapping[str, Any],
                           defaults: Mapping[str, Any],
                           exclusive_pairs: Iterable[Sequence[str]] = ()) -> Dict[str, Any]:
    """
    Lay explicit arguments over session defaults.

    `env` mappings are merged key by key. Within an exclusive pair an explicit
    argument drops the session-provided partners; when every value comes from
    the session the first key of the pair wins.
    """
    merged = {**defaults, **provided}
    if isinstance(defaults.get("env"), dict) and isinstance(provided.get("env"), dict):
        merged["env"] = {**defaults["env"], **provided["env"]}

    for pair in exclusive_pairs:
        explicit = [key for key in pair if key in provided]
        if explicit:
            for key in pair:
                if key not in explicit:
                    merged.pop(key, None)
        else:
            present = [key for key in pair if merged.get(key) is not None]
            for key in present[1:]:
                merged.pop(key)
    return merged


def create_session_aware_tool(model: Type[P],
                              logic: LogicFunction,
                              get_executor: Callable[[], CommandExecutor] = get_default_command_executor,
                              requirements: Sequence[Requirement] = (),
                              exclusive_pairs: Sequence[Sequence[str]] = (),
                              session_store: Optional[SessionStore] = None,
                              get_config: Callable[[], RuntimeConfig] = get_runtime_config) -> ToolHandler:
    known_keys = model_keys(model)

    async def handler(args: Optional[Mapping[str, Any]] = None,
                      executor: Optional[CommandExecutor] = None) -> ToolResponse:
        config = get_config()
        store = session_store or get_session_store()

        # None means "not provided", it never overrides or prunes a default
        provided = {k: v for k, v in nullify_empty_strings(args or {}).items() if v is not None}

        for pair in exclusive_pairs:
            explicit = [key for key in pair if key in provided]
            if len(explicit) > 1:
                return parameter_validation_error(
                    f"Mutually exclusive parameters provided: {', '.join(explicit)}. Provide only one."
                )

        defaults = {}
        if not config.disable_session_defaults:
            defaults = {k: v for k, v in store.get_all().items() if k in known_keys}

        merged = merge_session_defaults(provided, defaults, exclusive_pairs)

        missing = _missing_requirements(merged, requirements)
        if missing:
            return _missing_response(missing, config.disable_session_defaults)

        params, error = _validate(model, merged)
        if error is not None:
            return error
        return await logic(params, executor or get_executor())

    return handler
