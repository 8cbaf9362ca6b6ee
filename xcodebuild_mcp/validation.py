#!/usr/bin/env python3
"""
Parameter validation helpers.

The exact error wording is relied upon by callers that pattern-match on it.
"""

from dataclasses import dataclass
from typing import Any, Optional

from xcodebuild_mcp.filesystem import FileSystemExecutor, get_default_file_system_executor
from xcodebuild_mcp.responses import ToolResponse, create_text_response


@dataclass
class ValidationResult:
    is_valid: bool
    error_response: Optional[ToolResponse] = None


def validate_required_param(param_name: str, param_value: Any) -> ValidationResult:
    """
    Check that a required parameter was supplied.

    Only None counts as missing; blank strings are turned into None earlier,
    by the typed-tool factory.
    """
    if param_value is None:
        return ValidationResult(
            is_valid=False,
            error_response=create_text_response(
                f"Required parameter '{param_name}' is missing. Please provide a value for this parameter.",
                is_error=True,
            ),
        )
    return ValidationResult(is_valid=True)


def validate_file_exists(file_path: str, fs: Optional[FileSystemExecutor] = None) -> ValidationResult:
    fs = fs or get_default_file_system_executor()
    if not fs.exists(file_path):
        return ValidationResult(
            is_valid=False,
            error_response=create_text_response(
                f"File not found: '{file_path}'. Please check the path and try again.",
                is_error=True,
            ),
        )
    return ValidationResult(is_valid=True)


def validate_at_least_one_param(param1_name: str, param1_value: Any,
                                param2_name: str, param2_value: Any) -> ValidationResult:
    if param1_value is None and param2_value is None:
        return ValidationResult(
            is_valid=False,
            error_response=create_text_response(
                f"At least one of '{param1_name}' or '{param2_name}' must be provided.",
                is_error=True,
            ),
        )
    return ValidationResult(is_valid=True)
