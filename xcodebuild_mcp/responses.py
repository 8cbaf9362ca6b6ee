#!/usr/bin/env python3
"""ToolResponse envelope and constructors shared by every tool"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from mcp.types import CallToolResult, ImageContent, TextContent

Content = Union[TextContent, ImageContent]


@dataclass
class ToolResponse:
    """
    Uniform result of a tool invocation.

    Order of `content` matters: the status line comes first (or right after
    build messages), details and next steps after it. Callers treat any
    response whose `is_error` is not True as a success.
    """
    content: List[Content] = field(default_factory=list)
    is_error: bool = False
    next_step_params: Optional[Dict[str, Any]] = None

    @property
    def text(self) -> str:
        """All text fragments joined by newlines."""
        return "\n".join(item.text for item in self.content if isinstance(item, TextContent))

    def to_call_tool_result(self) -> CallToolResult:
        meta = {"nextStepParams": self.next_step_params} if self.next_step_params else None
        return CallToolResult(content=list(self.content), isError=self.is_error, _meta=meta)


def text_content(text: str) -> TextContent:
    return TextContent(type="text", text=text)


def create_text_response(text: str, is_error: bool = False) -> ToolResponse:
    return ToolResponse(content=[text_content(text)], is_error=is_error)


def create_error_response(message: str, details: Optional[str] = None) -> ToolResponse:
    """Error response in the `Error: <message>\\nDetails: <details>` shape."""
    text = f"Error: {message}"
    if details:
        text += f"\nDetails: {details}"
    return create_text_response(text, is_error=True)


def format_json(value: Any) -> str:
    return json.dumps(value, indent=2, sort_keys=True)
