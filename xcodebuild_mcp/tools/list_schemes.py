#!/usr/bin/env python3
"""list_schemes tool - Get available build schemes"""

from typing import List

from xcodebuild_mcp.build_utils import BuildParams, add_project_or_workspace
from xcodebuild_mcp.command import CommandExecutor
from xcodebuild_mcp.responses import ToolResponse, create_error_response, text_content
from xcodebuild_mcp.tool_factory import Requirement, create_session_aware_tool, define_tool
from xcodebuild_mcp.tools.common import PROJECT_PAIR, ProjectSourceParams


class ListSchemesParams(ProjectSourceParams):
    pass


def parse_schemes(output: str) -> List[str]:
    """
    Pull the scheme names out of `xcodebuild -list` output.

    Schemes are listed one per line, indented, under a "Schemes:" heading;
    the section ends at the first blank line.
    """
    schemes = []
    in_schemes = False
    for line in output.split("\n"):
        stripped = line.strip()
        if stripped == "Schemes:":
            in_schemes = True
            continue
        if in_schemes:
            if not stripped:
                break
            schemes.append(stripped)
    return schemes


async def list_schemes_logic(params: ListSchemesParams, executor: CommandExecutor) -> ToolResponse:
    command = ["xcodebuild", "-list"]
    add_project_or_workspace(command, BuildParams(
        scheme="", project_path=params.project_path, workspace_path=params.workspace_path
    ))

    try:
        result = await executor(command, "List Schemes")
    except Exception as e:
        return create_error_response("Error listing schemes", str(e))

    if not result.success:
        return create_error_response("Failed to list schemes", result.error)

    schemes = parse_schemes(result.output)
    if not schemes:
        return ToolResponse(content=[text_content("✅ No schemes found.")])

    source_key = "workspacePath" if params.workspace_path else "projectPath"
    source = params.workspace_path or params.project_path
    return ToolResponse(
        content=[
            text_content("✅ Available schemes:"),
            text_content("\n".join(schemes)),
            text_content(
                "Next Steps:\n"
                f"1. Build the app: build_macos({{ {source_key}: '{source}', scheme: '{schemes[0]}' }})\n"
                f"   or for iOS: build_sim({{ {source_key}: '{source}', scheme: '{schemes[0]}', simulatorName: 'iPhone 16' }})\n"
                f"2. Show build settings: show_build_settings({{ {source_key}: '{source}', scheme: '{schemes[0]}' }})"
            ),
        ],
        next_step_params={"build_macos": {source_key: source, "scheme": schemes[0]}},
    )


tool = define_tool(
    "list_schemes",
    "List the schemes of a project or workspace. Omitted parameters are taken from the session defaults.",
    ListSchemesParams,
    create_session_aware_tool(
        ListSchemesParams,
        list_schemes_logic,
        requirements=(Requirement(one_of=PROJECT_PAIR, message="Provide a project or workspace"),),
        exclusive_pairs=(PROJECT_PAIR,),
    ),
)
