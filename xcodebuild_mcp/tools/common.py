#!/usr/bin/env python3
"""Parameter models and helpers shared by the xcodebuild tools"""

from typing import List, Literal, Optional

from pydantic import Field, model_validator

from xcodebuild_mcp.build_utils import BuildParams, PlatformBuildOptions
from xcodebuild_mcp.tool_factory import Requirement, ToolParams
from xcodebuild_mcp.xcode import XcodePlatform

Arch = Literal["arm64", "x86_64"]
SimulatorPlatform = Literal["iOS Simulator", "watchOS Simulator", "tvOS Simulator", "visionOS Simulator"]
DevicePlatform = Literal["iOS", "watchOS", "tvOS", "visionOS"]

PROJECT_REQUIREMENTS = (
    Requirement(all_of=("scheme",), message="scheme is required"),
    Requirement(one_of=("projectPath", "workspacePath"), message="Provide a project or workspace"),
)
SIMULATOR_REQUIREMENT = Requirement(
    one_of=("simulatorId", "simulatorName"), message="Provide simulatorId or simulatorName"
)

PROJECT_PAIR = ("projectPath", "workspacePath")
SIMULATOR_PAIR = ("simulatorId", "simulatorName")


class ProjectSourceParams(ToolParams):
    project_path: Optional[str] = Field(None, description="Path to the .xcodeproj file")
    workspace_path: Optional[str] = Field(None, description="Path to the .xcworkspace file")

    @model_validator(mode="after")
    def _exactly_one_source(self):
        if self.project_path and self.workspace_path:
            raise ValueError("projectPath and workspacePath are mutually exclusive. Provide only one.")
        if not self.project_path and not self.workspace_path:
            raise ValueError("Either projectPath or workspacePath is required.")
        return self


class SchemeParams(ProjectSourceParams):
    scheme: str = Field(description="The scheme to use")
    configuration: str = Field("Debug", description="Build configuration (Debug, Release, etc.)")
    derived_data_path: Optional[str] = Field(None, description="Path to derived data directory")
    extra_args: Optional[List[str]] = Field(None, description="Additional arguments to pass to xcodebuild")

    def build_params(self, suppress_warnings: bool = False) -> BuildParams:
        return BuildParams(
            scheme=self.scheme,
            configuration=self.configuration,
            project_path=self.project_path,
            workspace_path=self.workspace_path,
            derived_data_path=self.derived_data_path,
            extra_args=list(self.extra_args or []),
            suppress_warnings=suppress_warnings,
        )


class BuildCommandParams(SchemeParams):
    prefer_xcodebuild: bool = Field(
        False, description="Use plain xcodebuild even when incremental builds are enabled"
    )
    suppress_warnings: bool = Field(False, description="Leave compiler warnings out of the response")

    def build_params(self, suppress_warnings: Optional[bool] = None) -> BuildParams:
        return super().build_params(self.suppress_warnings if suppress_warnings is None else suppress_warnings)


class SimulatorTargetMixin(ToolParams):
    simulator_id: Optional[str] = Field(None, description="UUID of the simulator (from list_sims)")
    simulator_name: Optional[str] = Field(None, description="Name of the simulator, e.g. 'iPhone 16'")
    use_latest_os: bool = Field(True, alias="useLatestOS", description="Use the latest OS when selecting by name")

    def simulator_options(self, platform: str, log_prefix: str) -> PlatformBuildOptions:
        return PlatformBuildOptions(
            platform=XcodePlatform(platform),
            log_prefix=log_prefix,
            simulator_id=self.simulator_id,
            simulator_name=self.simulator_name,
            use_latest_os=self.use_latest_os,
        )


class SwiftPackageParams(ToolParams):
    package_path: str = Field(description="Path to the directory containing Package.swift")
    configuration: Literal["debug", "release"] = Field("debug", description="Swift build configuration")

    def swift_command(self, subcommand: str) -> List[str]:
        command = ["swift", subcommand, "--package-path", self.package_path]
        if self.configuration == "release":
            command.extend(["-c", "release"])
        return command
