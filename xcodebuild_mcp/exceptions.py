#!/usr/bin/env python3
"""Exception types for xcodebuild-mcp"""


class XcodeBuildMCPError(Exception):
    def __init__(self, message, code=None):
        self.message = message
        self.code = code
        super().__init__(self.message)


class InvalidParameterError(XcodeBuildMCPError):
    pass


class ConfigError(XcodeBuildMCPError):
    pass


class ExecutorConfigurationError(XcodeBuildMCPError):
    """Raised when an executor is misused, never for a failed external command."""
    pass


class BuildSettingsError(XcodeBuildMCPError):
    pass


class ProcessRegistryError(XcodeBuildMCPError):
    pass
