"""xcodebuild-mcp: Apple platform build, test and simulator tools over MCP"""

__version__ = "1.4.0"
