#!/usr/bin/env python3
import argparse
import asyncio
import logging
import sys

from xcodebuild_mcp import __version__
from xcodebuild_mcp.config import init_runtime_config, seed_session_store
from xcodebuild_mcp.exceptions import ConfigError
from xcodebuild_mcp.logger import configure_logging
from xcodebuild_mcp.server import run_server
from xcodebuild_mcp.session_store import get_session_store

logger = logging.getLogger("xcodebuild_mcp")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Xcode build MCP Server")
    parser.add_argument("--version", action="version", version=f"xcodebuild-mcp {__version__}")
    parser.add_argument("--debug", action="store_true", default=None, help="Log at DEBUG level")
    parser.add_argument("--disable-session-defaults", action="store_true", default=None,
                        help="Ignore session defaults; every tool call must pass its parameters")
    parser.add_argument("--incremental-builds", action="store_true", default=None,
                        help="Use xcodemake for incremental builds when it is installed")
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument("--cwd", help="Project directory holding .xcodebuildmcp/config.yaml (default: current directory)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        config = asyncio.run(init_runtime_config(
            cwd=args.cwd,
            overrides={
                "debug": args.debug,
                "disable_session_defaults": args.disable_session_defaults,
                "incremental_builds_enabled": args.incremental_builds,
            },
        ))
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    configure_logging(debug=config.debug, log_file=args.log_file)
    seed_session_store(get_session_store(), config)

    if config.disable_session_defaults:
        logger.info("Session defaults disabled")
    if config.incremental_builds_enabled:
        logger.info("Incremental builds enabled")

    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
