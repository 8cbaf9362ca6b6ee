#!/usr/bin/env python3
"""Logging setup. Everything goes to stderr because stdout carries the MCP protocol."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured_handlers = []


def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        debug: Log at DEBUG level when True, INFO otherwise
        log_file: Optional path that receives a copy of every log record

    Returns:
        The configured "xcodebuild_mcp" logger
    """
    logger = logging.getLogger("xcodebuild_mcp")

    # Reconfiguring replaces the handlers we installed earlier
    for handler in _configured_handlers:
        logger.removeHandler(handler)
        handler.close()
    _configured_handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    _configured_handlers.append(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        _configured_handlers.append(file_handler)

    for handler in _configured_handlers:
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    return logger
