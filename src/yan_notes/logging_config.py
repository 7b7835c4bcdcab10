"""Logging configuration for the yan-notes client."""

import sys

from loguru import logger

CLI_FORMAT = "{level.icon} {message}"
VERBOSE_FORMAT = "{level.icon} <dim>{name}:{line}</dim> {message}"
SERVER_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function} - {message}"


def configure_logging(*, verbose: bool = False, server: bool = False) -> None:
    """Send loguru output to stderr.

    Args:
        verbose: Log at DEBUG and show the emitting module.
        server: Timestamped lines for the MCP server. Its stdout carries the protocol.
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    if server:
        fmt = SERVER_FORMAT
    elif verbose:
        fmt = VERBOSE_FORMAT
    else:
        fmt = CLI_FORMAT
    logger.add(sys.stderr, level=level, format=fmt, colorize=False if server else None)
