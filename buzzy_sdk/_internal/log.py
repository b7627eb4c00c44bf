"""Logging setup for the Buzzy SDK.

The SDK never configures logging on import. Debug output goes through the
``buzzy_sdk`` logger and is only printed to stderr once
``enable_debug_logging()`` has been called.
"""

import logging
import sys

LOGGER_NAME = "buzzy_sdk"
DEBUG_PREFIX = "[buzzy-sdk]"

_handler: logging.Handler | None = None


def enable_debug_logging() -> logging.Logger:
    """Send ``buzzy_sdk`` debug logs to stderr.

    Safe to call more than once; only one handler is ever attached.

    Returns:
        The package logger.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(f"{DEBUG_PREFIX} %(message)s"))
        logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG)
    return logger
