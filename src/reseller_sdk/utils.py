"""
Logging helpers shared by the SDK.

Every module logs through the single ``logger`` defined here so that an
integrator can silence or redirect the SDK with one call to ``setup_logger``.
"""

import logging
import sys
import traceback
from typing import Optional


logger = logging.getLogger("reseller_sdk")
logger.addHandler(logging.NullHandler())

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"


def setup_logger(level: str = "INFO", stream=None) -> logging.Logger:
    """
    Attach a stream handler to the SDK logger.

    Calling it again only changes the level; handlers are not duplicated.

    Args:
        level: Logging level name (e.g. "DEBUG", "INFO").
        stream: Target stream, defaults to stderr.

    Returns:
        The configured SDK logger.
    """
    logger.setLevel(level.upper())
    if not any(getattr(h, "_reseller_sdk", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._reseller_sdk = True
        logger.addHandler(handler)
    return logger


def error_context() -> Optional[str]:
    """Describe where the exception currently being handled was raised."""
    _, exc, tb = sys.exc_info()
    if exc is None or tb is None:
        return None
    frame = traceback.extract_tb(tb)[-1]
    return f"{frame.filename}:{frame.lineno} in {frame.name}"
