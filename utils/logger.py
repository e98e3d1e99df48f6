"""
utils/logger.py
---------------
Logging setup shared by every module.
Records go to standard error, so a failed startup is reported there
even when stdout is redirected. Modules call `get_logger(__name__)`.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_HANDLER_NAME = "clientes-stderr"


def configure_logging(level: str = LOG_LEVEL) -> logging.Handler:
    """
    Attach the stderr handler to the root logger and set its level.

    Calling it again only changes the level; the handler is attached once.
    Unknown level names fall back to INFO.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root.addHandler(handler)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, configuring the root logger on first use."""
    root = logging.getLogger()
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        configure_logging()
    return logging.getLogger(name)
