"""
utils/logger.py
---------------
Logging setup shared by every module, plus helpers for turning driver
errors into single-line diagnostics.

    logger = get_logger(__name__)
    logger.error(f"Query Error: {one_line(exc)}")
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_handler: logging.Handler | None = None


def _level(name: str) -> int:
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _init_logging() -> None:
    global _handler
    if _handler is not None:
        return
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(_level(LOG_LEVEL))
    root.addHandler(_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance; the first call installs the stdout handler
    at LOG_LEVEL (unknown names fall back to INFO).
    """
    _init_logging()
    return logging.getLogger(name)


def one_line(error: BaseException) -> str:
    """
    Message of an exception collapsed onto one line.

    libpq messages span several lines (DETAIL, HINT, the caret under the
    failing token); the diagnostic sink takes exactly one line per failure.
    Exceptions with an empty message are named by their class.
    """
    return " ".join(str(error).split()) or error.__class__.__name__
