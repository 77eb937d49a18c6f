"""
Logging setup for cartlines.

`get_logger(__name__)` in every module; the level comes from LOG_LEVEL.
Type tags and ids come from callers, so they go through the sanitizers
before being logged.
"""

import logging
import os
import sys
from functools import cache

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# CWE-117: control characters could forge log lines
_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.setLevel(level)
    root.addHandler(handler)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Get a logger, typically for __name__."""
    return logging.getLogger(name)


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Escape a caller-supplied string and cap its length.

    Returns:
        Sanitized string, or "N/A" if empty
    """
    if not value:
        return "N/A"
    safe_value = str(value).translate(_ESCAPES)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def sanitize_id_for_logging(id_value: str | None) -> str:
    """Escaped id truncated to its first 8 characters ("N/A" if empty)."""
    if not id_value:
        return "N/A"
    return str(id_value).translate(_ESCAPES)[:8]
