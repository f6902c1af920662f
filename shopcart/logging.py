"""
Logging setup for shopcart.

The root logger is configured once, on first import, unless the hosting
application already attached handlers. Cart and catalog modules log through
``get_logger(__name__)``; values that come from requests (product ids,
emails) go through ``sanitize_for_logging`` or ``mask_email`` first.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Long enough for a uuid catalog id
ID_LOG_LENGTH = 36

_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def _level_from_env() -> int:
    return getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = _level_from_env()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    # Serverless log collectors stamp their own time
    simple = os.environ.get("VERCEL") == "1"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if simple else LOG_FORMAT))
    root.addHandler(handler)

    # Supabase and Upstash clients both log every request through httpx
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` (pass ``__name__``)."""
    return logging.getLogger(name)


def sanitize_for_logging(value: object, max_length: int = ID_LOG_LENGTH) -> str:
    """
    Make a request-supplied value safe to interpolate into a log line.

    Control characters are escaped so a value cannot forge extra log
    entries (CWE-117), and the result is cut to ``max_length``.

    Returns:
        Escaped, truncated string, or "N/A" for empty values
    """
    if value is None or value == "":
        return "N/A"
    safe_value = str(value).translate(_CONTROL_CHARS)
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def mask_email(email: str | None) -> str:
    """
    Cart owner key for logs: first character of the mailbox plus domain.

    ``crio-user@gmail.com`` -> ``c***@gmail.com``
    """
    if not email:
        return "N/A"
    local, sep, domain = str(email).partition("@")
    if not sep:
        return sanitize_for_logging(local[:1] + "***")
    return sanitize_for_logging(f"{local[:1]}***@{domain}", max_length=64)


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "mask_email",
    "sanitize_for_logging",
]
