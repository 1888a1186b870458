"""CLI helpers for POSBRIDGE.

Utilities used by the command-line interface: URL sanitization for safe
display, option parsers, and message emitters that write to stderr with
emoji→ASCII fallbacks.
"""

from .db_url import sanitize_url
from .key_value_parser import parse_key_values
from .log_level_parser import parse_log_level
from .messages import error, success, warn

__all__ = [
    "error",
    "parse_key_values",
    "parse_log_level",
    "sanitize_url",
    "success",
    "warn",
]
