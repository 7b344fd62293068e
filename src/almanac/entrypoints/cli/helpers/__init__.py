"""CLI helpers for ALMANAC.

Utilities used by the command-line interface: URL sanitization for safe display,
message emitters that write to stderr with emoji→ASCII fallbacks, and the JSON
document format for calendars.
"""

from .db_url import sanitize_url
from .messages import error, success, warn

__all__ = ["error", "sanitize_url", "success", "warn"]
