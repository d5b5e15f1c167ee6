"""Utility functions."""

from .datetime import format_age, now_utc
from .slug import safe_filename

__all__ = [
    "format_age",
    "now_utc",
    "safe_filename",
]
