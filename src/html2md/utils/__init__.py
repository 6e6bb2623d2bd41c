#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Helper modules for html2md: tree navigation, text, escaping, URLs and locking."""

from html2md.utils.escape import escape_markdown_characters
from html2md.utils.locks import ReadWriteLock
from html2md.utils.text import calculate_code_fence, trim_trailing_spaces
from html2md.utils.urls import default_get_absolute_url

__all__ = [
    "ReadWriteLock",
    "calculate_code_fence",
    "default_get_absolute_url",
    "escape_markdown_characters",
    "trim_trailing_spaces",
]
