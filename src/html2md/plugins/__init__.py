#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/plugins/__init__.py
"""Optional rule sets installed with :meth:`html2md.Converter.use`.

A plugin is a callable that receives the converter, may register hooks or
remove tags on it, and returns the rules to add. Every function here is a
factory returning such a callable.

Examples
--------
    >>> from html2md import Converter
    >>> from html2md.plugins import github_flavored, robust_code_block
    >>> converter = Converter().use(github_flavored(), robust_code_block())

"""

from html2md.plugins.code_block import collect_code_text, robust_code_block
from html2md.plugins.gfm import github_flavored, strikethrough, task_list_items
from html2md.plugins.table import table, table_compat

__all__ = [
    "collect_code_text",
    "github_flavored",
    "robust_code_block",
    "strikethrough",
    "table",
    "table_compat",
    "task_list_items",
]
