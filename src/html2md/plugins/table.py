#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/plugins/table.py
"""Table plugins.

:func:`table` renders HTML tables as GitHub flavoured pipe tables. Use it only
where the target Markdown dialect supports tables; :func:`table_compat`
produces plain paragraphs for CommonMark-only environments.

Examples
--------
    >>> from html2md import Converter
    >>> from html2md.plugins import table
    >>> converter = Converter().use(table())
    >>> print(converter.convert_string(
    ...     "<table><tr><th>Name</th><th>Age</th></tr><tr><td>Ann</td><td>7</td></tr></table>"
    ... ))
    | Name | Age |
    | --- | --- |
    | Ann | 7 |

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from bs4.element import Tag

from html2md.constants import (
    DEFAULT_TABLE_DIVIDER,
    TABLE_ALIGNMENT_MAPPING,
    TABLE_CELL_LINE_BREAK,
    TABLE_COMPAT_CELL_SEPARATOR,
)
from html2md.options import Options
from html2md.rules import Rule
from html2md.utils.dom import (
    element_children,
    first_element_child,
    is_first_element_child,
    next_element_sibling,
    parent_name,
    previous_element_sibling,
)
from html2md.utils.text import NEWLINE_RUN_RE

if TYPE_CHECKING:
    from html2md.converter import Converter

logger = logging.getLogger(__name__)

_CELL_TAGS = ("th", "td")


def move_captions(root: Any) -> None:
    """Move every ``<caption>`` out of its ``<table>`` to just after it.

    A table without a parent (the conversion root itself) keeps its caption.
    """
    if not isinstance(root, Tag):
        return

    for caption in root.find_all("caption"):
        table_node = caption.parent
        if not isinstance(table_node, Tag) or table_node.name != "table":
            continue
        if table_node.parent is None:
            logger.debug("Leaving caption of the root table in place")
            continue
        table_node.insert_after(caption.extract())


def _is_first_tbody(node: Any) -> bool:
    return isinstance(node, Tag) and node.name == "tbody" and previous_element_sibling(node) is None


def is_heading_row(row: Tag) -> bool:
    """Return True if ``row`` holds the column headings of its table.

    A row is a heading row if its parent is ``<thead>``, or if it is the
    first row of the ``<table>`` (or of its first ``<tbody>``) and every cell
    is a ``<th>``.
    """
    parent = row.parent
    name = parent_name(row)
    if name == "thead":
        return True

    if not (name == "table" or _is_first_tbody(parent)):
        return False

    if any(cell.name != "th" for cell in element_children(row)):
        return False

    return first_element_child(parent) is row


def cell_content(content: str, cell: Tag) -> str:
    """Format one cell, with a leading pipe on the first cell of the row.

    Line breaks become ``<br>`` so the row stays on a single line, unless the
    cell holds a nested table.
    """
    content = content.strip()
    if cell.find("table") is None:
        content = NEWLINE_RUN_RE.sub(TABLE_CELL_LINE_BREAK, content)

    prefix = "| " if is_first_element_child(cell) else " "
    return prefix + content + " |"


def _column_divider(cell: Tag) -> str:
    # HTML attribute values are case-insensitive, so align="Center" is centered
    align = cell.get("align")
    if isinstance(align, str):
        return TABLE_ALIGNMENT_MAPPING.get(align.lower(), DEFAULT_TABLE_DIVIDER)
    return DEFAULT_TABLE_DIVIDER


def table_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<table>``; tables without headings get an empty header row."""
    if node.find("thead") is None and node.find("th") is None:
        columns = max((sum(1 for _ in element_children(row)) for row in node.find_all("tr")), default=0)
        header = "|" + "     |" * columns
        divider = "|" + " --- |" * columns
        content = header + "\n" + divider + content

    return "\n\n" + content + "\n\n"


def table_cell_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<th>``/``<td>``."""
    return cell_content(content, node)


def table_row_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<tr>``, followed by the divider row after a heading row."""
    text = "\n" + content
    if is_heading_row(node):
        dividers = "".join(cell_content(_column_divider(cell), cell) for cell in element_children(node))
        if dividers:
            text += "\n" + dividers
    return text


def table() -> Callable[[Converter], list[Rule]]:
    """Create the pipe table plugin.

    Registers a before hook that moves captions below their table and the
    rules for ``table``, ``th``/``td`` and ``tr``.
    """

    def plugin(converter: Converter) -> list[Rule]:
        converter.before(move_captions)
        return [
            Rule(filter=["table"], replacement=table_rule),
            Rule(filter=list(_CELL_TAGS), replacement=table_cell_rule),
            Rule(filter=["tr"], replacement=table_row_rule),
        ]

    return plugin


def compat_cell_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render a cell as text, separated from a non-empty next cell."""
    content = content.strip()
    if not content:
        return content

    following = next_element_sibling(node)
    if following is not None and following.name in _CELL_TAGS and following.get_text().strip():
        content += TABLE_COMPAT_CELL_SEPARATOR
    return content


def compat_row_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render a row as its own paragraph."""
    return content + "\n\n"


def table_compat() -> Callable[[Converter], list[Rule]]:
    """Create the table plugin for Markdown dialects without tables.

    Each row becomes a paragraph with its cells joined by ``" · "``.
    """

    def plugin(converter: Converter) -> list[Rule]:
        return [
            Rule(filter=list(_CELL_TAGS), replacement=compat_cell_rule),
            Rule(filter=["tr"], replacement=compat_row_rule),
        ]

    return plugin
