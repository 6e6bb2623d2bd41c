#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/plugins/gfm.py
"""GitHub flavoured Markdown extensions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

from html2md.constants import DEFAULT_STRIKETHROUGH_CHARACTER
from html2md.options import Options
from html2md.plugins.table import table
from html2md.rules import Rule
from html2md.utils.dom import first_element_child, next_text, parent_name
from html2md.utils.text import delimiter_for_every_line

if TYPE_CHECKING:
    from html2md.converter import Converter


def strikethrough(character: str = DEFAULT_STRIKETHROUGH_CHARACTER) -> Callable[[Converter], list[Rule]]:
    """Create the plugin rendering ``<del>``, ``<s>`` and ``<strike>``.

    Parameters
    ----------
    character : str, default "~"
        Delimiter placed around the text, for example ``"~~"``

    """

    def strikethrough_rule(content: str, node: Any, options: Options) -> Optional[str]:
        content = content.strip()
        if not content:
            return ""
        return delimiter_for_every_line(content, character)

    def plugin(converter: Converter) -> list[Rule]:
        return [Rule(filter=["del", "s", "strike"], replacement=strikethrough_rule)]

    return plugin


def checkbox_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render the leading checkbox of a list item as ``[x]`` or ``[ ]``."""
    if (node.get("type") or "").lower() != "checkbox":
        return None
    if parent_name(node) != "li" or first_element_child(node.parent) is not node:
        return None
    box = "[x]" if node.has_attr("checked") else "[ ]"
    following = next_text(node)
    return box if following[:1].isspace() else box + " "


def task_list_items() -> Callable[[Converter], list[Rule]]:
    """Create the plugin rendering checkbox list items as task list items."""

    def plugin(converter: Converter) -> list[Rule]:
        return [Rule(filter=["input"], replacement=checkbox_rule)]

    return plugin


def github_flavored() -> Callable[[Converter], list[Rule]]:
    """Create the plugin bundling tables, task lists and strikethrough."""
    bundled = (table(), task_list_items(), strikethrough())

    def plugin(converter: Converter) -> list[Rule]:
        rules: list[Rule] = []
        for extension in bundled:
            rules.extend(extension(converter))
        return rules

    return plugin
