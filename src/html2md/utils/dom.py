#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/utils/dom.py
"""Read-only navigation helpers over BeautifulSoup trees.

BeautifulSoup compares tags structurally (two ``<li>a</li>`` elements are
equal), so every helper here compares nodes by identity.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from bs4.element import Comment, Doctype, NavigableString, PreformattedString, Tag

from html2md.constants import (
    COMMENT_NODE_NAME,
    DECLARATION_NODE_NAME,
    DOCTYPE_NODE_NAME,
    INLINE_ELEMENTS,
    TEXT_NODE_NAME,
)


def node_name(node: Any) -> str:
    """Return the rule lookup name of a node.

    Elements use their tag name; strings use ``#text``, ``#comment``,
    ``#doctype`` or ``#declaration``.
    """
    if isinstance(node, Tag):
        return node.name
    if isinstance(node, Comment):
        return COMMENT_NODE_NAME
    if isinstance(node, Doctype):
        return DOCTYPE_NODE_NAME
    if isinstance(node, PreformattedString):
        return DECLARATION_NODE_NAME
    return TEXT_NODE_NAME


def is_text(node: Any) -> bool:
    """Return True for plain text nodes (not comments or declarations)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_inline_element(name: str) -> bool:
    """Return True if ``name`` is an HTML inline element."""
    return name in INLINE_ELEMENTS


def element_children(node: Any) -> Iterator[Tag]:
    """Iterate over the element children of ``node``, skipping text."""
    if not isinstance(node, Tag):
        return
    for child in node.children:
        if isinstance(child, Tag):
            yield child


def first_element_child(node: Any) -> Optional[Tag]:
    """Return the first element child of ``node``, or None."""
    return next(element_children(node), None)


def last_element_child(node: Any) -> Optional[Tag]:
    """Return the last element child of ``node``, or None."""
    if not isinstance(node, Tag):
        return None
    for child in reversed(node.contents):
        if isinstance(child, Tag):
            return child
    return None


def is_first_element_child(node: Any) -> bool:
    """Return True if ``node`` is the first element child of its parent."""
    parent = node.parent
    return parent is not None and first_element_child(parent) is node


def element_index(node: Tag) -> int:
    """Return the 0-based position of ``node`` among its element siblings."""
    index = 0
    sibling = node.previous_sibling
    while sibling is not None:
        if isinstance(sibling, Tag):
            index += 1
        sibling = sibling.previous_sibling
    return index


def previous_element_sibling(node: Any) -> Optional[Tag]:
    """Return the closest preceding element sibling, or None."""
    sibling = node.previous_sibling
    while sibling is not None and not isinstance(sibling, Tag):
        sibling = sibling.previous_sibling
    return sibling


def next_element_sibling(node: Any) -> Optional[Tag]:
    """Return the closest following element sibling, or None."""
    sibling = node.next_sibling
    while sibling is not None and not isinstance(sibling, Tag):
        sibling = sibling.next_sibling
    return sibling


def parent_name(node: Any) -> str:
    """Return the tag name of the parent of ``node``, or an empty string."""
    parent = node.parent
    return parent.name if isinstance(parent, Tag) else ""


def has_ancestor(node: Any, *names: str) -> bool:
    """Return True if any ancestor of ``node`` is one of ``names``."""
    return node.find_parent(list(names)) is not None


def class_list(node: Any) -> list[str]:
    """Return the ``class`` attribute of ``node`` as a list of tokens."""
    if not isinstance(node, Tag):
        return []
    classes = node.get("class")
    if classes is None:
        return []
    if isinstance(classes, str):
        return classes.split()
    return list(classes)


def class_string(node: Any) -> str:
    """Return the ``class`` attribute of ``node`` as a single string."""
    return " ".join(class_list(node))


def _node_text(node: Any) -> str:
    if isinstance(node, Tag):
        return node.get_text()
    return str(node) if is_text(node) else ""


def previous_text(node: Any) -> str:
    """Return the text of the closest preceding sibling that has any text."""
    sibling = node.previous_sibling
    while sibling is not None:
        text = _node_text(sibling)
        if text:
            return text
        sibling = sibling.previous_sibling
    return ""


def next_text(node: Any) -> str:
    """Return the text of the closest following sibling that has any text."""
    sibling = node.next_sibling
    while sibling is not None:
        text = _node_text(sibling)
        if text:
            return text
        sibling = sibling.next_sibling
    return ""
