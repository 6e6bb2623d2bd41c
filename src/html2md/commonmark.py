#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/commonmark.py
"""Default rules for common HTML elements.

These rules produce plain CommonMark: headings, paragraphs, emphasis, links,
images, inline code, code blocks, lists, blockquotes, thematic breaks and
line breaks, plus escaping of text nodes. A converter registers them first,
so every plugin rule for the same tag takes precedence over them.

Lists
-----
List item markers are computed while rendering, so list items added by
before hooks are numbered like any other. An ordered item's number is its
position among *all* element siblings, not only ``<li>`` siblings:
``<ol><li>a</li><div></div><li>b</li></ol>`` renders ``1. a`` and ``3. b``.

"""

from __future__ import annotations

import re
from typing import Any, Optional

from bs4.element import Tag

from html2md.constants import (
    CODE_LANGUAGE_CLASS_PREFIXES,
    HEADING_ELEMENTS,
    LINK_INDEX_ATTRIBUTE,
    TEXT_NODE_NAME,
)
from html2md.options import Options
from html2md.rules import AdvancedResult, Rule
from html2md.utils.dom import (
    class_list,
    element_children,
    element_index,
    first_element_child,
    has_ancestor,
    is_inline_element,
    is_text,
    last_element_child,
    parent_name,
)
from html2md.utils.escape import escape_markdown_characters
from html2md.utils.text import (
    LEADING_NEWLINES_RE,
    add_space_if_necessary,
    calculate_code_fence,
    collapse_blank_lines,
    collapse_whitespace,
    delimiter_for_every_line,
    escape_multiline,
    longest_run,
)

_LIST_TAGS = ("ul", "ol")
_STRONG_TAGS = ("strong", "b")
_EMPHASIS_TAGS = ("em", "i")
_INLINE_CODE_TAGS = ("code", "kbd", "samp", "tt")

_LINE_START_RE = re.compile(r"^", re.MULTILINE)
_NEWLINES_RE = re.compile(r"\n+")
_HEADING_CLOSING_HASHES_RE = re.compile(r"(\s)(#+)$")
_LIST_ITEM_LINE_RE = re.compile(r"^ *(?:[-+*]|\d+\.) ")


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def _is_inline_node(node: Any) -> bool:
    if isinstance(node, Tag):
        return is_inline_element(node.name)
    return is_text(node)


def text_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Collapse whitespace in a text node and escape Markdown characters."""
    text = str(node)
    previous_node = node.previous_sibling
    next_node = node.next_sibling

    if not text.strip():
        # keep the word gap in "<b>a</b> <i>b</i>"
        if previous_node is not None and next_node is not None:
            if _is_inline_node(previous_node) and _is_inline_node(next_node):
                return " "
        return ""

    text = collapse_whitespace(text)

    parent = node.parent
    if not (isinstance(parent, Tag) and is_inline_element(parent.name)):
        if previous_node is None:
            text = text.lstrip()
        if next_node is None:
            text = text.rstrip()

    if options.escape_mode == "basic":
        text = escape_markdown_characters(text)
    return text


# ---------------------------------------------------------------------------
# Block elements
# ---------------------------------------------------------------------------


def paragraph_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Separate ``<p>`` and ``<div>`` content from its surroundings."""
    if not content.strip():
        return ""

    parent = parent_name(node)
    if is_inline_element(parent) or parent == "li":
        return "\n" + content + "\n"
    return "\n\n" + content + "\n\n"


def heading_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<h1>`` to ``<h6>`` as atx or setext headings."""
    content = content.replace("\r", " ").replace("\n", " ").strip()
    if not content:
        return None
    content = _HEADING_CLOSING_HASHES_RE.sub(r"\1\\\2", content)

    if has_ancestor(node, "a"):
        return add_space_if_necessary(node, options.strong_delimiter + content + options.strong_delimiter)

    level = int(node.name[1])
    if options.heading_style == "setext" and level < 3:
        underline = ("=" if level == 1 else "-") * len(content)
        return f"\n\n{content}\n{underline}\n\n"

    return f"\n\n{'#' * level} {content}\n\n"


def blockquote_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Prefix every line of the quoted content with ``> ``."""
    content = content.strip()
    if not content:
        return None

    content = collapse_blank_lines(content)
    content = _LINE_START_RE.sub("> ", content)
    return "\n\n" + content + "\n\n"


def horizontal_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<hr>``; a divider inside a heading is dropped."""
    if has_ancestor(node, *HEADING_ELEMENTS):
        return ""
    return "\n\n" + options.horizontal_rule + "\n\n"


def line_break_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<br>`` as a paragraph break."""
    return "\n\n"


def noscript_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Skip ``<noscript>`` so its children render as if it were not there."""
    return None


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------


def is_wrapper_list_item(node: Tag) -> bool:
    """Return True for ``<li>`` elements whose only content is a nested list.

    ``<li><ul>...</ul></li>`` must not get a marker of its own, otherwise an
    empty bullet line would be emitted.
    """
    own_text = []
    has_list = False
    for child in node.children:
        if isinstance(child, Tag):
            if child.name in _LIST_TAGS:
                has_list = True
            else:
                own_text.append(child.get_text())
        elif is_text(child):
            own_text.append(str(child))
    return has_list and not "".join(own_text).strip()


def list_item_prefix(options: Options, node: Tag) -> str:
    """Return the marker of a list item: ``"- "``, ``"3. "``, or ``""``.

    Numbers are zero-padded to the width of the highest number in the list.
    Items outside a list and wrapper items get no marker.
    """
    if is_wrapper_list_item(node):
        return ""

    parent = node.parent
    name = parent_name(node)
    if name == "ul":
        return options.bullet_list_marker + " "
    if name == "ol":
        start = _list_start(parent)
        number = start + element_index(node)
        highest = start + sum(1 for _ in element_children(parent)) - 1
        return f"{number:0{len(str(highest))}d}. "
    return ""


def _list_start(node: Tag) -> int:
    try:
        return int(node.get("start", 1))
    except (TypeError, ValueError):
        return 1


def count_list_parents(options: Options, node: Tag) -> tuple[int, int]:
    """Measure the marker space reserved by the lists around ``node``.

    Returns
    -------
    tuple[int, int]
        Width of the markers in the item's own list, and the summed marker
        widths of every enclosing list further up

    """
    widths: list[int] = []
    parent = node.parent
    while isinstance(parent, Tag):
        if parent.name == "li":
            parent = parent.parent
            continue
        if parent.name not in _LIST_TAGS:
            break
        first = first_element_child(parent)
        widths.append(len(list_item_prefix(options, first)) if first is not None and first.name == "li" else 0)
        parent = parent.parent

    if not widths:
        return 0, 0
    return widths[0], sum(widths[1:])


def indent_list_item(content: str, spaces: int) -> str:
    """Indent continuation lines of a list item by ``spaces``.

    Lines from a nested list are already indented; indentation stops at the
    first of them.
    """
    lines = content.split("\n")
    indent = " " * spaces
    for i in range(1, len(lines)):
        if _LIST_ITEM_LINE_RE.match(lines[i]):
            break
        if lines[i]:
            lines[i] = indent + lines[i]
    return "\n".join(lines)


def list_item_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render an ``<li>`` with its marker and nested indentation."""
    if not content.strip():
        return None

    content = LEADING_NEWLINES_RE.sub("", content).rstrip("\n").lstrip(" ")

    prefix = list_item_prefix(options, node)
    prefix_count, previous_prefix_counts = count_list_parents(options, node)
    if not prefix:
        prefix = " " * prefix_count
    prefix = " " * previous_prefix_counts + prefix

    content = indent_list_item(content, prefix_count + previous_prefix_counts)
    return prefix + content + "\n"


def list_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<ul>``/``<ol>``; nested lists stay attached to their item."""
    parent = node.parent
    if parent_name(node) in ("li", *_LIST_TAGS) and last_element_child(parent) is node:
        if not content.startswith("\n"):
            content = "\n" + content
        return content.rstrip()
    return "\n\n" + content + "\n\n"


# ---------------------------------------------------------------------------
# Inline elements
# ---------------------------------------------------------------------------


def _emphasis(content: str, node: Any, delimiter: str, nested_tags: tuple[str, ...]) -> str:
    # nested <b><b>x</b></b> only gets one pair
    if parent_name(node) in nested_tags:
        return content

    trimmed = content.strip()
    if not trimmed:
        return trimmed

    trimmed = delimiter_for_every_line(trimmed, delimiter)
    return add_space_if_necessary(node, trimmed)


def strong_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<strong>``/``<b>``."""
    return _emphasis(content, node, options.strong_delimiter, _STRONG_TAGS)


def emphasis_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<em>``/``<i>``."""
    return _emphasis(content, node, options.em_delimiter, _EMPHASIS_TAGS)


def image_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<img>``; images without a source are dropped."""
    src = (node.get("src") or "").strip()
    if not src:
        return ""

    src = options.get_absolute_url(node, src, options.domain)
    alt = (node.get("alt") or "").replace("\n", " ")
    title = node.get("title")
    if title:
        title = title.replace("\n", " ").replace('"', '\\"')
        return f'![{alt}]({src} "{title}")'
    return f"![{alt}]({src})"


def link_rule(content: str, node: Any, options: Options) -> tuple[AdvancedResult, bool]:
    """Render ``<a>`` as an inline or reference link.

    Reference links put their definition in the footer so it ends up at the
    bottom of the document.
    """
    href = (node.get("href") or "").strip()
    if not href or href == "#":
        return AdvancedResult(markdown=content), False

    href = options.get_absolute_url(node, href, options.domain)
    content = escape_multiline(content)

    title = ""
    if node.get("title"):
        escaped = node["title"].replace("\n", " ").replace('"', '\\"')
        title = f' "{escaped}"'

    # links without text (e.g. an svg icon) fall back to their labels
    if not content.strip():
        content = node.get("title") or node.get("aria-label") or ""
    if not content:
        return AdvancedResult(), False

    if options.link_style == "inlined":
        return AdvancedResult(markdown=add_space_if_necessary(node, f"[{content}]({href}{title})")), False

    if options.link_reference_style == "collapsed":
        replacement = f"[{content}][]"
        reference = f"[{content}]: {href}{title}"
    elif options.link_reference_style == "shortcut":
        replacement = f"[{content}]"
        reference = f"[{content}]: {href}{title}"
    else:
        ref_id = node.get(LINK_INDEX_ATTRIBUTE, "")
        replacement = f"[{content}][{ref_id}]"
        reference = f"[{ref_id}]: {href}{title}"

    return AdvancedResult(markdown=add_space_if_necessary(node, replacement), footer=reference), False


# ---------------------------------------------------------------------------
# Code
# ---------------------------------------------------------------------------


def code_text(node: Tag) -> str:
    """Return the raw text of a code element, with ``<br>`` as newlines."""
    parts = []
    for descendant in node.descendants:
        if isinstance(descendant, Tag):
            if descendant.name == "br":
                parts.append("\n")
        elif is_text(descendant):
            parts.append(str(descendant))
    return "".join(parts)


def code_language(node: Optional[Tag]) -> str:
    """Guess a code block language from the classes of ``node``.

    A ``language-*`` or ``lang-*`` class wins; otherwise the first class is
    used as-is.
    """
    classes = class_list(node)
    for cls in classes:
        for prefix in CODE_LANGUAGE_CLASS_PREFIXES:
            if cls.startswith(prefix):
                return cls[len(prefix):]
    return classes[0] if classes else ""


def inline_code_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<code>``, ``<kbd>``, ``<samp>`` and ``<tt>`` as inline code."""
    code = _NEWLINES_RE.sub("\n", code_text(node))

    fence = "`" * (longest_run("`", code) + 1)
    if code.startswith("`"):
        code = " " + code
    if code.endswith("`"):
        code = code + " "

    return add_space_if_necessary(node, fence + code + fence)


def code_block_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<pre>`` as a fenced or indented code block."""
    code = code_text(node)
    if code.startswith("\n"):
        code = code[1:]
    code = code.rstrip("\n")

    if options.code_block_style == "fenced":
        language = code_language(node.find("code"))
        fence = calculate_code_fence(options.fence_char, code)
        return f"\n\n{fence}{language}\n{code}\n{fence}\n\n"

    code = code.replace("\n", "\n    ")
    return "\n\n    " + code + "\n\n"


COMMONMARK_RULES: tuple[Rule, ...] = (
    Rule(filter=[TEXT_NODE_NAME], replacement=text_rule),
    Rule(filter=["ul", "ol"], replacement=list_rule),
    Rule(filter=["li"], replacement=list_item_rule),
    Rule(filter=["p", "div"], replacement=paragraph_rule),
    Rule(filter=list(HEADING_ELEMENTS), replacement=heading_rule),
    Rule(filter=["strong", "b"], replacement=strong_rule),
    Rule(filter=["i", "em"], replacement=emphasis_rule),
    Rule(filter=["img"], replacement=image_rule),
    Rule(filter=["a"], advanced_replacement=link_rule),
    Rule(filter=list(_INLINE_CODE_TAGS), replacement=inline_code_rule),
    Rule(filter=["pre"], replacement=code_block_rule),
    Rule(filter=["hr"], replacement=horizontal_rule),
    Rule(filter=["br"], replacement=line_break_rule),
    Rule(filter=["blockquote"], replacement=blockquote_rule),
    Rule(filter=["noscript"], replacement=noscript_rule),
)
