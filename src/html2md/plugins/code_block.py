#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/plugins/code_block.py
"""Code block extraction for syntax-highlighted HTML.

Highlighters wrap code in tables, rows, per-line ``<div>``/``<span>``
elements and line-number gutters. The default ``<pre>`` rule would either
lose the line structure or include the line numbers. The robust plugin reads
the raw subtree instead: block wrappers end a line, ``<br>`` is a line break
and gutter elements are skipped.

The gutter check never applies to the element whose text is collected: Prism
marks the ``<pre>`` itself with ``line-numbers``, and skipping it would drop
the whole block.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

from bs4.element import Tag

from html2md.constants import (
    CODE_BLOCK_LINE_ELEMENTS,
    CODE_GUTTER_CLASS_MARKERS,
    CODE_LANGUAGE_CLASS_PREFIXES,
)
from html2md.options import Options
from html2md.rules import Rule
from html2md.utils.dom import class_list, class_string, has_ancestor, is_text
from html2md.utils.text import calculate_code_fence, trim_trailing_spaces

if TYPE_CHECKING:
    from html2md.converter import Converter

# marks the end of a line element on the walk stack
_LINE_END = object()


def is_gutter(node: Tag) -> bool:
    """Return True if the class of ``node`` marks a line-number gutter."""
    classes = class_string(node).lower()
    return any(marker in classes for marker in CODE_GUTTER_CLASS_MARKERS)


def collect_code_text(node: Tag) -> str:
    """Extract the code text of ``node`` with its line structure.

    Parameters
    ----------
    node : bs4.Tag
        A ``<pre>`` or ``<code>`` element

    Returns
    -------
    str
        Text of the subtree. Gutter elements below ``node`` are skipped; the
        class of ``node`` itself is not checked, since some highlighters put
        ``line-numbers`` on the ``<pre>``.

    """
    parts: list[str] = []
    stack: list[Any] = [node]
    while stack:
        item = stack.pop()
        if item is _LINE_END:
            parts.append("\n")
            continue
        if is_text(item):
            parts.append(str(item))
            continue
        if not isinstance(item, Tag) or (item is not node and is_gutter(item)):
            continue

        name = item.name.lower()
        if name == "br":
            parts.append("\n")
        if name in CODE_BLOCK_LINE_ELEMENTS:
            stack.append(_LINE_END)
        stack.extend(reversed(item.contents))
    return "".join(parts)


def detect_language(node: Optional[Tag]) -> str:
    """Return the language named by a ``language-*``/``lang-*`` class, or ""."""
    for cls in class_list(node):
        cls = cls.lower()
        for prefix in CODE_LANGUAGE_CLASS_PREFIXES:
            if cls.startswith(prefix):
                return cls[len(prefix):]
    return ""


def robust_pre_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<pre>`` as a fenced block from its raw text."""
    language = detect_language(node.find("code")) or detect_language(node)

    code = collect_code_text(node).rstrip("\n")
    fence = calculate_code_fence(options.fence_char, code)
    return "\n\n" + fence + language + "\n" + code + "\n" + fence + "\n\n"


def robust_code_rule(content: str, node: Any, options: Options) -> Optional[str]:
    """Render ``<code>`` outside ``<pre>`` as inline code; skip it inside."""
    if has_ancestor(node, "pre"):
        return None

    code = trim_trailing_spaces(collect_code_text(node).replace("\r\n", "\n"))

    delimiter = "`"
    if "`" in code:
        delimiter = "``"
        if "``" in code:
            delimiter = "```"
    return delimiter + code + delimiter


def robust_code_block() -> Callable[[Converter], list[Rule]]:
    """Create the plugin that handles highlighted ``<pre>``/``<code>`` markup.

    Code blocks are always fenced, whatever ``code_block_style`` says.

    Examples
    --------
        >>> from html2md import Converter
        >>> converter = Converter().use(robust_code_block())
        >>> print(converter.convert_string(
        ...     '<pre class="language-go"><div>package main</div><div>func main() {}</div></pre>'
        ... ))
        ```go
        package main
        func main() {}
        ```

    """

    def plugin(converter: Converter) -> list[Rule]:
        return [
            Rule(filter=["pre"], replacement=robust_pre_rule),
            Rule(filter=["code"], replacement=robust_code_rule),
        ]

    return plugin
