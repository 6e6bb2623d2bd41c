#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the html2md library.

This module centralizes the hardcoded values and default configuration
constants used across html2md.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Markdown Formatting Defaults - Option defaults for the converter
3. HTML Element Classification - Inline and block element sets
4. Rule Engine Internals - Attribute names and node names used by the walker
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

HeadingStyle = Literal["setext", "atx"]
BulletListMarker = Literal["-", "+", "*"]
CodeBlockStyle = Literal["indented", "fenced"]
EmDelimiter = Literal["_", "*"]
StrongDelimiter = Literal["**", "__"]
LinkStyle = Literal["inlined", "referenced"]
LinkReferenceStyle = Literal["full", "collapsed", "shortcut"]
EscapeMode = Literal["basic", "disabled"]

HEADING_STYLES: tuple[str, ...] = ("setext", "atx")
BULLET_LIST_MARKERS: tuple[str, ...] = ("-", "+", "*")
CODE_BLOCK_STYLES: tuple[str, ...] = ("indented", "fenced")
EM_DELIMITERS: tuple[str, ...] = ("_", "*")
STRONG_DELIMITERS: tuple[str, ...] = ("**", "__")
LINK_STYLES: tuple[str, ...] = ("inlined", "referenced")
LINK_REFERENCE_STYLES: tuple[str, ...] = ("full", "collapsed", "shortcut")
ESCAPE_MODES: tuple[str, ...] = ("basic", "disabled")

# =============================================================================
# Markdown Formatting Defaults
# =============================================================================

DEFAULT_HEADING_STYLE: HeadingStyle = "atx"
DEFAULT_HORIZONTAL_RULE = "* * *"
DEFAULT_BULLET_LIST_MARKER: BulletListMarker = "-"
DEFAULT_CODE_BLOCK_STYLE: CodeBlockStyle = "indented"
DEFAULT_FENCE = "```"
DEFAULT_EM_DELIMITER: EmDelimiter = "_"
DEFAULT_STRONG_DELIMITER: StrongDelimiter = "**"
DEFAULT_LINK_STYLE: LinkStyle = "inlined"
DEFAULT_LINK_REFERENCE_STYLE: LinkReferenceStyle = "full"
DEFAULT_ESCAPE_MODE: EscapeMode = "basic"

# Minimum number of fence characters for a fenced code block
MIN_CODE_FENCE_LENGTH = 3

DEFAULT_PARSER = "html.parser"
DEFAULT_STRIKETHROUGH_CHARACTER = "~"

# =============================================================================
# HTML Element Classification
# =============================================================================

# https://developer.mozilla.org/en-US/docs/Web/HTML/Inline_elements
INLINE_ELEMENTS: frozenset[str] = frozenset(
    {
        "b", "big", "i", "small", "tt",
        "abbr", "acronym", "cite", "code", "dfn", "em", "kbd", "strong", "samp", "var",
        "a", "bdo", "br", "img", "map", "object", "q", "script", "span", "sub", "sup",
        "button", "input", "label", "select", "textarea",
        "del", "ins", "mark", "s", "strike", "u", "time",
        "iframe",
    }
)  # fmt: skip

# Elements after which collected code text gets a line break
CODE_BLOCK_LINE_ELEMENTS: frozenset[str] = frozenset(
    {
        "p", "div", "li", "tr", "table", "thead", "tbody", "tfoot",
        "section", "article", "blockquote", "pre",
        "h1", "h2", "h3", "h4", "h5", "h6",
    }
)  # fmt: skip

# Class substrings that mark line-number columns of syntax highlighters
CODE_GUTTER_CLASS_MARKERS: tuple[str, ...] = ("gutter", "line-numbers")

# Class prefixes that carry a code block language
CODE_LANGUAGE_CLASS_PREFIXES: tuple[str, ...] = ("language-", "lang-")

HEADING_ELEMENTS: tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6")

# Tags removed (with their whole subtree) by the default rule set
DEFAULT_REMOVED_ELEMENTS: tuple[str, ...] = ("script", "style", "textarea")

TABLE_ALIGNMENT_MAPPING: dict[str, str] = {
    "left": ":--",
    "right": "--:",
    "center": ":-:",
}
DEFAULT_TABLE_DIVIDER = "---"
TABLE_CELL_LINE_BREAK = "<br>"
TABLE_COMPAT_CELL_SEPARATOR = " · "

# =============================================================================
# Rule Engine Internals
# =============================================================================

# Attribute carrying the 1-based document position of each <a href>
LINK_INDEX_ATTRIBUTE = "data-index"

TEXT_NODE_NAME = "#text"
COMMENT_NODE_NAME = "#comment"
DOCTYPE_NODE_NAME = "#doctype"
DECLARATION_NODE_NAME = "#declaration"
