#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/utils/escape.py
"""Markdown escaping for text nodes.

Text copied out of HTML may contain characters that a Markdown parser would
read as syntax. The ``basic`` escape mode backslash-escapes them: emphasis
and code characters everywhere, and block markers (headings, list bullets,
blockquotes, thematic breaks) only where they start a line.

"""

from __future__ import annotations

import re

_BACKSLASH_RE = re.compile(r"\\(\S)")
_HEADING_RE = re.compile(r"^(#{1,6} )", re.MULTILINE)
_ORDERED_LIST_RE = re.compile(r"^(\W* {0,3})(\d+)\. ", re.MULTILINE)
_UNORDERED_LIST_RE = re.compile(r"^([^\\\w]*)([+-]) ", re.MULTILINE)
_HORIZONTAL_RULE_RE = re.compile(r"^(- *){3,}$", re.MULTILINE)
_BLOCKQUOTE_RE = re.compile(r"^(\W* {0,3})> ", re.MULTILINE)
_LINK_BRACKETS_RE = re.compile(r"([\[\]])")

_INLINE_SPECIAL_CHARS = {
    "*": r"\*",
    "_": r"\_",
    "`": r"\`",
    "|": r"\|",
}


# "*" and "_" rules are covered by the inline pass
def _escape_rule(match: re.Match[str]) -> str:
    return match.group(0).replace("-", "\\-", 3)


def escape_markdown_characters(text: str) -> str:
    r"""Backslash-escape Markdown syntax in plain text.

    Parameters
    ----------
    text : str
        Text content of an HTML text node

    Returns
    -------
    str
        Text that renders literally when parsed as Markdown

    Examples
    --------
        >>> escape_markdown_characters("2 * 3 = 6")
        '2 \\* 3 = 6'
        >>> escape_markdown_characters("# not a heading")
        '\\# not a heading'
        >>> escape_markdown_characters("1. not a list")
        '1\\. not a list'

    """
    if not text:
        return text

    # Escape existing backslash escapes first so they stay literal
    text = _BACKSLASH_RE.sub(r"\\\\\1", text)

    text = _HEADING_RE.sub(r"\\\1", text)
    text = _HORIZONTAL_RULE_RE.sub(_escape_rule, text)
    text = _ORDERED_LIST_RE.sub(r"\1\2\\. ", text)
    text = _UNORDERED_LIST_RE.sub(r"\1\\\2 ", text)
    text = _BLOCKQUOTE_RE.sub(r"\1\\> ", text)

    text = "".join(_INLINE_SPECIAL_CHARS.get(char, char) for char in text)

    return _LINK_BRACKETS_RE.sub(r"\\\1", text)
