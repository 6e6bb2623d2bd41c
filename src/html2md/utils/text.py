#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/utils/text.py
"""Text utilities shared by the rule engine and its rules.

Provides the code-fence length calculator, whitespace normalization helpers
used by the final assembly step, and the small string transforms the
default rules apply to rendered content.

"""

from __future__ import annotations

import re
from typing import Any

from html2md.constants import MIN_CODE_FENCE_LENGTH
from html2md.utils.dom import next_text, previous_text

MULTIPLE_NEWLINES_RE = re.compile(r"\n{3,}")
NEWLINE_RUN_RE = re.compile(r"(?:\r?\n)+")
LEADING_NEWLINES_RE = re.compile(r"^\n+")
WHITESPACE_RUN_RE = re.compile(r"\s+")

# Punctuation after which inline markup does not need a separating space
_CLOSING_PUNCTUATION = ".,;:!?)]}'\"»"


def longest_run(char: str, content: str) -> int:
    """Return the length of the longest run of ``char`` in ``content``.

    Parameters
    ----------
    char : str
        Single character to look for
    content : str
        Text to scan

    Returns
    -------
    int
        Longest number of consecutive ``char`` characters, 0 if absent

    """
    longest = 0
    current = 0
    for c in content:
        if c == char:
            current += 1
            if current > longest:
                longest = current
        else:
            current = 0
    return longest


def calculate_code_fence(fence_char: str, content: str) -> str:
    """Return a code fence that cannot be closed by anything in ``content``.

    The fence is one character longer than the longest run of
    ``fence_char`` inside the code, and never shorter than three characters.

    Parameters
    ----------
    fence_char : str
        Fence character, usually a backtick or a tilde
    content : str
        Code block content

    Returns
    -------
    str
        Fence string such as ```` ``` ```` or ```` ```` ````

    Examples
    --------
        >>> calculate_code_fence("`", "print('hi')")
        '```'
        >>> calculate_code_fence("`", "```inner```")
        '````'

    """
    repeat = max(longest_run(fence_char, content) + 1, MIN_CODE_FENCE_LENGTH)
    return fence_char * repeat


def trim_trailing_spaces(text: str) -> str:
    """Strip trailing whitespace from every line of ``text``."""
    return "\n".join(line.rstrip() for line in text.split("\n"))


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of three or more newlines into a single blank line."""
    return MULTIPLE_NEWLINES_RE.sub("\n\n", text)


def collapse_whitespace(text: str) -> str:
    """Collapse every run of whitespace (newlines included) into one space."""
    return WHITESPACE_RUN_RE.sub(" ", text)


def delimiter_for_every_line(text: str, delimiter: str) -> str:
    """Wrap every non-empty line of ``text`` in ``delimiter``.

    Emphasis delimiters are not recognized across line breaks, so multi-line
    content gets its own pair on each line.
    """
    lines = text.split("\n")
    for i, line in enumerate(lines):
        line = line.strip()
        if line:
            lines[i] = delimiter + line + delimiter
    return "\n".join(lines)


def escape_multiline(text: str) -> str:
    """Make multi-line link text survive inside ``[...]``.

    Blank lines would end the paragraph and break the link, so runs of
    newlines are reduced to a single escaped line break.
    """
    text = text.strip()
    return NEWLINE_RUN_RE.sub(lambda _match: "\\\n", text)


def _starts_with_space(text: str) -> bool:
    return not text or text[0].isspace()


def _ends_with_space(text: str) -> bool:
    return not text or text[-1].isspace()


def add_space_if_necessary(node: Any, markdown: str) -> str:
    """Pad inline markup with spaces where it touches neighbouring text.

    ``foo<b>bar</b>`` would otherwise render ``foo**bar**``, which most
    Markdown parsers do not treat as strong emphasis.

    Parameters
    ----------
    node : bs4.Tag
        The element that produced ``markdown``
    markdown : str
        The rendered markup for ``node``

    Returns
    -------
    str
        ``markdown`` with a leading and/or trailing space added

    """
    if not markdown:
        return markdown

    before = previous_text(node)
    if before and not _ends_with_space(before) and not _starts_with_space(markdown):
        markdown = " " + markdown

    after = next_text(node)
    if after and not _starts_with_space(after) and not _ends_with_space(markdown) and after[0] not in _CLOSING_PUNCTUATION:
        markdown = markdown + " "

    return markdown
