#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML-to-Markdown conversion.

The :class:`Options` dataclass is frozen: a single instance is shared by every
rule during a conversion and by every conversion running on a converter.
Use :meth:`Options.create_updated` to derive a modified copy.
"""
# src/html2md/options.py

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from html2md.constants import (
    BULLET_LIST_MARKERS,
    CODE_BLOCK_STYLES,
    DEFAULT_BULLET_LIST_MARKER,
    DEFAULT_CODE_BLOCK_STYLE,
    DEFAULT_EM_DELIMITER,
    DEFAULT_ESCAPE_MODE,
    DEFAULT_FENCE,
    DEFAULT_HEADING_STYLE,
    DEFAULT_HORIZONTAL_RULE,
    DEFAULT_LINK_REFERENCE_STYLE,
    DEFAULT_LINK_STYLE,
    DEFAULT_STRONG_DELIMITER,
    EM_DELIMITERS,
    ESCAPE_MODES,
    HEADING_STYLES,
    LINK_REFERENCE_STYLES,
    LINK_STYLES,
    STRONG_DELIMITERS,
    BulletListMarker,
    CodeBlockStyle,
    EmDelimiter,
    EscapeMode,
    HeadingStyle,
    LinkReferenceStyle,
    LinkStyle,
    StrongDelimiter,
)
from html2md.exceptions import ValidationError
from html2md.utils.urls import default_get_absolute_url

AbsoluteUrlFunc = Callable[[Any, str, str], str]
CodeLanguageFunc = Callable[[Any, str], str]

OPTION_CHOICES: dict[str, tuple[str, ...]] = {
    "heading_style": HEADING_STYLES,
    "bullet_list_marker": BULLET_LIST_MARKERS,
    "code_block_style": CODE_BLOCK_STYLES,
    "em_delimiter": EM_DELIMITERS,
    "strong_delimiter": STRONG_DELIMITERS,
    "link_style": LINK_STYLES,
    "link_reference_style": LINK_REFERENCE_STYLES,
    "escape_mode": ESCAPE_MODES,
}


@dataclass(frozen=True)
class Options:
    """Markdown output options read by every rule.

    Parameters
    ----------
    heading_style : {"atx", "setext"}, default "atx"
        ``# Heading`` or underlined headings (setext only covers levels 1-2).
    horizontal_rule : str, default "* * *"
        Thematic break emitted for ``<hr>``.
    bullet_list_marker : {"-", "+", "*"}, default "-"
        Marker for unordered list items.
    code_block_style : {"indented", "fenced"}, default "indented"
        Style of ``<pre>`` blocks in the default rule set.
    fence : str, default "```"
        Fence for fenced code blocks; its first character is repeated as
        often as needed to avoid colliding with the code.
    em_delimiter : {"_", "*"}, default "_"
        Delimiter for emphasis.
    strong_delimiter : {"**", "__"}, default "**"
        Delimiter for strong emphasis.
    link_style : {"inlined", "referenced"}, default "inlined"
        Inline links or reference links with definitions in the footer.
    link_reference_style : {"full", "collapsed", "shortcut"}, default "full"
        Reference link flavour used when ``link_style="referenced"``.
    escape_mode : {"basic", "disabled"}, default "basic"
        Whether Markdown characters in text are backslash-escaped.
    domain : str, default ""
        Host used to absolutize relative URLs. Set by the converter.
    get_absolute_url : callable
        ``(node, raw_url, domain) -> str`` used by link and image rules.
    get_code_block_language : callable, optional
        Reserved for language detection of code blocks; not called yet.

    """

    heading_style: HeadingStyle = field(
        default=DEFAULT_HEADING_STYLE,
        metadata={"help": "Heading style: 'atx' (# Heading) or 'setext' (underlined)"},
    )
    horizontal_rule: str = field(
        default=DEFAULT_HORIZONTAL_RULE,
        metadata={"help": "Thematic break used for <hr>"},
    )
    bullet_list_marker: BulletListMarker = field(
        default=DEFAULT_BULLET_LIST_MARKER,
        metadata={"help": "Unordered list marker"},
    )
    code_block_style: CodeBlockStyle = field(
        default=DEFAULT_CODE_BLOCK_STYLE,
        metadata={"help": "Code block style: 'indented' or 'fenced'"},
    )
    fence: str = field(
        default=DEFAULT_FENCE,
        metadata={"help": "Fence for fenced code blocks (``` or ~~~)"},
    )
    em_delimiter: EmDelimiter = field(
        default=DEFAULT_EM_DELIMITER,
        metadata={"help": "Emphasis delimiter"},
    )
    strong_delimiter: StrongDelimiter = field(
        default=DEFAULT_STRONG_DELIMITER,
        metadata={"help": "Strong emphasis delimiter"},
    )
    link_style: LinkStyle = field(
        default=DEFAULT_LINK_STYLE,
        metadata={"help": "Link style: 'inlined' or 'referenced'"},
    )
    link_reference_style: LinkReferenceStyle = field(
        default=DEFAULT_LINK_REFERENCE_STYLE,
        metadata={"help": "Reference link style: 'full', 'collapsed' or 'shortcut'"},
    )
    escape_mode: EscapeMode = field(
        default=DEFAULT_ESCAPE_MODE,
        metadata={"help": "Escaping of Markdown characters in text: 'basic' or 'disabled'"},
    )
    domain: str = field(
        default="",
        metadata={"help": "Domain used to absolutize relative URLs"},
    )
    get_absolute_url: AbsoluteUrlFunc = field(
        default=default_get_absolute_url,
        compare=False,
        metadata={"help": "Callable (node, raw_url, domain) -> absolute URL"},
    )
    get_code_block_language: Optional[CodeLanguageFunc] = field(
        default=None,
        compare=False,
        metadata={"help": "Reserved: callable (node, code) -> language tag"},
    )

    def __post_init__(self) -> None:
        """Validate enumerated option values.

        Raises
        ------
        ValidationError
            If a field holds a value outside its allowed set, or the fence
            is empty.

        """
        for name, choices in OPTION_CHOICES.items():
            value = getattr(self, name)
            if value not in choices:
                raise ValidationError(
                    f"Invalid value for {name}: {value!r}. Expected one of {', '.join(choices)}",
                    parameter_name=name,
                    parameter_value=value,
                )

        if not self.fence:
            raise ValidationError("fence must not be empty", parameter_name="fence", parameter_value=self.fence)

        if not callable(self.get_absolute_url):
            raise ValidationError(
                "get_absolute_url must be callable",
                parameter_name="get_absolute_url",
                parameter_value=self.get_absolute_url,
            )

    @property
    def fence_char(self) -> str:
        """Character repeated to build code fences."""
        return self.fence[0]

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_help(cls) -> dict[str, str]:
        """Return the help text of every option, keyed by field name."""
        return {f.name: f.metadata.get("help", "") for f in fields(cls)}
