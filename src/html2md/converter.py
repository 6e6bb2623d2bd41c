#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/converter.py
"""HTML to Markdown conversion engine.

The :class:`Converter` walks a BeautifulSoup tree depth-first. Every node is
rendered bottom-up: its children are rendered first, then the best matching
rule for the node's tag receives the children's Markdown and decides what the
node becomes. Text that has to float to the top or bottom of the document
(for example reference link definitions) travels upward as the header and
footer of an :class:`~html2md.rules.AdvancedResult`.

A converter is configured once (options, rules, hooks, plugins) and can then
be shared by any number of threads; each conversion only reads it.

Examples
--------
Basic conversion:

    >>> from html2md import Converter
    >>> converter = Converter()
    >>> converter.convert_string("<h1>Title</h1><p>Some <b>bold</b> text</p>")
    '# Title\\n\\nSome **bold** text'

With GitHub flavoured Markdown plugins:

    >>> from html2md.plugins import github_flavored
    >>> converter = Converter().use(github_flavored())
    >>> markdown = converter.convert_string("<p><del>old</del></p>")

Custom rule that overrides the default for ``<span class="kbd">``:

    >>> from html2md import Rule
    >>> def kbd(content, node, options):
    ...     return f"<kbd>{content}</kbd>" if "kbd" in node.get("class", []) else None
    >>> converter = Converter().add_rules(Rule(filter=["span"], replacement=kbd))

"""

from __future__ import annotations

import logging
import re
from typing import IO, Any, Callable, Iterable, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from html2md.commonmark import COMMONMARK_RULES
from html2md.constants import DEFAULT_PARSER, DEFAULT_REMOVED_ELEMENTS, LINK_INDEX_ATTRIBUTE
from html2md.exceptions import ConversionError, InputError, ParsingError
from html2md.options import Options
from html2md.rules import AdvancedResult, Rule, RuleRegistry
from html2md.utils.dom import node_name
from html2md.utils.locks import ReadWriteLock
from html2md.utils.text import collapse_blank_lines, trim_trailing_spaces

logger = logging.getLogger(__name__)

BeforeHook = Callable[[Any], None]
AfterHook = Callable[[str], str]
Plugin = Callable[["Converter"], Iterable[Rule]]

_LEADING_BLANK_LINES_RE = re.compile(r"^(?:[ \t]*\n)+")


def assemble_document(result: AdvancedResult) -> str:
    """Join header, body and footer into the final Markdown text.

    Each part is trimmed and the non-empty parts are separated by a blank
    line. Runs of blank lines collapse to one, trailing whitespace is removed
    from every line, and leading/trailing blank lines are dropped. The first
    line keeps its indentation so an indented code block at the very start
    survives.
    """
    parts = [
        result.header.strip(),
        _LEADING_BLANK_LINES_RE.sub("", result.markdown).rstrip(),
        result.footer.strip(),
    ]
    markdown = "\n\n".join(part for part in parts if part)
    markdown = collapse_blank_lines(markdown)
    markdown = trim_trailing_spaces(markdown)
    return _LEADING_BLANK_LINES_RE.sub("", markdown).rstrip()


def index_links(root: Any) -> None:
    """Number every ``<a href>`` below ``root`` in document order.

    The 1-based number is stored in the ``data-index`` attribute and used as
    the reference id of ``full`` style reference links.
    """
    if not isinstance(root, Tag):
        return
    for index, anchor in enumerate(root.find_all("a", href=True), start=1):
        anchor[LINK_INDEX_ATTRIBUTE] = str(index)


class _RenderFrame:
    """Walker state for one node: its pending children and rendered output."""

    __slots__ = ("node", "children", "result", "parts")

    def __init__(self, node: Any):
        self.node = node
        self.children = iter(list(node.contents)) if isinstance(node, Tag) else iter(())
        self.result = AdvancedResult()
        self.parts: list[str] = []

    def next_child(self, registry: RuleRegistry) -> Any:
        """Return the next child that is not removed, or None when done."""
        for child in self.children:
            if not registry.is_removed(node_name(child)):
                return child
        return None


class Converter:
    """Rule-based HTML to Markdown converter.

    Parameters
    ----------
    domain : str, default ""
        Domain used to turn relative link and image URLs into absolute ones.
        Overrides ``options.domain`` when not empty.
    enable_commonmark : bool, default True
        Register the default rules for common tags and remove ``script``,
        ``style`` and ``textarea`` elements.
    options : Options or None, default None
        Output options; defaults to ``Options()``.
    parser : str, default "html.parser"
        BeautifulSoup tree builder used by the string/bytes entry points.

    Notes
    -----
    Configuration methods return the converter so calls can be chained.
    Rules registered later take precedence over earlier ones for the same
    tag, which is how plugins override the default rule set.

    """

    def __init__(
        self,
        domain: str = "",
        enable_commonmark: bool = True,
        options: Optional[Options] = None,
        parser: str = DEFAULT_PARSER,
    ):
        options = options or Options()
        if domain:
            options = options.create_updated(domain=domain)

        self.options = options
        self.parser = parser
        self._registry = RuleRegistry()
        self._hooks_lock = ReadWriteLock()
        self._before: list[BeforeHook] = []
        self._after: list[AfterHook] = []

        if enable_commonmark:
            self._registry.add_rules(*COMMONMARK_RULES)
            self._registry.remove(*DEFAULT_REMOVED_ELEMENTS)

    @property
    def domain(self) -> str:
        """Domain used to absolutize relative URLs."""
        return self.options.domain

    @property
    def registry(self) -> RuleRegistry:
        """The rule registry of this converter."""
        return self._registry

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def add_rules(self, *rules: Rule) -> Converter:
        """Register rules; each becomes the first choice for its tags."""
        self._registry.add_rules(*rules)
        return self

    def remove(self, *tags: str) -> Converter:
        """Drop elements with these tag names, including everything inside them."""
        self._registry.remove(*tags)
        return self

    def keep(self, *tags: str) -> Converter:
        """Emit elements with these tag names as HTML when no rule handles them."""
        self._registry.keep(*tags)
        return self

    def before(self, *hooks: BeforeHook) -> Converter:
        """Add hooks that receive the root node before rendering starts.

        Hooks run in registration order and may change the tree.
        """
        with self._hooks_lock.write():
            self._before.extend(hooks)
        return self

    def after(self, *hooks: AfterHook) -> Converter:
        """Add hooks that post-process the final Markdown text, in registration order."""
        with self._hooks_lock.write():
            self._after.extend(hooks)
        return self

    def clear_before(self) -> Converter:
        """Remove all before hooks, including those added by plugins."""
        with self._hooks_lock.write():
            self._before.clear()
        return self

    def clear_after(self) -> Converter:
        """Remove all after hooks."""
        with self._hooks_lock.write():
            self._after.clear()
        return self

    def use(self, *plugins: Plugin) -> Converter:
        """Install plugins.

        A plugin is a callable receiving this converter. It may add hooks or
        remove tags as a side effect and returns the rules to register.
        """
        for plugin in plugins:
            rules = plugin(self)
            self.add_rules(*rules)
            logger.debug(f"Installed plugin {getattr(plugin, '__qualname__', plugin)!r}")
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_children(self, node: Any, options: Options) -> AdvancedResult:
        """Render the children of ``node`` and concatenate their Markdown.

        The tree is walked with an explicit stack, so nesting depth is not
        limited by the interpreter's recursion limit. A frame is finished once
        all of its children are rendered; the best rule for its node is then
        applied and the output is appended to the parent frame.
        """
        stack = [_RenderFrame(node)]
        while True:
            frame = stack[-1]
            child = frame.next_child(self._registry)
            if child is not None:
                stack.append(_RenderFrame(child))
                continue

            stack.pop()
            frame.result.markdown = "".join(frame.parts)
            if not stack:
                return frame.result

            parent = stack[-1]
            rendered = frame.result
            parent.result.accumulate(rendered)

            rule_result, use_original = self._registry.apply(
                node_name(frame.node), rendered.markdown, frame.node, options
            )
            parent.result.accumulate(rule_result)
            parent.parts.append(rendered.markdown if use_original else rule_result.markdown)

    def _render_root(self, node: Any, options: Options) -> AdvancedResult:
        """Render ``node`` itself, applying the rules for its own tag as well."""
        if node is None:
            return AdvancedResult()

        content = self._render_children(node, options)
        result = AdvancedResult(header=content.header, footer=content.footer)

        rule_result, use_original = self._registry.apply(node_name(node), content.markdown, node, options)
        result.accumulate(rule_result)
        result.markdown = content.markdown if use_original else rule_result.markdown
        return result

    def render(self, node: Any) -> AdvancedResult:
        """Render ``node`` without running hooks or final assembly.

        Useful inside rules and hooks that need the Markdown of a subtree.
        """
        return self._render_root(node, self.options)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def convert_selection(self, node: Any) -> str:
        """Convert a parsed node (a ``BeautifulSoup`` document or any ``Tag``).

        Before hooks run on ``node`` and may change the tree in place.

        Parameters
        ----------
        node : bs4.Tag
            Root of the tree to convert

        Returns
        -------
        str
            The Markdown document

        Raises
        ------
        ConversionError
            If a custom rule or hook recurses past the interpreter limit

        """
        with self._hooks_lock.read():
            before = tuple(self._before)
            after = tuple(self._after)
        options = self.options

        if len(self._registry) == 0:
            logger.warning("Converter has no rules registered; text content will not be emitted")

        try:
            for hook in before:
                hook(node)
            index_links(node)

            markdown = assemble_document(self._render_root(node, options))
        except RecursionError as e:
            raise ConversionError(f"Recursion limit exceeded while rendering: {e}", original_error=e) from e

        for after_hook in after:
            markdown = after_hook(markdown)
        return markdown

    def parse(self, markup: Union[str, bytes], encoding: Optional[str] = None) -> BeautifulSoup:
        """Parse HTML with the configured tree builder.

        Raises
        ------
        ParsingError
            If BeautifulSoup cannot build a tree from ``markup``

        """
        try:
            if isinstance(markup, bytes):
                return BeautifulSoup(markup, self.parser, from_encoding=encoding)
            return BeautifulSoup(markup, self.parser)
        except Exception as e:
            raise ParsingError(f"Failed to parse HTML: {e}", parser=self.parser, original_error=e) from e

    def convert_string(self, html: str) -> str:
        """Convert an HTML string to Markdown.

        Raises
        ------
        ParsingError
            If the HTML cannot be parsed; no partial output is produced

        """
        return self.convert_selection(self.parse(html))

    def convert_bytes(self, data: bytes, encoding: Optional[str] = None) -> str:
        """Convert HTML bytes, letting BeautifulSoup detect the encoding unless given."""
        return self.convert_selection(self.parse(data, encoding=encoding))

    def convert_reader(self, reader: IO[Any]) -> str:
        """Convert HTML read from a text or binary file-like object.

        Raises
        ------
        InputError
            If reading from ``reader`` fails
        ParsingError
            If the HTML cannot be parsed

        """
        try:
            data = reader.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Failed to read HTML input: {e}", original_error=e) from e

        if isinstance(data, bytes):
            return self.convert_bytes(data)
        return self.convert_string(data)


def convert(
    html: str,
    options: Optional[Options] = None,
    plugins: Iterable[Plugin] = (),
    domain: str = "",
) -> str:
    """Convert an HTML string to Markdown with a one-off converter.

    Parameters
    ----------
    html : str
        HTML document or fragment
    options : Options or None, default None
        Output options
    plugins : iterable of plugins, default ()
        Plugins installed on top of the default rule set
    domain : str, default ""
        Domain used to absolutize relative URLs

    Returns
    -------
    str
        The Markdown document

    Raises
    ------
    ParsingError
        If the HTML cannot be parsed

    Examples
    --------
        >>> convert("<p>Hello <em>world</em></p>")
        'Hello _world_'

    """
    converter = Converter(domain=domain, options=options)
    converter.use(*plugins)
    return converter.convert_string(html)
