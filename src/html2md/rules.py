#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/rules.py
"""Rule definitions and the rule registry.

A :class:`Rule` tells the converter how to turn one kind of HTML element into
Markdown. Rules are registered per tag name; when several rules exist for
the same tag the most recently registered one is tried first, and a rule can
return "skip" to hand the node to the next older rule. If every rule skips,
the node's rendered children are used unchanged.

Examples
--------
A rule that only handles ``<span class="kbd">`` and defers otherwise:

    >>> def kbd_span(content, node, options):
    ...     if "kbd" not in node.get("class", []):
    ...         return None  # skip: let older span rules decide
    ...     return f"<kbd>{content}</kbd>"
    >>> rule = Rule(filter=["span"], replacement=kbd_span)

Rules producing out-of-band text use the advanced form:

    >>> def footnote(content, node, options):
    ...     ref = node["data-ref"]
    ...     return AdvancedResult(markdown=f"[^{ref}]", footer=f"[^{ref}]: {content}"), False
    >>> rule = Rule(filter=["aside"], advanced_replacement=footnote)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Union

from html2md.utils.locks import ReadWriteLock

if TYPE_CHECKING:
    from html2md.options import Options

logger = logging.getLogger(__name__)

ReplacementFunc = Callable[[str, Any, "Options"], Optional[str]]
AdvancedReplacementFunc = Callable[[str, Any, "Options"], tuple["AdvancedResult", bool]]


def append_block(current: str, addition: str) -> str:
    """Append ``addition`` to ``current`` separated by exactly one blank line.

    Nothing is inserted when either side is empty.
    """
    if not addition:
        return current
    if not current:
        return addition
    return current.rstrip("\n") + "\n\n" + addition.lstrip("\n")


@dataclass
class AdvancedResult:
    """Rendered output of a subtree.

    Parameters
    ----------
    header : str, default ""
        Text that floats to the very start of the final document
    markdown : str, default ""
        In-place Markdown for the subtree
    footer : str, default ""
        Text that floats to the very end of the final document, such as the
        definitions of reference-style links

    """

    header: str = ""
    markdown: str = ""
    footer: str = ""

    def accumulate(self, other: AdvancedResult) -> None:
        """Merge the header and footer of ``other`` into this result.

        The markdown of ``other`` is not touched; callers decide where
        in-flow text goes.
        """
        self.header = append_block(self.header, other.header)
        self.footer = append_block(self.footer, other.footer)


def wrap_replacement(replacement: ReplacementFunc) -> AdvancedReplacementFunc:
    """Adapt a simple replacement function to the advanced signature."""

    def advanced(content: str, node: Any, options: Options) -> tuple[AdvancedResult, bool]:
        markdown = replacement(content, node, options)
        if markdown is None:
            return AdvancedResult(), True
        return AdvancedResult(markdown=markdown), False

    advanced.__name__ = getattr(replacement, "__name__", "replacement")
    advanced.__wrapped__ = replacement  # type: ignore[attr-defined]
    return advanced


@dataclass(frozen=True)
class Rule:
    """Convert the elements named in ``filter`` to Markdown.

    Parameters
    ----------
    filter : sequence of str
        Tag names this rule applies to (``"#text"`` for text nodes)
    replacement : callable, optional
        ``(content, node, options) -> str | None``. Returning None skips to
        the next older rule for the tag.
    advanced_replacement : callable, optional
        ``(content, node, options) -> (AdvancedResult, skip)``. Takes
        precedence over ``replacement`` when both are given.

    Notes
    -----
    ``content`` is the already rendered Markdown of the node's children.

    """

    filter: tuple[str, ...]
    replacement: Optional[ReplacementFunc] = field(default=None, compare=False)
    advanced_replacement: Optional[AdvancedReplacementFunc] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize the filter to a tuple and check that a function is set."""
        tags: Union[str, Iterable[str]] = self.filter
        if isinstance(tags, str):
            tags = (tags,)
        object.__setattr__(self, "filter", tuple(tags))

        if self.replacement is None and self.advanced_replacement is None:
            raise ValueError(f"Rule for {self.filter!r} needs a replacement or advanced_replacement function")

    def as_advanced(self) -> AdvancedReplacementFunc:
        """Return this rule's function in the advanced form."""
        if self.advanced_replacement is not None:
            return self.advanced_replacement
        assert self.replacement is not None
        return wrap_replacement(self.replacement)


def default_replacement(content: str, node: Any, options: Options) -> Optional[str]:
    """Pass the rendered children through unchanged."""
    return content


def keep_replacement(content: str, node: Any, options: Options) -> Optional[str]:
    """Re-serialize the element as HTML, ignoring the rendered children.

    A serialization failure is logged and the element renders as empty text.
    """
    try:
        return node.decode()
    except Exception as e:
        logger.warning(f"Could not serialize <{getattr(node, 'name', '?')}> to HTML, dropping it: {e}")
        return ""


_DEFAULT_RULES: tuple[AdvancedReplacementFunc, ...] = (wrap_replacement(default_replacement),)
_KEEP_RULES: tuple[AdvancedReplacementFunc, ...] = (wrap_replacement(keep_replacement),)


class RuleRegistry:
    """Thread-safe mapping of tag names to rules.

    The registry is filled while plugins are installed and then read by any
    number of concurrent conversions. Writes take the exclusive side of an
    internal :class:`~html2md.utils.locks.ReadWriteLock`; every lookup takes
    the shared side. The internal maps are never handed out: lookups return
    tuple snapshots.

    Examples
    --------
        >>> registry = RuleRegistry()
        >>> registry.register(["del", "s"], lambda content, node, options: f"~~{content}~~")
        >>> registry.remove("script")
        >>> registry.resolve("script") is None
        True

    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._lock = ReadWriteLock()
        self._rules: dict[str, list[AdvancedReplacementFunc]] = {}
        self._removed: set[str] = set()
        self._kept: set[str] = set()

    def register(self, tags: Union[str, Iterable[str]], replacement: ReplacementFunc) -> None:
        """Register a simple replacement function for ``tags``."""
        self.register_advanced(tags, wrap_replacement(replacement))

    def register_advanced(self, tags: Union[str, Iterable[str]], replacement: AdvancedReplacementFunc) -> None:
        """Register an advanced replacement function for ``tags``.

        The function becomes the highest-precedence rule for each tag.
        """
        tag_list = [tags] if isinstance(tags, str) else list(tags)
        if not tag_list:
            logger.warning("Ignoring rule without any tag names in its filter")
            return

        with self._lock.write():
            for tag in tag_list:
                self._rules.setdefault(tag, []).append(replacement)

        logger.debug(f"Registered rule {getattr(replacement, '__name__', replacement)!r} for {tag_list}")

    def add_rules(self, *rules: Rule) -> None:
        """Register every rule for every tag in its filter."""
        for rule in rules:
            self.register_advanced(rule.filter, rule.as_advanced())

    def remove(self, *tags: str) -> None:
        """Drop ``tags`` and their whole subtree from the output."""
        with self._lock.write():
            self._removed.update(tags)
        logger.debug(f"Removing elements: {sorted(tags)}")

    def keep(self, *tags: str) -> None:
        """Emit ``tags`` as raw HTML when no rule is registered for them."""
        with self._lock.write():
            self._kept.update(tags)
        logger.debug(f"Keeping elements as HTML: {sorted(tags)}")

    def is_removed(self, tag: str) -> bool:
        """Return True if ``tag`` is marked for removal."""
        with self._lock.read():
            return tag in self._removed

    def resolve(self, tag: str) -> Optional[tuple[AdvancedReplacementFunc, ...]]:
        """Return the rules for ``tag`` in registration order.

        Returns
        -------
        tuple of callables or None
            None when the tag is removed. A tag without rules resolves to the
            keep rule if it was passed to :meth:`keep`, else to the
            pass-through rule.

        """
        with self._lock.read():
            if tag in self._removed:
                return None
            rules = self._rules.get(tag)
            if rules:
                return tuple(rules)
            if tag in self._kept:
                return _KEEP_RULES
            return _DEFAULT_RULES

    def apply(self, tag: str, content: str, node: Any, options: Options) -> tuple[AdvancedResult, bool]:
        """Run the rules for ``tag`` from newest to oldest.

        Parameters
        ----------
        tag : str
            Node name used for the lookup
        content : str
            Rendered Markdown of the node's children
        node : bs4.PageElement
            The node being rendered
        options : Options
            Conversion options

        Returns
        -------
        tuple[AdvancedResult, bool]
            The first non-skipping rule's result and False, or a result
            holding ``content`` and True when every rule skipped. A removed
            tag yields an empty result and False.

        """
        rules = self.resolve(tag)
        if rules is None:
            return AdvancedResult(), False

        for rule in reversed(rules):
            result, skip = rule(content, node, options)
            if not skip:
                return result, False

        return AdvancedResult(markdown=content), True

    def tags(self) -> list[str]:
        """Return the tag names that have at least one rule, sorted."""
        with self._lock.read():
            return sorted(self._rules)

    def __contains__(self, tag: object) -> bool:
        """Return True if ``tag`` has at least one registered rule."""
        with self._lock.read():
            return tag in self._rules

    def __len__(self) -> int:
        """Return the number of tags with registered rules."""
        with self._lock.read():
            return len(self._rules)
