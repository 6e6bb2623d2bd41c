"""html2md - rule-based HTML to Markdown conversion.

html2md walks a BeautifulSoup tree and lets per-tag rules decide how each
element becomes Markdown. The default rule set covers CommonMark; plugins
add GitHub flavoured tables, strikethrough and task lists, and a robust
extractor for syntax-highlighted code blocks. Rules, hooks and plugins are
registered on a :class:`Converter`, which can then be shared across threads.

Examples
--------
One-off conversion:

    >>> from html2md import convert
    >>> convert("<h2>Usage</h2><p>Run <code>make</code></p>")
    '## Usage\\n\\nRun `make`'

A reusable converter with plugins:

    >>> from html2md import Converter
    >>> from html2md.plugins import github_flavored, robust_code_block
    >>> converter = Converter(domain="example.com").use(github_flavored(), robust_code_block())
    >>> markdown = converter.convert_string(html)

"""

from html2md.converter import Converter, assemble_document, convert
from html2md.exceptions import ConversionError, Html2MdError, InputError, ParsingError, ValidationError
from html2md.options import Options
from html2md.rules import AdvancedResult, Rule, RuleRegistry

__version__ = "0.1.0"

__all__ = [
    "AdvancedResult",
    "ConversionError",
    "Converter",
    "Html2MdError",
    "InputError",
    "Options",
    "ParsingError",
    "Rule",
    "RuleRegistry",
    "ValidationError",
    "assemble_document",
    "convert",
    "__version__",
]
