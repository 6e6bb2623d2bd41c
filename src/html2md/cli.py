#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2md/cli.py
"""Command-line interface for html2md.

Reads one HTML file (or stdin when the path is ``-``), converts it with the
GitHub flavoured plugins and writes the Markdown to stdout.

    $ html2md page.html
    $ curl -s https://example.com | html2md - --domain example.com
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Optional

from html2md import __version__
from html2md.converter import Converter
from html2md.exceptions import Html2MdError
from html2md.logging_utils import configure_logging
from html2md.options import OPTION_CHOICES, Options
from html2md.plugins import github_flavored, robust_code_block

logger = logging.getLogger(__name__)

# Options that cannot be set from the command line
_NON_CLI_OPTIONS = ("domain", "get_absolute_url", "get_code_block_language")


def _option_flag(name: str) -> str:
    return "--" + name.replace("_", "-")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser, with one flag per conversion option."""
    parser = argparse.ArgumentParser(
        prog="html2md",
        description="Convert an HTML document to Markdown",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input", help="HTML file to convert, or '-' to read stdin")
    parser.add_argument("--version", action="version", version=f"html2md {__version__}")

    parser.add_argument("--domain", default="", help="Domain used to absolutize relative link and image URLs")
    parser.add_argument(
        "--robust-code",
        action="store_true",
        help="Extract code blocks from syntax-highlighted markup (line-number gutters are dropped)",
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level",
    )
    logging_group.add_argument("--log-file", default=None, help="Also write log records to this file")
    logging_group.add_argument("--trace", action="store_true", help="Include timestamps and logger names in logs")

    options_group = parser.add_argument_group("markdown options")
    defaults = Options()
    for name, help_text in Options.field_help().items():
        if name in _NON_CLI_OPTIONS:
            continue
        options_group.add_argument(
            _option_flag(name),
            dest=name,
            default=getattr(defaults, name),
            choices=OPTION_CHOICES.get(name),
            help=help_text,
        )

    return parser


def build_options(parsed_args: argparse.Namespace) -> Options:
    """Create :class:`Options` from parsed command-line arguments."""
    values: dict[str, Any] = {}
    for name in Options.field_help():
        if name in _NON_CLI_OPTIONS:
            continue
        values[name] = getattr(parsed_args, name)
    return Options(**values)


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(args: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        options = build_options(parsed_args)
    except Html2MdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        data = _read_input(parsed_args.input)
    except FileNotFoundError as e:
        print(f"Error opening file: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    converter = Converter(domain=parsed_args.domain, options=options)
    converter.use(github_flavored())
    if parsed_args.robust_code:
        converter.use(robust_code_block())

    try:
        markdown = converter.convert_bytes(data)
    except Html2MdError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error converting: {e}", file=sys.stderr)
        return 1

    print(markdown)
    return 0
