"""Test utilities for the html2md test suite.

This module provides helpers for building HTML fixtures, validating
Markdown output, and managing temporary files.
"""

import re
import shutil
import tempfile
from pathlib import Path

from bs4 import BeautifulSoup

_TRIPLE_NEWLINE_RE = re.compile(r"\n{3,}")


def parse_html(html: str) -> BeautifulSoup:
    """Parse ``html`` with the parser the converter uses by default."""
    return BeautifulSoup(html, "html.parser")


def assert_markdown_valid(markdown: str) -> None:
    """Assert that the generated Markdown is normalized.

    Converted documents never carry trailing whitespace on a line, runs of
    more than one blank line, or blank lines at either end.
    """
    assert isinstance(markdown, str)

    for i, line in enumerate(markdown.split("\n")):
        assert line == line.rstrip(" \t"), f"Trailing whitespace on line {i + 1}: {line!r}"

    assert not _TRIPLE_NEWLINE_RE.search(markdown), f"More than one blank line in: {markdown!r}"
    assert not markdown.startswith("\n"), f"Leading blank line in: {markdown!r}"
    assert markdown == markdown.rstrip(), f"Trailing blank line in: {markdown!r}"


def write_html_file(directory: Path, name: str, html: str, encoding: str = "utf-8") -> Path:
    """Write an HTML fixture file and return its path."""
    path = directory / name
    path.write_text(html, encoding=encoding)
    return path


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
