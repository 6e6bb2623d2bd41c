"""Tests for list conversion, including nesting and numbering regressions."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import pytest
from utils import assert_markdown_valid, parse_html

from html2md import Options, convert
from html2md.commonmark import count_list_parents, is_wrapper_list_item, list_item_prefix


def md(html, **options):
    """Convert ``html`` with the default rules and the given options."""
    markdown = convert(html, options=Options(**options))
    assert_markdown_valid(markdown)
    return markdown


@pytest.mark.unit
class TestSimpleLists:
    """Test flat lists."""

    def test_unordered(self):
        """Test bullet lists with the default marker."""
        assert md("<ul><li>a</li><li>b</li></ul>") == "- a\n- b"

    def test_custom_bullet(self):
        """Test the bullet_list_marker option."""
        assert md("<ul><li>a</li><li>b</li></ul>", bullet_list_marker="*") == "* a\n* b"

    def test_ordered(self):
        """Test numbered lists."""
        assert md("<ol><li>a</li><li>b</li></ol>") == "1. a\n2. b"

    def test_ordered_start(self):
        """Test the start attribute."""
        assert md('<ol start="4"><li>a</li><li>b</li></ol>') == "4. a\n5. b"

    def test_ordered_numbers_zero_padded(self):
        """Test that numbers are padded to the width of the last one."""
        html = "<ol>" + "".join(f"<li>item{i}</li>" for i in range(1, 11)) + "</ol>"
        lines = md(html).split("\n")

        assert lines[0] == "01. item1"
        assert lines[8] == "09. item9"
        assert lines[9] == "10. item10"

    def test_list_after_paragraph(self):
        """Test separation from surrounding blocks."""
        assert md("<p>intro</p><ul><li>a</li></ul><p>outro</p>") == "intro\n\n- a\n\noutro"

    def test_whitespace_between_items(self):
        """Test pretty-printed HTML lists."""
        html = """
        <ul>
            <li>a</li>
            <li>b</li>
        </ul>
        """
        assert md(html) == "- a\n- b"


@pytest.mark.unit
class TestListRegressions:
    """Regression cases for list numbering and markers."""

    def test_number_counts_all_element_siblings(self):
        """Test that non-li siblings still advance the number."""
        assert md("<ol><li>one</li><div></div><li>two</li></ol>") == "1. one\n3. two"

    def test_wrapper_item_has_no_empty_marker(self):
        """Test that an item wrapping only a list emits no bullet of its own."""
        markdown = md("<ul><li><ul><li>b</li></ul></li></ul>")

        assert markdown == "- b"
        assert "-\n" not in markdown

    def test_item_outside_list(self):
        """Test that a stray li renders its text."""
        assert md("<div><li>orphan</li></div>") == "orphan"

    def test_empty_item_skipped(self):
        """Test that empty items produce no marker."""
        assert md("<ul><li></li><li>x</li></ul>") == "- x"


@pytest.mark.unit
class TestNestedLists:
    """Test indentation of nested lists."""

    def test_nested_unordered(self):
        """Test a list nested in an item."""
        html = "<ul><li>a<ul><li>b</li></ul></li><li>c</li></ul>"
        assert md(html) == "- a\n  - b\n- c"

    def test_unordered_in_ordered(self):
        """Test indentation by the width of the ordered marker."""
        html = "<ol><li>a<ul><li>b</li></ul></li></ol>"
        assert md(html) == "1. a\n   - b"

    def test_three_levels(self):
        """Test indentation accumulating over several levels."""
        html = "<ul><li>a<ul><li>b<ul><li>c</li></ul></li></ul></li></ul>"
        assert md(html) == "- a\n  - b\n    - c"

    def test_multiple_paragraphs_in_item(self):
        """Test that continuation lines are indented under the marker."""
        assert md("<ul><li><p>a</p><p>b</p></li></ul>") == "- a\n\n  b"


@pytest.mark.unit
class TestListHelpers:
    """Test the list helper functions directly."""

    def test_list_item_prefix(self):
        """Test markers computed for different parents."""
        soup = parse_html("<ul><li>a</li></ul><ol><li>x</li><li>y</li></ol><li>z</li>")
        options = Options()
        items = soup.find_all("li")

        assert list_item_prefix(options, items[0]) == "- "
        assert list_item_prefix(options, items[2]) == "2. "
        assert list_item_prefix(options, items[3]) == ""

    def test_wrapper_detection(self):
        """Test detection of list-only items."""
        soup = parse_html("<ul><li> <ul><li>x</li></ul></li><li>text<ul><li>y</li></ul></li></ul>")
        outer = soup.ul.find_all("li", recursive=False)

        assert is_wrapper_list_item(outer[0])
        assert not is_wrapper_list_item(outer[1])

    def test_count_list_parents(self):
        """Test marker widths of the surrounding lists."""
        soup = parse_html("<ol><li>a<ul><li>b<ul><li>c</li></ul></li></ul></li></ol>")
        options = Options()
        items = soup.find_all("li")

        assert count_list_parents(options, items[0]) == (3, 0)
        assert count_list_parents(options, items[1]) == (2, 3)
        assert count_list_parents(options, items[2]) == (2, 5)
