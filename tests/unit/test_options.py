"""Unit tests for conversion options and the exception hierarchy."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import dataclasses

import pytest

from html2md import ConversionError, Html2MdError, InputError, Options, ParsingError, ValidationError
from html2md.options import OPTION_CHOICES
from html2md.utils.urls import default_get_absolute_url


@pytest.mark.unit
class TestOptions:
    """Test option defaults and validation."""

    def test_defaults(self):
        """Test the documented default values."""
        options = Options()

        assert options.heading_style == "atx"
        assert options.horizontal_rule == "* * *"
        assert options.bullet_list_marker == "-"
        assert options.code_block_style == "indented"
        assert options.fence == "```"
        assert options.em_delimiter == "_"
        assert options.strong_delimiter == "**"
        assert options.link_style == "inlined"
        assert options.link_reference_style == "full"
        assert options.escape_mode == "basic"
        assert options.domain == ""
        assert options.get_absolute_url is default_get_absolute_url
        assert options.get_code_block_language is None

    @pytest.mark.parametrize("name", sorted(OPTION_CHOICES))
    def test_invalid_choice(self, name):
        """Test that every enumerated option rejects unknown values."""
        with pytest.raises(ValidationError) as exc_info:
            Options(**{name: "bogus"})

        assert exc_info.value.parameter_name == name
        assert exc_info.value.parameter_value == "bogus"
        assert "bogus" in str(exc_info.value)

    def test_empty_fence(self):
        """Test that an empty fence is rejected."""
        with pytest.raises(ValidationError, match="fence"):
            Options(fence="")

    def test_non_callable_url_function(self):
        """Test that get_absolute_url must be callable."""
        with pytest.raises(ValidationError, match="callable"):
            Options(get_absolute_url="not a function")

    def test_frozen(self):
        """Test that options cannot be changed in place."""
        options = Options()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.heading_style = "setext"

    def test_create_updated(self):
        """Test deriving a modified copy."""
        options = Options()
        updated = options.create_updated(heading_style="setext", domain="example.com")

        assert updated.heading_style == "setext"
        assert updated.domain == "example.com"
        assert options.heading_style == "atx"
        assert options.domain == ""

    def test_create_updated_validates(self):
        """Test that derived copies are validated too."""
        with pytest.raises(ValidationError):
            Options().create_updated(link_style="footnotes")

    def test_fence_char(self):
        """Test the fence character property."""
        assert Options().fence_char == "`"
        assert Options(fence="~~~").fence_char == "~"

    def test_field_help(self):
        """Test that every option has help text."""
        help_texts = Options.field_help()

        assert set(help_texts) == {f.name for f in dataclasses.fields(Options)}
        assert all(help_texts.values())


@pytest.mark.unit
class TestExceptions:
    """Test the exception hierarchy."""

    def test_hierarchy(self):
        """Test that every error derives from Html2MdError."""
        for error_class in (ValidationError, InputError, ParsingError, ConversionError):
            assert issubclass(error_class, Html2MdError)

    def test_original_error_kept(self):
        """Test wrapping of the underlying exception."""
        cause = ValueError("bad markup")
        error = ParsingError("Failed to parse HTML", parser="html.parser", original_error=cause)

        assert error.original_error is cause
        assert error.parser == "html.parser"
        assert error.message == "Failed to parse HTML"
