#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the html2md library.

This module defines the exception classes raised by the converter. Only
option validation, input reading and HTML parsing can fail a conversion;
malformed document structure is always rendered on a best-effort basis.

Exception Hierarchy
-------------------
- Html2MdError (base exception)

  - ValidationError (parameter/option validation)

  - InputError (unreadable or unsupported input)

  - ParsingError (the HTML parser rejected the document)

  - ConversionError (a custom rule or hook failed while rendering)

"""

from typing import Any


class Html2MdError(Exception):
    """Base exception class for all html2md-specific errors.

    Catching this will catch all library-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Html2MdError):
    """Exception raised for invalid option values.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InputError(Html2MdError):
    """Exception raised when the HTML input cannot be read or decoded.

    Parameters
    ----------
    message : str
        Description of the input problem
    original_error : Exception, optional
        The original exception that caused this error

    """


class ParsingError(Html2MdError):
    """Exception raised when the HTML parser rejects the document.

    No partial output is produced when this is raised.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parser : str, optional
        Name of the BeautifulSoup tree builder that failed
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parser : str or None
        The tree builder in use

    """

    def __init__(self, message: str, parser: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error=original_error)
        self.parser = parser


class ConversionError(Html2MdError):
    """Exception raised when rendering a parsed document fails.

    The default rules never raise on malformed structure; this wraps
    failures such as unbounded recursion in custom rules or hooks.

    Parameters
    ----------
    message : str
        Description of the failure
    original_error : Exception, optional
        The original exception that caused this error

    """
