#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the markupdiff library.

This module defines specialized exception classes for the error conditions
that can occur while parsing markup, computing diffs and persisting session
state. These exceptions provide more specific error information than generic
built-ins.

Exception Hierarchy
-------------------
- MarkupDiffError (base exception)

  - ValidationError (settings/parameter validation)

  - ParsingError (markup parsing failures)

  - DiffComputationError (failures inside the line differ, context
    windowing or tree aligner)

  - StorageError (persistence read/write failures)

"""

from typing import Any


class MarkupDiffError(Exception):
    """Base exception class for all markupdiff-specific errors.

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


class ValidationError(MarkupDiffError):
    """Exception raised for invalid input parameters or settings.

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


class ParsingError(MarkupDiffError):
    """Exception raised when markup parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        Which input was being parsed (e.g. ``"before"`` or ``"after"``)
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    parsing_stage : str or None
        Where the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class DiffComputationError(MarkupDiffError):
    """Exception raised when a diff component fails unexpectedly.

    Parameters
    ----------
    message : str
        Description of the failure
    component : str, optional
        Name of the component that failed (``"line_diff"``, ``"context"``,
        ``"tree_align"``)
    original_error : Exception, optional
        The underlying exception

    Attributes
    ----------
    component : str or None
        Name of the failing component

    """

    def __init__(self, message: str, component: str | None = None, original_error: Exception | None = None):
        """Initialize the diff computation error."""
        super().__init__(message, original_error)
        self.component = component


class StorageError(MarkupDiffError):
    """Exception raised when persisted state cannot be read or written.

    Parameters
    ----------
    message : str
        Description of the storage failure
    key : str, optional
        Store key involved in the failure
    original_error : Exception, optional
        The underlying I/O or decoding error

    """

    def __init__(self, message: str, key: str | None = None, original_error: Exception | None = None):
        """Initialize the storage error."""
        super().__init__(message, original_error)
        self.key = key
