#!/usr/bin/env python3
"""
Exception types raised by the Javadoc writer.
"""


class JavadocError(Exception):
    """Base class for all Javadoc writer errors."""


class FileNotValidError(JavadocError):
    """The containing file is missing, stale or read-only."""


class IncorrectOperationError(JavadocError):
    """The tree was modified in a way it does not allow."""


class JavaParseError(JavadocError):
    """Java source could not be parsed."""
