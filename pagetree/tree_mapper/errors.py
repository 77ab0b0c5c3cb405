"""Typed exception hierarchy for page tree errors.

This module defines all custom exceptions used by the tree mapper library.
All exceptions inherit from PageTreeError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class PageTreeError(Exception):
    """Base exception for all pagetree errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class InvalidPathError(PageTreeError):
    """Raised when an entry path is absolute, escapes the tree or has no leaf."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid entry path '{path}': {reason}")
        self.path = path
        self.reason = reason


class MissingRequiredFieldError(PageTreeError):
    """Raised when a new entry is created without a required field."""

    def __init__(self, field_name: str, entry_path: Optional[str] = None):
        if entry_path:
            message = f"Field '{field_name}' is required to create entry '{entry_path}'"
        else:
            message = f"Field '{field_name}' is required to create an entry"
        super().__init__(message)
        self.field_name = field_name
        self.entry_path = entry_path


class FilesystemError(PageTreeError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class MetadataParseError(PageTreeError):
    """Raised when a stored metadata record cannot be decoded."""

    def __init__(self, file_path: str, message: str):
        super().__init__(
            f"Metadata error in {file_path}: {message}"
        )
        self.file_path = file_path
        self.message = message


class NameConversionError(PageTreeError):
    """Raised when a path segment cannot be represented as a plain name."""

    def __init__(self, segment: str, reason: str):
        super().__init__(f"Cannot convert path segment {segment!r} to a name: {reason}")
        self.segment = segment
        self.reason = reason


class ConfigError(PageTreeError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
