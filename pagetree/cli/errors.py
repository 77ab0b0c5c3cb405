"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI.
All exceptions inherit from CLIError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from pagetree.tree_mapper.errors import PageTreeError


class CLIError(PageTreeError):
    """Base exception for all CLI-related errors."""
    pass


class ConflictingOptionsError(CLIError):
    """Raised when mutually exclusive command-line options are combined."""

    def __init__(self, first: str, second: str):
        super().__init__(
            f"Options {first} and {second} cannot be used together"
        )
        self.first = first
        self.second = second
