"""Data models for CLI operations.

This module defines the data models used by the CLI module, following the
patterns established in pagetree/tree_mapper/models.py.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed (whether or not anything changed)
    - GENERAL_ERROR (1): Configuration or unexpected failure
    - INVALID_INPUT (2): Invalid entry path, missing title, conflicting options
    - FILESYSTEM_ERROR (3): Read/write failure or unreadable stored metadata

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_INPUT = 2
    FILESYSTEM_ERROR = 3
