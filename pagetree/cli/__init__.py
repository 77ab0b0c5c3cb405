"""Command-line interface for pagetree.

This package provides the `pagetree` CLI tool that upserts a single entry
of a documentation tree from command-line options, with colored output and
meaningful exit codes.
"""

from .upsert_command import UpsertCommand
from .models import ExitCode
from .errors import CLIError, ConflictingOptionsError

__all__ = [
    'UpsertCommand',
    'ExitCode',
    'CLIError',
    'ConflictingOptionsError',
]
