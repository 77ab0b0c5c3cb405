"""Test helper modules for page tree testing.

- tree_helpers: deterministic id/clock sources and record readers
"""

from .tree_helpers import FakeClock, SequentialIds, read_meta, snapshot

__all__ = [
    'FakeClock',
    'SequentialIds',
    'read_meta',
    'snapshot',
]
