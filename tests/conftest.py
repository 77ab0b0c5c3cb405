"""Root pytest configuration for all tests.

Provides a temporary tree root and a PageTree wired to deterministic
identity and clock sources.
"""

import pytest

from pagetree.tree_mapper.page_tree import PageTree
from tests.helpers import FakeClock, SequentialIds


@pytest.fixture
def tree_root(tmp_path):
    """Tree root directory (not created yet)."""
    return tmp_path / "docs"


@pytest.fixture
def id_source():
    return SequentialIds()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def page_tree(tree_root, id_source, clock):
    """PageTree with deterministic ids and timestamps."""
    return PageTree(tree_root, id_source=id_source, clock=clock)
