"""Ancestor section bootstrap.

Every directory above an entry (below the tree root) is a navigation
section and needs its own metadata record. This module fills in the
records that are missing and leaves existing ones untouched.
"""

import logging
from pathlib import Path, PurePath
from typing import List

from .entry_store import EntryStore
from .metadata_synthesizer import MetadataSynthesizer

logger = logging.getLogger(__name__)


class SectionBootstrapper:
    """Creates minimal metadata for ancestor sections that lack it.

    Each ancestor gets a record synthesized with its directory name as the
    title (all other fields take creation defaults). An ancestor that already
    has a record is never merged or rewritten. The tree root itself is never
    bootstrapped.

    Example:
        >>> bootstrapper = SectionBootstrapper(root, store, synthesizer)
        >>> created = bootstrapper.ensure_sections([PurePath("guides"), PurePath("guides/admin")])
        >>> [p.as_posix() for p in created]
        ['guides', 'guides/admin']
    """

    def __init__(self, root: Path, store: EntryStore, synthesizer: MetadataSynthesizer):
        """Initialize the bootstrapper.

        Args:
            root: Absolute tree root directory
            store: EntryStore used to check for and write records
            synthesizer: MetadataSynthesizer used to build section records
        """
        self.root = root
        self.store = store
        self.synthesizer = synthesizer

    def ensure_sections(self, ancestors: List[PurePath]) -> List[PurePath]:
        """Ensure every ancestor has a metadata record.

        Ancestors are processed shallowest first. Failures propagate
        immediately; records created before the failure stay in place.

        Args:
            ancestors: Strict ancestors of an entry, relative to the root

        Returns:
            The ancestors whose records were created by this call

        Raises:
            FilesystemError: If a directory or record cannot be written
        """
        created = []
        for ancestor in ancestors:
            if not ancestor.parts:
                continue
            if self.ensure_section(ancestor):
                created.append(ancestor)
        return created

    def ensure_section(self, ancestor: PurePath) -> bool:
        """Create the record of a single section if it is missing.

        Args:
            ancestor: Section path relative to the root

        Returns:
            True if a record was created
        """
        directory = self.root.joinpath(ancestor)
        leaf_name = ancestor.name
        metadata_path = self.store.metadata_path(directory, leaf_name)

        if self.store.exists(metadata_path):
            logger.debug(f"Section '{ancestor.as_posix()}' already has metadata")
            return False

        self.store.create_directory(directory)
        record = self.synthesizer.create(
            MetadataSynthesizer.for_section(leaf_name),
            ancestor.as_posix()
        )
        self.store.write_metadata(directory, leaf_name, record)
        logger.info(f"Created section metadata for '{ancestor.as_posix()}'")
        return True
