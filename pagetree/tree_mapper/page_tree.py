"""Main orchestration class for page tree reconciliation.

This module provides the PageTree class which reconciles a single logical
page update against the files stored under a tree root, writing content and
metadata only when something actually changed.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from .change_detector import ChangeDetector
from .config_loader import ConfigLoader
from .entry_store import EntryStore
from .errors import MissingRequiredFieldError
from .metadata_codec import MetadataCodec
from .metadata_merger import MetadataMerger
from .metadata_synthesizer import MetadataSynthesizer, utc_timestamp
from .models import PageUpdate, TreeConfig, UpsertResult
from .path_resolver import PathResolver
from .section_bootstrapper import SectionBootstrapper


logger = logging.getLogger(__name__)


class PageTree:
    """Idempotent create-or-update of entries in a documentation tree.

    For a logical path ``a/b/c`` the tree holds:
        root/a/b/c/c.md           content (only if content was ever supplied)
        root/a/b/c/c.meta.json    metadata record
        root/a/a.meta.json        section record for "a"
        root/a/b/b.meta.json      section record for "a/b"

    The PageTree uses:
    - PathResolver: For mapping logical paths to directories
    - SectionBootstrapper: For filling in missing ancestor records
    - ChangeDetector: For fingerprint-based content comparison
    - MetadataSynthesizer / MetadataMerger: For building the record
    - EntryStore: For all filesystem access

    A PageTree assumes it is the only writer of the tree for the duration of
    a call; it takes no locks. Writes are not transactional: content may be
    written before a later metadata write fails.

    Example:
        >>> tree = PageTree("./docs")
        >>> tree.upsert("guides/setup", PageUpdate(title="Setup", content="# Setup"))
        True
        >>> tree.upsert("guides/setup", PageUpdate(title="Setup", content="# Setup"))
        False
    """

    def __init__(
        self,
        root: Union[str, os.PathLike],
        config: Optional[TreeConfig] = None,
        id_source: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], str]] = None,
        store: Optional[EntryStore] = None,
    ):
        """Initialize the page tree, creating the root directory if needed.

        Args:
            root: Tree root directory
            config: Optional TreeConfig (file naming, record format, atomic writes).
                    Its root_path is ignored in favour of ``root``.
            id_source: Optional callable returning new entry identities
            clock: Optional callable returning the current timestamp string
            store: Optional EntryStore; built from config when omitted

        Raises:
            FilesystemError: If the root directory cannot be created
            ConfigError: If the config has an invalid extension or format, or its
                         content filename collides with the metadata filename
        """
        self.config = config or TreeConfig()
        ConfigLoader.validate(self.config)
        self.root = Path(root).absolute()
        self._clock = clock or utc_timestamp

        self._store = store or EntryStore(
            codec=MetadataCodec(self.config.metadata_format),
            content_extension=self.config.content_extension,
            atomic_writes=self.config.atomic_writes,
        )
        self._resolver = PathResolver(self.root)
        self._synthesizer = MetadataSynthesizer(id_source=id_source, clock=self._clock)
        self._bootstrapper = SectionBootstrapper(self.root, self._store, self._synthesizer)

        self._store.create_directory(self.root)

    def upsert(self, path: Union[str, os.PathLike], update: PageUpdate) -> bool:
        """Create or update an entry.

        Args:
            path: Entry path relative to the tree root
            update: Partial update describing the desired state

        Returns:
            True if the entry's content or metadata was written

        Raises:
            InvalidPathError: If the path is absolute, escapes the root or has no leaf
            NameConversionError: If a path segment cannot be used as a name
            MissingRequiredFieldError: If the entry is new and no title is given
            FilesystemError: If a directory or file operation fails
            MetadataParseError: If the stored record cannot be decoded
        """
        return self.upsert_entry(path, update).changed

    def upsert_entry(self, path: Union[str, os.PathLike], update: PageUpdate) -> UpsertResult:
        """Create or update an entry and report what happened.

        Same contract as upsert(), returning an UpsertResult instead of a bool.
        """
        entry = self._resolver.resolve(path)
        entry_path = entry.relative_path.as_posix()
        result = UpsertResult(path=entry_path)

        # Refuse a title-less creation before anything touches the disk
        metadata_path = self._store.metadata_path(entry.directory, entry.leaf_name)
        record_exists = self._store.exists(metadata_path)
        if not record_exists and update.title is None:
            raise MissingRequiredFieldError('title', entry_path)

        self._store.create_directory(entry.directory)

        created_sections = self._bootstrapper.ensure_sections(entry.ancestors)
        result.sections_created = [section.as_posix() for section in created_sections]

        stored_content = self._store.read_content(entry)
        result.content_changed = ChangeDetector.content_changed(stored_content, update.content)
        if result.content_changed:
            self._store.write_bytes(self._store.content_path(entry), update.content)
            logger.info(f"Wrote content for '{entry_path}'")

        record = self._store.read_metadata(entry.directory, entry.leaf_name) if record_exists else None
        if record is None:
            record = self._synthesizer.create(update, entry_path)
            result.created = True
            result.metadata_changed = True
        else:
            record, result.changed_fields = MetadataMerger.merge_fields(record, update)
            result.metadata_changed = bool(result.changed_fields)

        result.changed = result.content_changed or result.metadata_changed
        if not result.changed:
            logger.debug(f"Entry '{entry_path}' unchanged")
            return result

        if not result.created:
            record.updated_at = self._clock()
        self._store.write_metadata(entry.directory, entry.leaf_name, record)
        logger.info(
            f"{'Created' if result.created else 'Updated'} metadata for '{entry_path}'"
        )
        return result
