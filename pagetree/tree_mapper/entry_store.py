"""Filesystem access for entry files.

EntryStore wraps the primitive operations the reconciler needs (directory
creation, byte reads and writes, existence checks) and converts OS failures
into FilesystemError with the operation and path attached.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from .errors import FilesystemError
from .metadata_codec import MetadataCodec
from .models import MetadataRecord, ResolvedEntry

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class EntryStore:
    """Reads and writes the files that make up an entry.

    For an entry with leaf name ``setup`` the store uses:
        <directory>/setup.md          content artifact (extension configurable)
        <directory>/setup.meta.json   metadata record (format from the codec)

    With ``atomic_writes`` enabled each file is staged in a temporary file in
    the target directory and moved into place with os.replace. Writes of
    different files are still independent: content and metadata are not
    committed together.

    Example:
        >>> store = EntryStore(MetadataCodec("json"))
        >>> store.create_directory("/tmp/docs/guides")
        >>> store.write_bytes("/tmp/docs/guides/guides.md", b"# Guides")
    """

    def __init__(
        self,
        codec: Optional[MetadataCodec] = None,
        content_extension: str = ".md",
        atomic_writes: bool = False,
    ):
        """Initialize the store.

        Args:
            codec: MetadataCodec for record files (defaults to JSON)
            content_extension: Extension appended to the leaf name for content
            atomic_writes: Stage every write in a temp file and rename it
        """
        self.codec = codec or MetadataCodec()
        self.content_extension = content_extension
        self.atomic_writes = atomic_writes

    def content_path(self, entry: ResolvedEntry) -> Path:
        """Return the content artifact path of an entry."""
        return entry.directory / f"{entry.leaf_name}{self.content_extension}"

    def metadata_path(self, directory: Path, leaf_name: str) -> Path:
        """Return the metadata record path for a directory and leaf name."""
        return directory / self.codec.filename(leaf_name)

    def exists(self, path: PathLike) -> bool:
        """Return True if a regular file exists at path."""
        return os.path.isfile(path)

    def create_directory(self, path: PathLike) -> None:
        """Create a directory and its parents (idempotent).

        Raises:
            FilesystemError: If the directory cannot be created
        """
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise FilesystemError(str(path), 'create_directory', str(e)) from e

    def read_bytes(self, path: PathLike) -> bytes:
        """Read a file's full content.

        Raises:
            FilesystemError: If the file cannot be read
        """
        try:
            with open(path, 'rb') as f:
                return f.read()
        except FileNotFoundError as e:
            raise FilesystemError(str(path), 'read', 'File not found') from e
        except PermissionError as e:
            raise FilesystemError(str(path), 'read', 'Permission denied') from e
        except OSError as e:
            raise FilesystemError(str(path), 'read', str(e)) from e

    def write_bytes(self, path: PathLike, data: bytes) -> None:
        """Write a file's full content, replacing any previous content.

        Raises:
            FilesystemError: If the file cannot be written
        """
        if self.atomic_writes:
            self._write_atomic(path, data)
            return

        try:
            with open(path, 'wb') as f:
                f.write(data)
        except PermissionError as e:
            raise FilesystemError(str(path), 'write', 'Permission denied') from e
        except OSError as e:
            raise FilesystemError(str(path), 'write', str(e)) from e
        logger.debug(f"Wrote {len(data)} byte(s) to {path}")

    def read_content(self, entry: ResolvedEntry) -> Optional[bytes]:
        """Return the stored content of an entry, or None if it has none."""
        path = self.content_path(entry)
        if not self.exists(path):
            return None
        return self.read_bytes(path)

    def read_metadata(self, directory: Path, leaf_name: str) -> Optional[MetadataRecord]:
        """Load the metadata record stored in a directory.

        Returns:
            The decoded record, or None if the directory has no record

        Raises:
            FilesystemError: If the record cannot be read
            MetadataParseError: If the record cannot be decoded
        """
        path = self.metadata_path(directory, leaf_name)
        if not self.exists(path):
            return None
        return self.codec.deserialize(self.read_bytes(path), str(path))

    def write_metadata(self, directory: Path, leaf_name: str, record: MetadataRecord) -> None:
        """Serialize and store a metadata record.

        Raises:
            FilesystemError: If the record cannot be written
        """
        self.write_bytes(self.metadata_path(directory, leaf_name), self.codec.serialize(record))

    def _write_atomic(self, path: PathLike, data: bytes) -> None:
        """Write via a temporary file in the target directory, then rename.

        Raises:
            FilesystemError: If staging or the final rename fails
        """
        directory = os.path.dirname(os.fspath(path)) or "."
        try:
            fd, temp_path = tempfile.mkstemp(
                dir=directory,
                prefix=f".{os.path.basename(path)}.",
                suffix=".tmp"
            )
        except OSError as e:
            raise FilesystemError(str(path), 'write', f"Cannot stage temp file: {e}") from e

        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            os.replace(temp_path, path)
        except OSError as e:
            try:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
            except OSError as cleanup_error:
                logger.warning(f"Failed to remove temp file {temp_path}: {cleanup_error}")
            raise FilesystemError(str(path), 'write', f"Atomic write failed: {e}") from e
        logger.debug(f"Atomically wrote {len(data)} byte(s) to {path}")
