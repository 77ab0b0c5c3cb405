"""Logical entry path resolution.

This module maps a caller-supplied relative entry path (e.g. "guides/setup")
to the physical directory under the tree root that holds the entry files,
and derives the leaf name used to name those files.
"""

import logging
import os
from pathlib import Path, PurePath
from typing import List, Union

from .errors import InvalidPathError, NameConversionError
from .models import ResolvedEntry

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolves logical entry paths against a tree root.

    Resolution rules:
    - Absolute or drive-anchored paths are rejected
    - "." segments are dropped, ".." segments are rejected
    - The normalized path must have a final segment (the leaf name)
    - Every segment must be representable as a plain UTF-8 name
    - The physical directory, with symlinks resolved, must stay under the root

    Example:
        >>> resolver = PathResolver("/srv/docs")
        >>> entry = resolver.resolve("guides/setup")
        >>> entry.leaf_name
        'setup'
        >>> [str(a) for a in entry.ancestors]
        ['guides']
    """

    def __init__(self, root: Union[str, os.PathLike]):
        """Initialize the resolver.

        Args:
            root: Tree root directory
        """
        self.root = Path(root).absolute()

    def resolve(self, path: Union[str, os.PathLike]) -> ResolvedEntry:
        """Resolve a logical entry path.

        Args:
            path: Path relative to the tree root

        Returns:
            ResolvedEntry with the physical directory, leaf name and ancestors

        Raises:
            InvalidPathError: If the path is absolute, escapes the root or has no leaf
            NameConversionError: If a segment cannot be used as a name
        """
        raw = os.fspath(path)
        if isinstance(raw, bytes):
            try:
                raw = raw.decode('utf-8')
            except UnicodeDecodeError as e:
                raise NameConversionError(repr(raw), f"not valid UTF-8 ({e.reason})")

        pure = PurePath(raw)
        if pure.is_absolute() or pure.anchor:
            raise InvalidPathError(raw, "path must be relative to the tree root")

        segments = [part for part in pure.parts if part != '.']
        for segment in segments:
            if segment == '..':
                raise InvalidPathError(raw, "'..' segments are not allowed")
            self._validate_segment(segment)

        if not segments:
            raise InvalidPathError(raw, "path has no final segment to name the entry")

        relative_path = PurePath(*segments)
        directory = self.root.joinpath(relative_path)
        self._validate_within_root(raw, directory)

        entry = ResolvedEntry(
            relative_path=relative_path,
            directory=directory,
            leaf_name=segments[-1],
            ancestors=self.ancestors_of(relative_path),
        )
        logger.debug(f"Resolved entry '{raw}' to {directory}")
        return entry

    @staticmethod
    def ancestors_of(relative_path: PurePath) -> List[PurePath]:
        """Return the strict ancestors of a path below the root, shallowest first.

        Args:
            relative_path: Normalized relative path

        Returns:
            List of ancestor paths, excluding the root and the path itself

        Example:
            >>> [str(p) for p in PathResolver.ancestors_of(PurePath("a/b/c"))]
            ['a', 'a/b']
        """
        parts = relative_path.parts
        return [PurePath(*parts[:depth]) for depth in range(1, len(parts))]

    @staticmethod
    def _validate_segment(segment: str) -> None:
        """Check that a path segment is usable as a plain name.

        Raises:
            NameConversionError: If the segment holds NUL or is not UTF-8 encodable
        """
        if '\x00' in segment:
            raise NameConversionError(segment, "contains a NUL character")
        try:
            segment.encode('utf-8')
        except UnicodeEncodeError as e:
            raise NameConversionError(segment, f"not encodable as UTF-8 ({e.reason})")

    def _validate_within_root(self, raw: str, directory: Path) -> None:
        """Ensure the directory stays under the root once symlinks are resolved.

        Raises:
            InvalidPathError: If the resolved directory is outside the root
        """
        real_root = os.path.realpath(self.root)
        real_path = os.path.realpath(directory)
        if not real_path.startswith(real_root + os.sep):
            raise InvalidPathError(raw, f"resolves outside the tree root {self.root}")
