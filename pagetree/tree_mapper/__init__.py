"""Tree mapper library for documentation page trees.

This package reconciles logical page updates against a documentation tree
stored as plain files: one directory per entry holding an optional content
file and a metadata record, with every ancestor directory labelled as a
navigation section.
"""

from .page_tree import PageTree
from .models import PageUpdate, MetadataRecord, ResolvedEntry, TreeConfig, UpsertResult
from .errors import (
    PageTreeError,
    InvalidPathError,
    MissingRequiredFieldError,
    FilesystemError,
    MetadataParseError,
    NameConversionError,
    ConfigError,
)
from .change_detector import ChangeDetector
from .config_loader import ConfigLoader
from .entry_store import EntryStore
from .metadata_codec import MetadataCodec
from .metadata_merger import MetadataMerger
from .metadata_synthesizer import MetadataSynthesizer
from .path_resolver import PathResolver
from .section_bootstrapper import SectionBootstrapper

__all__ = [
    'PageTree',
    'PageUpdate',
    'MetadataRecord',
    'ResolvedEntry',
    'TreeConfig',
    'UpsertResult',
    'PageTreeError',
    'InvalidPathError',
    'MissingRequiredFieldError',
    'FilesystemError',
    'MetadataParseError',
    'NameConversionError',
    'ConfigError',
    'ChangeDetector',
    'ConfigLoader',
    'EntryStore',
    'MetadataCodec',
    'MetadataMerger',
    'MetadataSynthesizer',
    'PathResolver',
    'SectionBootstrapper',
]
