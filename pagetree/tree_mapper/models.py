"""Data models for the tree mapper.

This module defines all data models used by the tree mapper library.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any, Dict, List, Optional, Union


# Metadata fields a PageUpdate may carry, in record order
METADATA_FIELDS = (
    'title',
    'meta_title',
    'section_title',
    'short_description',
    'page_description',
    'meta_description',
    'weight',
)


@dataclass
class PageUpdate:
    """Caller-supplied intent for a single entry.

    Every field is optional. ``None`` means the field is absent: leave the
    stored value alone if a record exists, otherwise apply the creation
    default. An empty string is a present value and is never treated as
    absent.

    Attributes:
        title: Human-facing page title (required when the entry is created)
        meta_title: Title used for HTML meta tags
        section_title: Title used when the entry is shown as a section
        short_description: One-line summary
        page_description: Description shown on the page
        meta_description: Description used for HTML meta tags
        weight: Ordering weight among siblings
        content: Page body; ``str`` values are stored as UTF-8
    """
    title: Optional[str] = None
    meta_title: Optional[str] = None
    section_title: Optional[str] = None
    short_description: Optional[str] = None
    page_description: Optional[str] = None
    meta_description: Optional[str] = None
    weight: Optional[int] = None
    content: Optional[Union[bytes, str]] = None

    def __post_init__(self):
        if isinstance(self.content, str):
            self.content = self.content.encode('utf-8')
        if self.weight is not None and (
            isinstance(self.weight, bool) or not isinstance(self.weight, int)
        ):
            raise TypeError(
                f"weight must be an integer, got {type(self.weight).__name__}"
            )

    def supplied_fields(self) -> List[str]:
        """Return the metadata fields present in this update, in record order."""
        return [name for name in METADATA_FIELDS if getattr(self, name) is not None]


@dataclass
class MetadataRecord:
    """Persisted metadata describing one entry.

    Attributes:
        title: Page title
        meta_title: Title used for HTML meta tags
        section_title: Title used when the entry is shown as a section
        short_description: One-line summary
        page_description: Description shown on the page
        meta_description: Description used for HTML meta tags
        weight: Ordering weight among siblings
        identity: Globally unique id, assigned once at creation
        created_at: UTC timestamp of creation
        updated_at: UTC timestamp of the last reported change
        extra: Keys found in the stored record that pagetree does not own
    """
    title: str
    meta_title: str
    section_title: str
    short_description: str
    page_description: str
    meta_description: str
    identity: str
    weight: int = 1
    created_at: str = ""
    updated_at: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResolvedEntry:
    """Physical location of a logical entry path.

    Attributes:
        relative_path: Normalized logical path below the tree root
        directory: Absolute directory holding the entry files
        leaf_name: Final path segment, used to name the entry files
        ancestors: Strict ancestors below the root, shallowest first
    """
    relative_path: PurePath
    directory: Path
    leaf_name: str
    ancestors: List[PurePath] = field(default_factory=list)


@dataclass
class UpsertResult:
    """Detailed outcome of a single upsert.

    Attributes:
        path: Logical entry path
        changed: True if anything was written for the entry
        content_changed: True if the content artifact was written
        metadata_changed: True if the record was created or a field changed
        created: True if the entry had no record before this upsert
        changed_fields: Metadata fields that changed on merge
        sections_created: Ancestor sections bootstrapped by this upsert
    """
    path: str
    changed: bool = False
    content_changed: bool = False
    metadata_changed: bool = False
    created: bool = False
    changed_fields: List[str] = field(default_factory=list)
    sections_created: List[str] = field(default_factory=list)


@dataclass
class TreeConfig:
    """Configuration of a page tree on disk.

    Attributes:
        root_path: Directory holding the tree
        content_extension: Extension of content files (e.g. ".md")
        metadata_format: Record encoding, "json" or "yaml"
        atomic_writes: Stage each file write in a temp file and rename it
    """
    root_path: str = "docs"
    content_extension: str = ".md"
    metadata_format: str = "json"
    atomic_writes: bool = False
