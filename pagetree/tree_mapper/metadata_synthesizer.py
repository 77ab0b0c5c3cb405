"""Creation of metadata records for new entries.

The defaulting cascade in this module applies only when an entry has no
record yet. Later updates go through MetadataMerger, which never recomputes
fallbacks.
"""

import logging
import uuid
from datetime import datetime, UTC
from typing import Callable, Optional

from .errors import MissingRequiredFieldError
from .models import MetadataRecord, PageUpdate

logger = logging.getLogger(__name__)

# Timestamp format stored in createdAt/updatedAt
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def new_identity() -> str:
    """Return a new globally unique entry identity."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Return the current UTC time in the stored timestamp format."""
    return datetime.now(UTC).strftime(TIMESTAMP_FORMAT)


class MetadataSynthesizer:
    """Builds a complete MetadataRecord from a PageUpdate with no prior record.

    Defaulting rules, in order:
        1. title is required
        2. meta_title defaults to title
        3. section_title defaults to title
        4. short_description defaults to ""
        5. page_description defaults to short_description (after defaulting)
        6. meta_description defaults to short_description (after defaulting)
        7. weight defaults to 1
        8. identity is freshly allocated

    Example:
        >>> synth = MetadataSynthesizer(id_source=lambda: "id-1", clock=lambda: "t0")
        >>> record = synth.create(PageUpdate(title="Setup"))
        >>> (record.meta_title, record.page_description, record.weight)
        ('Setup', '', 1)
    """

    DEFAULT_WEIGHT = 1

    def __init__(
        self,
        id_source: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], str]] = None,
    ):
        """Initialize the synthesizer.

        Args:
            id_source: Callable returning a new unique identity (defaults to uuid4)
            clock: Callable returning the current timestamp string
        """
        self.id_source = id_source or new_identity
        self.clock = clock or utc_timestamp

    def create(self, update: PageUpdate, entry_path: Optional[str] = None) -> MetadataRecord:
        """Synthesize a new record.

        Args:
            update: Partial update describing the entry
            entry_path: Logical path, used in error messages

        Returns:
            A newly created MetadataRecord

        Raises:
            MissingRequiredFieldError: If the update has no title
        """
        if update.title is None:
            raise MissingRequiredFieldError('title', entry_path)

        title = update.title
        short_description = (
            update.short_description if update.short_description is not None else ""
        )
        now = self.clock()

        record = MetadataRecord(
            title=title,
            meta_title=update.meta_title if update.meta_title is not None else title,
            section_title=update.section_title if update.section_title is not None else title,
            short_description=short_description,
            page_description=(
                update.page_description
                if update.page_description is not None
                else short_description
            ),
            meta_description=(
                update.meta_description
                if update.meta_description is not None
                else short_description
            ),
            weight=update.weight if update.weight is not None else self.DEFAULT_WEIGHT,
            identity=self.id_source(),
            created_at=now,
            updated_at=now,
        )
        logger.debug(f"Synthesized metadata for '{entry_path}' with identity {record.identity}")
        return record

    @staticmethod
    def for_section(leaf_name: str) -> PageUpdate:
        """Return the update used to bootstrap an ancestor section.

        Args:
            leaf_name: Directory name of the section

        Returns:
            PageUpdate whose only supplied field is the title
        """
        return PageUpdate(title=leaf_name)
