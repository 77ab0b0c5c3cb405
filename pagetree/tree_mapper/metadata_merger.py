"""Partial merge of a PageUpdate into an existing metadata record."""

import logging
from dataclasses import replace
from typing import List, Tuple

from .change_detector import ChangeDetector
from .models import METADATA_FIELDS, MetadataRecord, PageUpdate

logger = logging.getLogger(__name__)


class MetadataMerger:
    """Merges a partial update into a stored record field by field.

    For each owned field, a supplied value that differs from the stored one
    is adopted and flagged; an absent or equal value keeps the stored one.
    identity, the timestamps and preserved extra keys are carried over
    unchanged. Creation-time fallbacks (e.g. page_description defaulting to
    short_description) are never re-applied here: an absent field means
    "no opinion".
    """

    @staticmethod
    def merge_fields(record: MetadataRecord, update: PageUpdate) -> Tuple[MetadataRecord, List[str]]:
        """Merge an update and report which fields changed.

        Args:
            record: Stored record (not modified)
            update: Partial update

        Returns:
            Tuple of (merged record, names of changed fields in record order)
        """
        changes = {}
        for name in METADATA_FIELDS:
            supplied = getattr(update, name)
            if ChangeDetector.field_changed(getattr(record, name), supplied):
                changes[name] = supplied

        if not changes:
            return record, []

        logger.debug(f"Metadata fields changed: {', '.join(changes)}")
        merged = replace(record, extra=dict(record.extra), **changes)
        return merged, list(changes)

    @classmethod
    def merge(cls, record: MetadataRecord, update: PageUpdate) -> Tuple[MetadataRecord, bool]:
        """Merge an update into a record.

        Args:
            record: Stored record (not modified)
            update: Partial update

        Returns:
            Tuple of (merged record, True if any field changed)
        """
        merged, changed_fields = cls.merge_fields(record, update)
        return merged, bool(changed_fields)
