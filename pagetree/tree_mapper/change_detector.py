"""Content and field change detection.

Content is compared through a SHA-256 fingerprint of the full byte sequence,
so the stored artifact is only rewritten when its bytes actually differ.
"""

import hashlib
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ChangeDetector:
    """Decides whether an update differs from what is stored.

    Content rules:
    - No stored artifact: changed iff new content is supplied
    - Stored artifact: changed iff new content is supplied and its
      fingerprint differs from the stored one
    - Omitted content is never a change (content is not deleted by omission)

    Example:
        >>> ChangeDetector.content_changed(b"hello", b"hello")
        False
        >>> ChangeDetector.content_changed(b"hello", None)
        False
        >>> ChangeDetector.content_changed(None, b"")
        True
    """

    @staticmethod
    def fingerprint(data: bytes) -> str:
        """Return the SHA-256 hex digest of a byte sequence."""
        return hashlib.sha256(data).hexdigest()

    @classmethod
    def content_changed(cls, stored: Optional[bytes], new: Optional[bytes]) -> bool:
        """Compare new content against the stored artifact.

        Args:
            stored: Stored content bytes, or None if no artifact exists
            new: Supplied content bytes, or None if the update omits content

        Returns:
            True if the supplied content must be written
        """
        if new is None:
            return False
        if stored is None:
            return True

        old_checksum = cls.fingerprint(stored)
        checksum = cls.fingerprint(new)
        logger.debug(f"Content fingerprints: stored={old_checksum[:12]} new={checksum[:12]}")
        return old_checksum != checksum

    @staticmethod
    def field_changed(stored: Any, supplied: Any) -> bool:
        """Return True if a value is supplied and differs from the stored one."""
        return supplied is not None and supplied != stored
