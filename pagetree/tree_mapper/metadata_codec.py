"""Serialization of metadata records.

Records are stored as JSON (default) or YAML with lower camel case keys in a
fixed order, so an unchanged record always encodes to identical bytes:

    title, metaTitle, sectionTitle, shortDescription, pageDescription,
    metaDescription, weight, identity, createdAt, updatedAt

Keys that pagetree does not own (e.g. added by hand) are kept in the
record's ``extra`` mapping and written back after the owned keys in their
stored order.
"""

import json
from datetime import date, datetime
from typing import Any, Dict
import yaml

from .errors import ConfigError, MetadataParseError
from .models import MetadataRecord


class MetadataCodec:
    """Encodes and decodes MetadataRecord objects.

    Example:
        >>> codec = MetadataCodec("json")
        >>> codec.filename("setup")
        'setup.meta.json'
    """

    FORMATS = ('json', 'yaml')

    # Record attribute -> serialized key, in output order
    FIELD_KEYS = (
        ('title', 'title'),
        ('meta_title', 'metaTitle'),
        ('section_title', 'sectionTitle'),
        ('short_description', 'shortDescription'),
        ('page_description', 'pageDescription'),
        ('meta_description', 'metaDescription'),
        ('weight', 'weight'),
        ('identity', 'identity'),
        ('created_at', 'createdAt'),
        ('updated_at', 'updatedAt'),
    )

    REQUIRED_KEYS = (
        'title',
        'metaTitle',
        'sectionTitle',
        'shortDescription',
        'pageDescription',
        'metaDescription',
        'weight',
        'identity',
    )

    OPTIONAL_STRING_KEYS = ('createdAt', 'updatedAt')

    # Maximum nesting allowed inside preserved extra keys
    MAX_DEPTH = 10

    def __init__(self, metadata_format: str = 'json'):
        """Initialize the codec.

        Args:
            metadata_format: "json" or "yaml"

        Raises:
            ConfigError: If the format is not supported
        """
        if metadata_format not in self.FORMATS:
            raise ConfigError(
                f"Unsupported metadata format '{metadata_format}', "
                f"expected one of: {', '.join(self.FORMATS)}",
                'metadata_format'
            )
        self.metadata_format = metadata_format

    def filename(self, leaf_name: str) -> str:
        """Return the record filename for an entry leaf name."""
        return f"{leaf_name}.meta.{self.metadata_format}"

    def to_dict(self, record: MetadataRecord) -> Dict[str, Any]:
        """Convert a record to an ordered dictionary of serialized keys."""
        data = {key: getattr(record, attr) for attr, key in self.FIELD_KEYS}
        for key, value in record.extra.items():
            if key not in data:
                data[key] = value
        return data

    def serialize(self, record: MetadataRecord) -> bytes:
        """Encode a record to bytes.

        Args:
            record: Record to encode

        Returns:
            UTF-8 encoded JSON or YAML document ending with a newline
        """
        data = self.to_dict(record)
        if self.metadata_format == 'yaml':
            text = yaml.safe_dump(
                data,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False
            )
        else:
            text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        return text.encode('utf-8')

    def deserialize(self, data: bytes, file_path: str = "<metadata>") -> MetadataRecord:
        """Decode bytes into a record.

        Args:
            data: Stored record bytes
            file_path: Path of the record (for error messages)

        Returns:
            Decoded MetadataRecord

        Raises:
            MetadataParseError: If the bytes are not a valid record
        """
        try:
            text = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MetadataParseError(file_path, f"Not valid UTF-8: {e.reason}")

        if self.metadata_format == 'yaml':
            try:
                raw = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise MetadataParseError(file_path, f"Invalid YAML syntax: {str(e)}")
            except RecursionError:
                raise MetadataParseError(file_path, "Metadata structure is nested too deeply to parse")
        else:
            try:
                raw = json.loads(text)
            except json.JSONDecodeError as e:
                raise MetadataParseError(file_path, f"Invalid JSON syntax: {str(e)}")
            except RecursionError:
                raise MetadataParseError(file_path, "Metadata structure is nested too deeply to parse")

        if not isinstance(raw, dict):
            raise MetadataParseError(
                file_path,
                f"Metadata must be a mapping, got {type(raw).__name__}"
            )

        return self.from_dict(raw, file_path)

    def from_dict(self, raw: Dict[str, Any], file_path: str = "<metadata>") -> MetadataRecord:
        """Build a record from a decoded mapping.

        Raises:
            MetadataParseError: If required keys are missing or have the wrong type
        """
        missing = [key for key in self.REQUIRED_KEYS if key not in raw]
        if missing:
            raise MetadataParseError(
                file_path,
                f"Missing required fields: {', '.join(missing)}"
            )

        values = {}
        for attr, key in self.FIELD_KEYS:
            if key == 'weight':
                values[attr] = self._parse_weight(raw[key], file_path)
            elif key in self.OPTIONAL_STRING_KEYS:
                values[attr] = self._parse_string(raw.get(key, ""), key, file_path)
            else:
                values[attr] = self._parse_string(raw[key], key, file_path)

        owned = {key for _, key in self.FIELD_KEYS}
        extra = {key: value for key, value in raw.items() if key not in owned}
        self._validate_depth(extra, file_path)

        return MetadataRecord(extra=extra, **values)

    @staticmethod
    def _parse_string(value: Any, key: str, file_path: str) -> str:
        """Return a string field, coercing bare YAML numbers and dates.

        Booleans are rejected rather than coerced: YAML reads yes, on and true
        alike, so the original spelling cannot be recovered.

        Raises:
            MetadataParseError: If the value is not a string, number or date
        """
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            raise MetadataParseError(
                file_path,
                f"Field '{key}' must be a string, got bool (quote the value)"
            )
        # Hand-edited YAML turns bare numbers and timestamps into other types
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        raise MetadataParseError(
            file_path,
            f"Field '{key}' must be a string, got {type(value).__name__}"
        )

    @staticmethod
    def _parse_weight(value: Any, file_path: str) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise MetadataParseError(
            file_path,
            f"Field 'weight' must be an integer, got {type(value).__name__}"
        )

    @classmethod
    def _validate_depth(cls, obj: Any, file_path: str, current_depth: int = 0) -> None:
        """Reject preserved values nested deeper than MAX_DEPTH.

        Raises:
            MetadataParseError: If depth exceeds the maximum
        """
        if current_depth > cls.MAX_DEPTH:
            raise MetadataParseError(
                file_path,
                f"Metadata structure exceeds maximum depth of {cls.MAX_DEPTH}"
            )

        if isinstance(obj, dict):
            for value in obj.values():
                cls._validate_depth(value, file_path, current_depth + 1)
        elif isinstance(obj, list):
            for item in obj:
                cls._validate_depth(item, file_path, current_depth + 1)
