"""YAML configuration loading and validation.

This module handles loading and saving page tree configuration from YAML
files. All fields are optional and fall back to the TreeConfig defaults.
"""

import os
from typing import Dict, Any
import yaml

from .errors import ConfigError, FilesystemError
from .metadata_codec import MetadataCodec
from .models import TreeConfig


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        root_path: ./docs
        content_extension: .md
        metadata_format: json
        atomic_writes: false
    """

    # Default config file path
    DEFAULT_CONFIG_PATH = ".pagetree/config.yaml"

    KNOWN_FIELDS = {'root_path', 'content_extension', 'metadata_format', 'atomic_writes'}

    @classmethod
    def load(cls, config_path: str) -> TreeConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            TreeConfig object with parsed configuration

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        # An empty file means "all defaults"
        if config_dict is None:
            return TreeConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, tree_config: TreeConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            tree_config: TreeConfig object to save

        Raises:
            FilesystemError: If file cannot be written
        """
        config_dict = {
            'root_path': tree_config.root_path,
            'content_extension': tree_config.content_extension,
            'metadata_format': tree_config.metadata_format,
            'atomic_writes': tree_config.atomic_writes,
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> TreeConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated TreeConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown_fields = set(config_dict.keys()) - cls.KNOWN_FIELDS
        if unknown_fields:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(f) for f in unknown_fields))}"
            )

        defaults = TreeConfig()
        root_path = config_dict.get('root_path', defaults.root_path)
        content_extension = config_dict.get('content_extension', defaults.content_extension)
        metadata_format = config_dict.get('metadata_format', defaults.metadata_format)
        atomic_writes = config_dict.get('atomic_writes', defaults.atomic_writes)

        if not isinstance(atomic_writes, bool):
            raise ConfigError(
                f"Field 'atomic_writes' must be a boolean, got {type(atomic_writes).__name__}",
                'atomic_writes'
            )

        if root_path is None or not str(root_path).strip():
            raise ConfigError("Field 'root_path' cannot be empty", 'root_path')
        root_path = str(root_path)

        tree_config = TreeConfig(
            root_path=root_path,
            content_extension=str(content_extension),
            metadata_format=str(metadata_format).lower(),
            atomic_writes=atomic_writes
        )
        cls.validate(tree_config)
        return tree_config

    @staticmethod
    def validate(tree_config: TreeConfig) -> None:
        """Check the file naming settings of a configuration.

        Applied to loaded files and to configs built in code before a
        PageTree uses them.

        Args:
            tree_config: Configuration to check

        Raises:
            ConfigError: If the extension or format is invalid, or the content
                         filename would collide with the metadata filename
        """
        content_extension = tree_config.content_extension
        if not content_extension.startswith('.') or len(content_extension) < 2:
            raise ConfigError(
                f"Field 'content_extension' must start with '.', got '{content_extension}'",
                'content_extension'
            )

        metadata_format = tree_config.metadata_format
        if metadata_format not in MetadataCodec.FORMATS:
            raise ConfigError(
                f"Field 'metadata_format' must be one of: {', '.join(MetadataCodec.FORMATS)}, "
                f"got '{metadata_format}'",
                'metadata_format'
            )

        if content_extension == f".meta.{metadata_format}":
            raise ConfigError(
                f"Field 'content_extension' collides with the metadata filename '{content_extension}'",
                'content_extension'
            )
