"""Upsert command orchestration for CLI.

This module provides the UpsertCommand class that loads the tree
configuration, reads the page content source, runs a single PageTree upsert
and translates the outcome into terminal output and an exit code.
"""

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from pagetree.cli.errors import CLIError, ConflictingOptionsError
from pagetree.cli.models import ExitCode
from pagetree.cli.output import OutputHandler
from pagetree.tree_mapper.config_loader import ConfigLoader
from pagetree.tree_mapper.errors import (
    ConfigError,
    FilesystemError,
    InvalidPathError,
    MetadataParseError,
    MissingRequiredFieldError,
    NameConversionError,
)
from pagetree.tree_mapper.models import PageUpdate, TreeConfig
from pagetree.tree_mapper.page_tree import PageTree

logger = logging.getLogger(__name__)


class UpsertCommand:
    """Runs one upsert from command-line arguments.

    The workflow:
        1. Load configuration (defaults when the default config file is absent)
        2. Read content from --content or --content-file
        3. Upsert the entry through PageTree
        4. Print the outcome and return an exit code

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> cmd = UpsertCommand(output_handler=output)
        >>> exit_code = cmd.run("guides/setup", PageUpdate(title="Setup"))
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        output_handler: Optional[OutputHandler] = None,
        page_tree: Optional[PageTree] = None,
    ):
        """Initialize upsert command with dependencies.

        Args:
            config_path: Path to configuration YAML file (None for the default)
            output_handler: OutputHandler for terminal output (optional)
            page_tree: PageTree to use instead of one built from config (optional)
        """
        self.config_path = config_path
        self.output_handler = output_handler or OutputHandler()
        self.page_tree = page_tree

    def load_config(self) -> TreeConfig:
        """Load the tree configuration.

        A missing default config file yields default settings; an explicitly
        requested config file must exist.

        Raises:
            FilesystemError: If the config file cannot be read
            ConfigError: If the config is invalid
        """
        if self.config_path is None:
            if not Path(ConfigLoader.DEFAULT_CONFIG_PATH).exists():
                logger.debug("No config file found, using defaults")
                return TreeConfig()
            return ConfigLoader.load(ConfigLoader.DEFAULT_CONFIG_PATH)
        return ConfigLoader.load(self.config_path)

    @staticmethod
    def read_content(content: Optional[str], content_file: Optional[str]) -> Optional[bytes]:
        """Resolve the content source of the update.

        Args:
            content: Inline content text
            content_file: Path of a file holding the content, or "-" for stdin

        Returns:
            Content bytes, or None if no content was given

        Raises:
            ConflictingOptionsError: If both sources are given
            FilesystemError: If the content file cannot be read
        """
        if content is not None and content_file is not None:
            raise ConflictingOptionsError("--content", "--content-file")
        if content is not None:
            return content.encode('utf-8')
        if content_file is None:
            return None
        if content_file == "-":
            return sys.stdin.buffer.read()
        try:
            return Path(content_file).read_bytes()
        except FileNotFoundError as e:
            raise FilesystemError(content_file, 'read', 'File not found') from e
        except OSError as e:
            raise FilesystemError(content_file, 'read', str(e)) from e

    def run(
        self,
        path: str,
        update: PageUpdate,
        root: Optional[str] = None,
        content: Optional[str] = None,
        content_file: Optional[str] = None,
    ) -> ExitCode:
        """Execute the upsert.

        Args:
            path: Entry path relative to the tree root
            update: Partial page update (metadata fields)
            root: Tree root overriding the configured root_path
            content: Inline content text
            content_file: File holding the content, or "-" for stdin

        Returns:
            ExitCode indicating success or the failure category
        """
        try:
            body = self.read_content(content, content_file)
            if body is not None:
                update = replace(update, content=body)

            if self.page_tree is None:
                config = self.load_config()
                tree_root = root or config.root_path
                logger.info(f"Using tree root {tree_root}")
                self.output_handler.debug(f"Tree root: {tree_root}")
                self.page_tree = PageTree(tree_root, config=config)

            result = self.page_tree.upsert_entry(path, update)
            self.output_handler.print_upsert_summary(result)
            return ExitCode.SUCCESS

        except (
            InvalidPathError,
            NameConversionError,
            MissingRequiredFieldError,
            ConflictingOptionsError,
        ) as e:
            logger.error(f"Invalid input: {e}")
            self.output_handler.error(str(e))
            return ExitCode.INVALID_INPUT

        except (FilesystemError, MetadataParseError) as e:
            logger.error(f"Filesystem error: {e}")
            self.output_handler.error(str(e))
            return ExitCode.FILESYSTEM_ERROR

        except ConfigError as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except CLIError as e:
            logger.error(f"CLI error: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during upsert")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR
