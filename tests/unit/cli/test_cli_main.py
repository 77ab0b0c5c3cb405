"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import logging
from unittest.mock import MagicMock, Mock, patch

from typer.testing import CliRunner

from pagetree import __version__
from pagetree.cli.main import _configure_logging, app
from pagetree.cli.models import ExitCode
from pagetree.tree_mapper.models import PageUpdate


runner = CliRunner()


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    def test_verbosity_0_sets_warning_level(self):
        """Verbosity 0 sets logging to WARNING level."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(0)

            mock_get_logger.assert_called_with("pagetree")
            mock_app_logger.setLevel.assert_called_with(logging.WARNING)

    def test_verbosity_1_sets_info_level(self):
        """Verbosity 1 sets logging to INFO level."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(1)

            mock_app_logger.setLevel.assert_called_with(logging.INFO)

    def test_verbosity_2_sets_debug_level(self):
        """Verbosity 2+ sets logging to DEBUG level."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(3)

            mock_app_logger.setLevel.assert_called_with(logging.DEBUG)

    def test_logdir_adds_file_handler(self, tmp_path):
        """--logdir creates the directory and a timestamped log file."""
        logdir = tmp_path / "logs"
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(1, str(logdir))

            assert mock_app_logger.addHandler.call_count == 2
            file_handler = mock_app_logger.addHandler.call_args_list[1][0][0]
            file_handler.close()

        log_files = list(logdir.glob("pagetree_*.log"))
        assert len(log_files) == 1


class TestMainCommand:
    """Test cases for the upsert command."""

    @patch('pagetree.cli.main._configure_logging')
    @patch('pagetree.cli.main.UpsertCommand')
    @patch('pagetree.cli.main.OutputHandler')
    def test_metadata_options_build_update(self, mock_output, mock_upsert_cmd, mock_logging):
        """Metadata options are passed through as a PageUpdate."""
        # Arrange
        mock_instance = Mock()
        mock_instance.run.return_value = ExitCode.SUCCESS
        mock_upsert_cmd.return_value = mock_instance

        # Act
        result = runner.invoke(app, [
            "guides/setup",
            "--title", "Setup",
            "--meta-title", "Setup | Docs",
            "--short-description", "Install it",
            "--weight", "3",
        ])

        # Assert
        assert result.exit_code == ExitCode.SUCCESS
        mock_instance.run.assert_called_once_with(
            "guides/setup",
            PageUpdate(
                title="Setup",
                meta_title="Setup | Docs",
                short_description="Install it",
                weight=3,
            ),
            root=None,
            content=None,
            content_file=None,
        )

    @patch('pagetree.cli.main._configure_logging')
    @patch('pagetree.cli.main.UpsertCommand')
    @patch('pagetree.cli.main.OutputHandler')
    def test_content_and_root_options(self, mock_output, mock_upsert_cmd, mock_logging):
        mock_instance = Mock()
        mock_instance.run.return_value = ExitCode.SUCCESS
        mock_upsert_cmd.return_value = mock_instance

        result = runner.invoke(app, [
            "a", "--root", "site", "--config", "cfg.yaml", "--content", "# A",
        ])

        assert result.exit_code == ExitCode.SUCCESS
        mock_upsert_cmd.assert_called_once_with(
            config_path="cfg.yaml",
            output_handler=mock_output.return_value,
        )
        mock_instance.run.assert_called_once_with(
            "a", PageUpdate(), root="site", content="# A", content_file=None,
        )

    @patch('pagetree.cli.main._configure_logging')
    @patch('pagetree.cli.main.UpsertCommand')
    @patch('pagetree.cli.main.OutputHandler')
    def test_verbosity_and_no_color(self, mock_output_cls, mock_upsert_cmd, mock_logging):
        """Verbosity and --no-color reach OutputHandler and logging."""
        mock_instance = Mock()
        mock_instance.run.return_value = ExitCode.SUCCESS
        mock_upsert_cmd.return_value = mock_instance

        result = runner.invoke(app, ["a", "-v", "2", "--no-color", "--logdir", "logs"])

        assert result.exit_code == ExitCode.SUCCESS
        mock_output_cls.assert_called_once_with(verbosity=2, no_color=True)
        mock_logging.assert_called_once_with(2, "logs")

    @patch('pagetree.cli.main._configure_logging')
    @patch('pagetree.cli.main.UpsertCommand')
    @patch('pagetree.cli.main.OutputHandler')
    def test_exit_code_is_propagated(self, mock_output, mock_upsert_cmd, mock_logging):
        mock_instance = Mock()
        mock_instance.run.return_value = ExitCode.INVALID_INPUT
        mock_upsert_cmd.return_value = mock_instance

        result = runner.invoke(app, ["a"])

        assert result.exit_code == ExitCode.INVALID_INPUT

    @patch('pagetree.cli.main.UpsertCommand')
    def test_non_integer_weight_is_rejected(self, mock_upsert_cmd):
        result = runner.invoke(app, ["a", "--title", "A", "--weight", "heavy"])

        assert result.exit_code == 2
        mock_upsert_cmd.assert_not_called()

    def test_missing_path_is_a_usage_error(self):
        result = runner.invoke(app, [])
        assert result.exit_code == 2


class TestVersion:
    """Test cases for --version."""

    @patch('pagetree.cli.main.UpsertCommand')
    def test_version_prints_and_exits(self, mock_upsert_cmd):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == ExitCode.SUCCESS
        assert f"pagetree version {__version__}" in result.output
        mock_upsert_cmd.assert_not_called()
