"""Main CLI entry point for the pagetree command.

This module provides the Typer application that serves as the entry point
for the pagetree command-line tool. A single command upserts one entry.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from pagetree import __version__
from pagetree.cli.models import ExitCode
from pagetree.cli.output import OutputHandler
from pagetree.cli.upsert_command import UpsertCommand
from pagetree.tree_mapper.models import PageUpdate

app = typer.Typer(
    name="pagetree",
    help="""Create or update a page in a documentation tree.

Only writes files when the content or metadata actually changes, and creates
section metadata for every missing ancestor directory.

EXAMPLE:
  pagetree guides/setup --title "Setup" --content-file setup.md""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'pagetree' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("pagetree")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"pagetree_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pagetree version {__version__}")
        raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def main_command(
    path: str = typer.Argument(
        ...,
        help="Entry path relative to the tree root (e.g. guides/setup)",
    ),
    root: Optional[str] = typer.Option(
        None,
        "--root",
        help="Tree root directory (overrides root_path from the config)",
        metavar="DIR",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help="Config file (default: .pagetree/config.yaml if present)",
        metavar="FILE",
    ),
    title: Optional[str] = typer.Option(None, "--title", help="Page title (required for new pages)"),
    meta_title: Optional[str] = typer.Option(None, "--meta-title", help="Title for meta tags"),
    section_title: Optional[str] = typer.Option(None, "--section-title", help="Title shown for the section"),
    short_description: Optional[str] = typer.Option(None, "--short-description", help="One-line summary"),
    page_description: Optional[str] = typer.Option(None, "--page-description", help="Description shown on the page"),
    meta_description: Optional[str] = typer.Option(None, "--meta-description", help="Description for meta tags"),
    weight: Optional[int] = typer.Option(None, "--weight", help="Ordering weight among siblings"),
    content: Optional[str] = typer.Option(
        None,
        "--content",
        help="Page content as text",
        metavar="TEXT",
    ),
    content_file: Optional[str] = typer.Option(
        None,
        "--content-file",
        help="File holding the page content ('-' reads stdin)",
        metavar="FILE",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Create or update a page in a documentation tree.

    \b
    EXAMPLES:
      pagetree guides/setup --title "Setup" --content "# Setup"
      pagetree guides/setup --weight 3                 # update one field
      cat page.md | pagetree guides/setup --content-file -
    """
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    update = PageUpdate(
        title=title,
        meta_title=meta_title,
        section_title=section_title,
        short_description=short_description,
        page_description=page_description,
        meta_description=meta_description,
        weight=weight,
    )

    upsert_cmd = UpsertCommand(config_path=config, output_handler=output)
    exit_code = upsert_cmd.run(
        path,
        update,
        root=root,
        content=content,
        content_file=content_file,
    )
    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m pagetree.cli.main
if __name__ == "__main__":
    main()
