"""CLI entry point for Email Sorter."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
import structlog

from . import constants
from .config import ConfigError, ScoringConfig, load_config, save_config
from .constants import DEFAULT_REPORT_NAME, DEFAULT_WORKERS
from .display import console, display_category_table, display_record_detail
from .models import Category
from .report import export_records
from .scanner import EmailSorter, analyze_file

_CONFIG_OPTION = click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Scoring config JSON (default: ~/.email-sorter/sort_config.json).",
)


def _load(config_path: Path | None) -> ScoringConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def configure_logging(verbosity: int) -> None:
    """Send structlog output to stderr, filtered by -v count."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # resolve stderr per logger so redirected streams are honoured
        logger_factory=lambda *args: structlog.PrintLogger(file=sys.stderr),
    )


@click.group()
@click.version_option(version="0.1.0", prog_name="email-sorter")
@click.option("-v", "--verbose", count=True, help="Log more detail to stderr (-vv for debug).")
def cli(verbose: int) -> None:
    """Email Sorter - decide which exported emails to delete, summarize or keep."""
    configure_logging(verbose)


@cli.command(name="sort")
@click.argument("directory", type=click.Path(path_type=Path))
@_CONFIG_OPTION
@click.option("-o", "--output", default=DEFAULT_REPORT_NAME, help="Report file name, written inside DIRECTORY.")
@click.option("-w", "--workers", default=DEFAULT_WORKERS, type=click.IntRange(min=1), help="Parallel workers.")
@click.option("--csv", "csv_path", default=None, help="Also export every classified record to this CSV file.")
@click.option("--no-save", is_flag=True, help="Print the summary without writing a report.")
@click.option("--show", "show_tables", is_flag=True, help="List records per category.")
def sort_cmd(
    directory: Path,
    config_path: Path | None,
    output: str,
    workers: int,
    csv_path: str | None,
    no_save: bool,
    show_tables: bool,
) -> None:
    """Classify every stored email under DIRECTORY."""
    config = _load(config_path)
    sorter = EmailSorter(directory, config, workers=workers)

    try:
        sorter.sort_emails()
    except OSError as e:
        raise click.ClickException(str(e)) from e

    if show_tables:
        for category in Category:
            display_category_table(sorter.aggregator, category)

    sorter.print_summary()

    if not no_save:
        report = sorter.generate_report()
        try:
            path = sorter.save_report(report, output)
        except OSError as e:
            raise click.ClickException(f"Could not write report: {e}") from e
        console.print(f"Report saved to: [bold]{path}[/bold]")

    if csv_path:
        try:
            export_records(sorter.aggregator, sorter.base_directory, format="csv", output_path=csv_path)
        except OSError as e:
            raise click.ClickException(f"Could not write CSV: {e}") from e
        console.print(f"Records exported to: [bold]{csv_path}[/bold]")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_CONFIG_OPTION
def check(file: Path, config_path: Path | None) -> None:
    """Classify a single stored email and show how it scored."""
    config = _load(config_path)
    try:
        record = analyze_file(file, config)
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Could not read {file}: {e}") from e

    if record is None:
        raise click.ClickException(f"{file} is not a classifiable email record.")

    display_record_detail(record)


@cli.group(name="config")
def config_group() -> None:
    """Manage the scoring configuration."""


@config_group.command(name="show")
@_CONFIG_OPTION
def config_show(config_path: Path | None) -> None:
    """Print the resolved scoring configuration as JSON."""
    config = _load(config_path)
    click.echo(json.dumps(config.to_dict(), indent=2))


@config_group.command(name="init")
@_CONFIG_OPTION
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
def config_init(config_path: Path | None, force: bool) -> None:
    """Write the default scoring configuration to disk."""
    target = config_path or constants.SORT_CONFIG_PATH
    if target.exists() and not force:
        raise click.ClickException(f"{target} already exists. Use --force to overwrite.")
    path = save_config(ScoringConfig(), target)
    console.print(f"[green]Default config written to {path}[/green]")
