"""datebook CLI - dated task lists from a directory of task files."""

import logging
import sys
from datetime import date

import click

from . import __version__
from .config import Config, load_config, save_config
from .core.aggregate import TaskAggregate
from .core.dates import parse_iso_date
from .core.errors import ConfigError, DatebookError, InvalidDateError, TaskSourceError
from .render import render_dated, render_today
from .workflows import get_output_store, get_task_source, load_aggregate, write_dated

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(debug: bool, verbose: bool) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(format=LOG_FORMAT, level=level)


def _ensure_todo_dir(config: Config) -> Config:
    """Prompt for the todo directory on first run and remember it."""
    if config.todo_dir:
        return config
    todo_dir = click.prompt(
        "Data dir path for 'ToDo'",
        type=click.Path(exists=True, file_okay=False),
    )
    config.todo_dir = todo_dir
    save_config(config)
    return config


def _parse_today(value: str | None) -> date:
    if value is None:
        return date.today()
    try:
        return parse_iso_date(value)
    except InvalidDateError as e:
        raise click.BadParameter(str(e), param_hint="--date") from e


@click.command()
@click.version_option(__version__, "-v", "--version", prog_name="datebook")
@click.option("--dated", is_flag=True, help="Write the full dated list to dated.md in the output dir")
@click.option("--today", "today_only", is_flag=True, help="Print only today's tasks")
@click.option("--tui", is_flag=True, help="Open the interactive terminal view")
@click.option("--todo-dir", default=None, type=click.Path(file_okay=False), help="Override the todo directory")
@click.option("--output-dir", default=None, type=click.Path(file_okay=False), help="Override the output directory")
@click.option("--date", "as_of", default=None, help="Pretend today is this date (YYYY-MM-DD)")
@click.option("--verbose", is_flag=True, help="Enable info logging")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(
    dated: bool,
    today_only: bool,
    tui: bool,
    todo_dir: str | None,
    output_dir: str | None,
    as_of: str | None,
    verbose: bool,
    debug: bool,
):
    """datebook - recurring and dated tasks, bucketed around today."""
    configure_logging(debug, verbose)
    today = _parse_today(as_of)

    config = load_config()
    if todo_dir:
        config.todo_dir = todo_dir
    if output_dir:
        config.output_dir = output_dir
    config = _ensure_todo_dir(config)

    try:
        aggregate = load_aggregate(get_task_source(config), today)
    except (ConfigError, TaskSourceError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except DatebookError as e:
        click.echo(f"Fatal: {e}", err=True)
        sys.exit(1)

    if dated:
        path = write_dated(aggregate, get_output_store(config))
        click.echo(f"Dated list saved to {path}")

    if today_only:
        _echo_lines(render_today(aggregate))
    elif tui:
        _run_tui(aggregate, config)
    elif not dated:
        _echo_lines(render_dated(aggregate))


def _echo_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


def _run_tui(aggregate: TaskAggregate, config: Config) -> None:
    try:
        from .tui import View, run
    except ImportError as e:
        click.echo("Error: Missing dependencies. Run 'pip install textual'", err=True)
        click.echo(f"Details: {e}", err=True)
        sys.exit(1)
    run(aggregate, View(config.default_view))
