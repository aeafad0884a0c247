"""CLI interface for BarPing."""

import asyncio
import logging
import sys
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from barping.config import (
    Config,
    LoggingConfig,
    create_default_config,
    get_default_config_path,
    parse_thresholds,
)
from barping.ui.dashboard import Dashboard
from barping.ui.input import terminal_cbreak_mode

app = typer.Typer(
    name="barping",
    help="Scrolling, color-coded ping latency bar chart for the terminal",
    add_completion=False,
    rich_markup_mode=None,
    pretty_exceptions_enable=False,
)

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def configure_logging(log: LoggingConfig) -> None:
    """Send log records to a file; the terminal is reserved for the chart."""
    if not log.file:
        return
    logging.basicConfig(
        filename=log.file,
        level=getattr(logging, log.level.upper()),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        encoding="utf-8",
    )


def is_interactive() -> bool:
    """Both stdout and stdin must be a terminal."""
    return sys.stdout.isatty() and sys.stdin.isatty()


def version_callback(value: bool):
    """Print the installed version and exit."""
    if not value:
        return
    try:
        pkg_version = get_version("barping")
    except Exception:
        pkg_version = "unknown"
    console.print(f"barping version {pkg_version}")
    raise typer.Exit()


def init_config(config: Path | None, force: bool) -> None:
    """Create a default configuration file."""
    if config is None:
        config = get_default_config_path()

    # Check if file already exists
    if config.exists() and not force:
        console.print(
            f"[yellow]Configuration file already exists: {config}[/yellow]\n"
            f"Use --force to overwrite"
        )
        raise typer.Exit(1) from None

    try:
        created_path = create_default_config(config)
        console.print(f"[green]✓[/green] Created configuration file: {created_path}")
    except OSError as e:
        console.print(f"[red]Error creating configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None


@app.command()
def main(
    target: Annotated[
        str | None,
        typer.Argument(help="Host to ping (default 8.8.8.8 or the config file value)"),
    ] = None,
    every: Annotated[
        float | None,
        typer.Option("--every", help="Interval between pings in seconds"),
    ] = None,
    timestamp: Annotated[
        bool,
        typer.Option("--timestamp", help="Add a timestamp on the left"),
    ] = False,
    nogap: Annotated[
        bool,
        typer.Option("--nogap", help="Remove the blank row between bars"),
    ] = False,
    thresholds: Annotated[
        str | None,
        typer.Option(
            "--thresholds",
            help='3 increasing latency thresholds in ms, e.g. "80 160 320"',
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            dir_okay=False,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write logs to this file", dir_okay=False),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"),
    ] = None,
    init: Annotated[
        bool,
        typer.Option("--init", help="Create a default configuration file and exit"),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="With --init, overwrite an existing file"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version information and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
):
    """Ping TARGET and draw every round trip as a color-coded bar."""
    if init:
        init_config(config, force)
        return

    try:
        cfg = Config.load(config, validate=False)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None
    except Exception as e:
        err_console.print(f"[red]Error loading configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None

    # Command-line options override the config file
    if target:
        cfg.target.host = target
    if every is not None:
        cfg.probe.interval_seconds = every
    if timestamp:
        cfg.ui.timestamp = True
    if nogap:
        cfg.ui.gap = False
    if log_file is not None:
        cfg.logging.file = str(log_file)
    if log_level is not None:
        cfg.logging.level = log_level

    try:
        if thresholds is not None:
            cfg.ui.thresholds = parse_thresholds(thresholds)
        cfg.validate()
    except ValueError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None

    if not is_interactive():
        err_console.print("This terminal is not supported")
        raise typer.Exit(1)

    configure_logging(cfg.logging)
    dashboard = Dashboard(cfg, console=console)

    try:
        with terminal_cbreak_mode():
            asyncio.run(dashboard.run())
    except KeyboardInterrupt:
        console.print()


if __name__ == "__main__":
    app()
