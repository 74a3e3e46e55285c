"""Ruby linting command for rblint CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from rblint.cli.formatters import FORMATTERS, get_formatter
from rblint.kernel.config import load_config
from rblint.kernel.discovery import discover_ruby_files
from rblint.kernel.exceptions import ConfigurationError, ResourceNotFoundError
from rblint.kernel.linting import Runner, configure_registry
from rblint.kernel.logging import get_logger
from rblint.stdlib.rules import default_registry

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

CLI_HELP = "Lint Ruby files and report offenses"

EXIT_OFFENSES = 1
EXIT_USAGE = 2


def lint(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Files or directories to lint (default: current directory)"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help=f"Output format ({', '.join(FORMATTERS)})",
        ),
    ] = "simple",
    only: Annotated[
        str | None,
        typer.Option(
            "--only",
            help="Comma-separated rule IDs to run exclusively (e.g. Layout/LineLength)",
        ),
    ] = None,
    except_: Annotated[
        str | None,
        typer.Option(
            "--except",
            help="Comma-separated rule IDs to skip",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (default: nearest .rblint.yml or .rubocop.yml)",
        ),
    ] = None,
    jobs: Annotated[
        int | None,
        typer.Option(
            "--jobs",
            "-j",
            min=1,
            help="Number of worker threads (default: based on CPU count)",
        ),
    ] = None,
) -> None:
    """Lint Ruby source files.

    Exits with status 1 when any offense is reported and 2 when the
    configuration or an option is invalid.

    Examples
    --------
    rblint lint
    rblint lint app lib --format compact
    rblint lint --only Layout/LineLength,Lint/Debugger
    rblint lint --except Style/StringLiterals --config ci.rubocop.yml
    """
    try:
        formatter = get_formatter(output_format)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from e

    try:
        config = load_config(config_path)
    except (ConfigurationError, ResourceNotFoundError) as e:
        err_console.print(f"[red]Configuration Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from e

    registry = default_registry()
    try:
        configure_registry(registry, config=config, only=only, exclude=except_)
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from e

    files = discover_ruby_files(paths or [Path()], exclude=config.exclude, root=config.root)
    if not files:
        console.print("No Ruby files found.")
        return

    report = Runner(registry, max_workers=jobs).run(files)
    logger.debug(
        "Rules enabled: {}/{}; config: {}",
        registry.enabled_count(),
        registry.total_count(),
        config.summary(),
    )

    output = formatter(report)
    if isinstance(output, str):
        if output:
            typer.echo(output)
    else:
        console.print(output, soft_wrap=True, highlight=False)

    if report.has_diagnostics:
        raise typer.Exit(EXIT_OFFENSES)
