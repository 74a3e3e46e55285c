"""rblint CLI - Main entrypoint."""

import typer
from rich.console import Console
from rich.markup import escape

from rblint import __version__
from rblint.cli.commands import lint_cmd, rules_cmd
from rblint.kernel.logging import configure_logging, normalize_level

app = typer.Typer(
    name="rblint",
    help="rblint - A fast, parallel linter for Ruby source files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.command(name="lint", help=lint_cmd.CLI_HELP)(lint_cmd.lint)
app.command(name="rules", help=rules_cmd.CLI_HELP)(rules_cmd.rules)


def _print_version(value: bool) -> None:
    if value:
        console.print(f"[bold blue]rblint[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
    log_level: str = typer.Option(
        "warning", "--log-level", help="Log level: debug|info|warn|error"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """rblint - lint Ruby files with a configurable set of rules.

    Logging is configured here, before any subcommand runs; the chosen
    level is kept on `ctx.obj["log_level"]`.
    """
    requested = "error" if quiet else "debug" if verbose else log_level
    try:
        level = normalize_level(requested)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from e

    ctx.ensure_object(dict)["log_level"] = level
    configure_logging(level=level, format="rich", force_reconfigure=True)


def main() -> None:
    """Run the rblint CLI."""
    app()


if __name__ == "__main__":
    main()
