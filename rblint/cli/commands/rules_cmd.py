"""Rule listing command for rblint CLI."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from rblint.cli.formatters import SEVERITY_STYLES
from rblint.kernel.linting.models import Category
from rblint.stdlib.rules import all_rules

console = Console()

CLI_HELP = "List the built-in rules"


def rules(
    category: Annotated[
        str | None,
        typer.Option(
            "--category",
            help=f"Only list rules in this category ({', '.join(c.value for c in Category)})",
        ),
    ] = None,
) -> None:
    """List every built-in rule with its category and default severity."""
    listed = sorted(all_rules(), key=lambda rule: rule.rule_id)

    if category:
        wanted = category.strip().lower()
        known = {c.value.lower() for c in Category}
        if wanted not in known:
            console.print(
                f"[red]Unknown category '{category}'.[/red] "
                f"Choose from: {', '.join(c.value for c in Category)}"
            )
            raise typer.Exit(2)
        listed = [rule for rule in listed if rule.category.value.lower() == wanted]

    table = Table(show_header=True, border_style="dim")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("Sev", no_wrap=True)
    table.add_column("Description")

    for rule in listed:
        style = SEVERITY_STYLES[rule.severity]
        table.add_row(
            rule.rule_id,
            rule.category.value,
            f"[{style}]{rule.severity.code}[/{style}]",
            rule.description,
        )

    console.print(table)
    console.print(f"[bold]{len(listed)}[/bold] rule(s)")
