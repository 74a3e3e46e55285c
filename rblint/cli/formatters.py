"""Renderers that turn a run report into console output."""

from __future__ import annotations

import json
from collections.abc import Callable

from rich.text import Text

from rblint.kernel.linting.models import RunReport, Severity

SEVERITY_STYLES = {
    Severity.INFO: "blue",
    Severity.REFACTOR: "cyan",
    Severity.CONVENTION: "magenta",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
    Severity.FATAL: "bold red",
}


def pluralize(count: int, noun: str) -> str:
    """Return ``"1 file"`` / ``"2 files"`` style phrases."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def summary_line(report: RunReport) -> str:
    files = pluralize(report.total_files, "file")
    offenses = pluralize(report.total_diagnostics, "offense")
    return f"{files} inspected, {offenses} detected"


def format_simple(report: RunReport) -> Text:
    """Group diagnostics under a header per file, then a summary line."""
    output = Text()
    for result in report.file_results:
        if not result.diagnostics:
            continue
        output.append(f"{result.path}:\n", style="bold")
        for diagnostic in result.diagnostics:
            output.append(f"{diagnostic.location}: ")
            output.append(diagnostic.severity.code, style=SEVERITY_STYLES[diagnostic.severity])
            output.append(f": {diagnostic.message} ")
            output.append(f"({diagnostic.rule_id})", style="dim")
            output.append("\n")
        output.append("\n")
    output.append(summary_line(report), style=None if report.has_diagnostics else "green")
    return output


def format_compact(report: RunReport) -> str:
    """One ``path:line:col: C: message (Rule/Id)`` line per diagnostic."""
    return "\n".join(f"{path}:{diagnostic}" for path, diagnostic in report.iter_diagnostics())


def format_json(report: RunReport) -> str:
    return json.dumps(report.to_dict(), indent=2)


FORMATTERS: dict[str, Callable[[RunReport], Text | str]] = {
    "simple": format_simple,
    "compact": format_compact,
    "json": format_json,
}


def get_formatter(name: str) -> Callable[[RunReport], Text | str]:
    """Look up a formatter by name.

    Raises
    ------
    ValueError
        If no formatter has that name
    """
    try:
        return FORMATTERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown format '{name}'. Available: {', '.join(FORMATTERS)}"
        ) from None
