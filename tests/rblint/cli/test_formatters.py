"""Tests for rblint.cli.formatters module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from rich.text import Text

from rblint.cli.formatters import (
    FORMATTERS,
    format_compact,
    format_json,
    format_simple,
    get_formatter,
    pluralize,
    summary_line,
)
from rblint.kernel.linting.models import Diagnostic, FileResult, Location, RunReport, Severity


def _diagnostic(line: int, column: int, rule_id: str = "Lint/Debugger") -> Diagnostic:
    return Diagnostic(
        rule_id=rule_id,
        message="Remove debugger entry point `byebug`.",
        severity=Severity.WARNING,
        location=Location(line, column, 6),
    )


@pytest.fixture
def report() -> RunReport:
    return RunReport.from_results([
        FileResult(Path("lib/b.rb"), (_diagnostic(3, 1), _diagnostic(7, 5))),
        FileResult(Path("lib/a.rb")),
    ])


class TestSummary:
    def test_pluralize(self) -> None:
        assert pluralize(0, "file") == "0 files"
        assert pluralize(1, "file") == "1 file"
        assert pluralize(2, "offense") == "2 offenses"

    def test_summary_line(self, report: RunReport) -> None:
        assert summary_line(report) == "2 files inspected, 2 offenses detected"

    def test_summary_line_singular(self) -> None:
        single = RunReport.from_results([FileResult(Path("a.rb"), (_diagnostic(1, 1),))])
        assert summary_line(single) == "1 file inspected, 1 offense detected"


class TestFormatSimple:
    def test_groups_by_file(self, report: RunReport) -> None:
        output = format_simple(report)
        assert isinstance(output, Text)
        assert output.plain.splitlines() == [
            "lib/b.rb:",
            "3:1: W: Remove debugger entry point `byebug`. (Lint/Debugger)",
            "7:5: W: Remove debugger entry point `byebug`. (Lint/Debugger)",
            "",
            "2 files inspected, 2 offenses detected",
        ]

    def test_clean_report(self) -> None:
        clean = RunReport.from_results([FileResult(Path("a.rb"))])
        assert format_simple(clean).plain == "1 file inspected, 0 offenses detected"


class TestFormatCompact:
    def test_one_line_per_diagnostic(self, report: RunReport) -> None:
        assert format_compact(report).splitlines() == [
            "lib/b.rb:3:1: W: Remove debugger entry point `byebug`. (Lint/Debugger)",
            "lib/b.rb:7:5: W: Remove debugger entry point `byebug`. (Lint/Debugger)",
        ]

    def test_empty(self) -> None:
        assert format_compact(RunReport()) == ""


class TestFormatJson:
    def test_structure(self, report: RunReport) -> None:
        data = json.loads(format_json(report))
        assert data["file_count"] == 2
        assert data["diagnostic_count"] == 2
        assert data["diagnostics"][0] == {
            "path": "lib/b.rb",
            "line": 3,
            "column": 1,
            "length": 6,
            "severity": "W",
            "message": "Remove debugger entry point `byebug`.",
            "rule_id": "Lint/Debugger",
        }


class TestGetFormatter:
    @pytest.mark.parametrize("name", list(FORMATTERS))
    def test_known(self, name: str) -> None:
        assert get_formatter(name) is FORMATTERS[name]

    def test_case_insensitive(self) -> None:
        assert get_formatter("JSON") is format_json

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown format 'xml'"):
            get_formatter("xml")
