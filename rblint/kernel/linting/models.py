"""Core models for the rblint linting framework."""

from __future__ import annotations

import dataclasses
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from pathlib import Path
from typing import Any

from rblint.kernel.exceptions import ValidationError

RULE_ID_SEPARATOR = "/"


class Severity(IntEnum):
    """Diagnostic severity, ordered from least to most severe."""

    INFO = 0
    REFACTOR = 1
    CONVENTION = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5

    @property
    def code(self) -> str:
        """Single-character code used in compact output."""
        return _SEVERITY_CODES[self]

    @classmethod
    def parse(cls, name: str) -> Severity:
        """Look up a severity by its (case-insensitive) name.

        Raises
        ------
        ValueError
            If ``name`` is not a severity name
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(s.name.lower() for s in cls)
            raise ValueError(f"Unknown severity {name!r}. Choose from: {choices}") from None

    def __str__(self) -> str:
        return self.code

    def __format__(self, format_spec: str) -> str:
        return format(self.code, format_spec)


_SEVERITY_CODES = {
    Severity.INFO: "I",
    Severity.REFACTOR: "R",
    Severity.CONVENTION: "C",
    Severity.WARNING: "W",
    Severity.ERROR: "E",
    Severity.FATAL: "F",
}


class Category(StrEnum):
    """Subject area a rule belongs to."""

    LAYOUT = "Layout"
    STYLE = "Style"
    LINT = "Lint"
    NAMING = "Naming"
    METRICS = "Metrics"


def validate_rule_id(rule_id: str) -> str:
    """Check the ``Category/Name`` identifier contract and return the id.

    Raises
    ------
    ValidationError
        If the id does not contain exactly one separator dividing two
        non-empty segments
    """
    parts = rule_id.split(RULE_ID_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        raise ValidationError("rule_id", "must look like 'Category/Name'", rule_id)
    return rule_id


@dataclass(frozen=True, slots=True)
class Location:
    """A 1-based position and a character span in a source file."""

    line: int
    column: int
    length: int = 0

    def __post_init__(self) -> None:
        """Validate location bounds.

        Raises
        ------
        ValidationError
            If line or column is below 1, or length is negative
        """
        if self.line < 1:
            raise ValidationError("line", "must be >= 1", self.line)
        if self.column < 1:
            raise ValidationError("column", "must be >= 1", self.column)
        if self.length < 0:
            raise ValidationError("length", "must be >= 0", self.length)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single issue reported by a rule."""

    rule_id: str
    message: str
    severity: Severity
    location: Location

    def __post_init__(self) -> None:
        validate_rule_id(self.rule_id)

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def with_severity(self, severity: Severity) -> Diagnostic:
        """Return a copy reported at ``severity``."""
        if severity is self.severity:
            return self
        return dataclasses.replace(self, severity=severity)

    def __str__(self) -> str:
        return f"{self.location}: {self.severity.code}: {self.message} ({self.rule_id})"


def sort_diagnostics(diagnostics: list[Diagnostic]) -> list[Diagnostic]:
    """Order diagnostics by (line, column); ties keep emission order."""
    return sorted(diagnostics, key=lambda d: (d.location.line, d.location.column))


@dataclass(frozen=True, slots=True)
class FileResult:
    """Diagnostics for one file, ordered by location."""

    path: Path
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True, slots=True)
class RunReport:
    """Aggregated, deterministically ordered results of a lint run."""

    file_results: tuple[FileResult, ...] = ()
    total_files: int = 0
    total_diagnostics: int = 0

    @classmethod
    def from_results(cls, results: list[FileResult]) -> RunReport:
        """Build a report from per-file results in any order.

        Results are sorted by the string form of their path so the report
        does not depend on input order or worker completion order.
        """
        ordered = tuple(sorted(results, key=lambda r: str(r.path)))
        return cls(
            file_results=ordered,
            total_files=len(ordered),
            total_diagnostics=sum(len(r.diagnostics) for r in ordered),
        )

    @property
    def has_diagnostics(self) -> bool:
        """True if any file produced a diagnostic."""
        return self.total_diagnostics > 0

    def iter_diagnostics(self) -> Iterator[tuple[Path, Diagnostic]]:
        """Yield ``(path, diagnostic)`` pairs in report order."""
        for result in self.file_results:
            for diagnostic in result.diagnostics:
                yield result.path, diagnostic

    def count_by_severity(self) -> dict[Severity, int]:
        """Number of diagnostics per severity, most severe first."""
        counts = Counter(d.severity for _, d in self.iter_diagnostics())
        return {s: counts[s] for s in sorted(counts, reverse=True)}

    def to_dict(self) -> dict[str, Any]:
        """Structured rendering used by the JSON formatter."""
        return {
            "file_count": self.total_files,
            "diagnostic_count": self.total_diagnostics,
            "diagnostics": [
                {
                    "path": str(path),
                    "line": d.location.line,
                    "column": d.location.column,
                    "length": d.location.length,
                    "severity": d.severity.code,
                    "message": d.message,
                    "rule_id": d.rule_id,
                }
                for path, d in self.iter_diagnostics()
            ],
        }
