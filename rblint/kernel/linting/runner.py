"""Parallel file processing and linting engine."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from rblint.kernel.linting.models import Diagnostic, FileResult, RunReport, Severity
from rblint.kernel.linting.registry import RuleRegistry
from rblint.kernel.linting.rules import Rule, run_rules
from rblint.kernel.linting.source import TextBuffer
from rblint.kernel.logging import get_logger

logger = get_logger(__name__)


def default_worker_count() -> int:
    """Worker threads used when the caller does not choose."""
    return min(32, (os.cpu_count() or 1) + 4)


class Runner:
    """Runs the registry's enabled rules over files and aggregates the results.

    The registry must not be modified while :meth:`run` executes; the
    enabled-rule list and severity overrides are snapshotted at its start.
    """

    def __init__(self, registry: RuleRegistry, max_workers: int | None = None) -> None:
        """Initialize the runner.

        Args
        ----
            registry: Rules to run, with enable/disable decisions finalized
            max_workers: Thread pool size; ``1`` runs in the calling thread
        """
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.registry = registry
        self.max_workers = max_workers

    def check_buffer(self, buffer: TextBuffer) -> list[Diagnostic]:
        """Run every enabled rule against an in-memory buffer."""
        return run_rules(
            self.registry.enabled_rules(), buffer, self.registry.severity_overrides
        )

    def check_file(self, path: str | Path) -> FileResult | None:
        """Check a single file with all enabled rules.

        Returns
        -------
        FileResult | None
            None when the path is not a readable regular UTF-8 file
        """
        return self._check_file(
            Path(path), self.registry.enabled_rules(), self.registry.severity_overrides
        )

    def run(self, paths: Iterable[str | Path]) -> RunReport:
        """Check every path and return a deterministically ordered report.

        Files are processed in parallel; results are re-sorted by path after
        all workers finish, so completion order never shows in the report.
        """
        targets = [Path(p) for p in paths]
        rules = self.registry.enabled_rules()
        overrides = self.registry.severity_overrides
        logger.debug("Checking {} file(s) with {} rule(s)", len(targets), len(rules))

        workers = self.max_workers or default_worker_count()
        if workers == 1 or len(targets) <= 1:
            outcomes = [self._check_file(path, rules, overrides) for path in targets]
        else:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="rblint") as pool:
                outcomes = list(
                    pool.map(lambda path: self._check_file(path, rules, overrides), targets)
                )

        report = RunReport.from_results([r for r in outcomes if r is not None])
        logger.info(
            "{} file(s) inspected, {} diagnostic(s) found",
            report.total_files,
            report.total_diagnostics,
        )
        return report

    @staticmethod
    def _check_file(
        path: Path, rules: Sequence[Rule], overrides: Mapping[str, Severity]
    ) -> FileResult | None:
        try:
            if not path.is_file():
                logger.debug("Skipping {}: not a regular file", path)
                return None
            buffer = TextBuffer.from_path(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping {}: {}", path, e)
            return None

        diagnostics = run_rules(rules, buffer, overrides)
        logger.debug("{}: {} diagnostic(s)", path, len(diagnostics))
        return FileResult(path=path, diagnostics=tuple(diagnostics))
