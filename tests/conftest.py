"""Configuration file for pytest containing fixtures and configuration.

This module provides fixtures that can be used across multiple test files:
- isolate_environment: keeps the user's config and log sinks out of tests
- ruby_project: a small on-disk Ruby project
"""

from pathlib import Path

import pytest

from rblint.kernel.config.loader import CONFIG_ENV_VAR
from rblint.kernel.logging import reset_logging


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Drop RBLINT_CONFIG and any log sinks installed by a test."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    yield
    reset_logging()


@pytest.fixture
def ruby_project(tmp_path: Path) -> Path:
    """Fixture that creates a project with one clean and one offending file."""
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "clean.rb").write_text(
        "# frozen_string_literal: true\n\nputs 'hello'\n", encoding="utf-8"
    )
    (tmp_path / "lib" / "debug.rb").write_text(
        "# frozen_string_literal: true\n\nbinding.pry\n", encoding="utf-8"
    )
    return tmp_path
