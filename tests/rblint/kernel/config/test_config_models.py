"""Tests for rblint.kernel.config.models."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from rblint.kernel.config.models import GlobalConfig, LintConfig, RuleConfig


class TestRuleConfig:
    def test_aliases(self) -> None:
        entry = RuleConfig.model_validate({"Enabled": False, "Severity": "Warning"})
        assert entry.enabled is False
        assert entry.severity == "warning"

    def test_defaults_mean_no_override(self) -> None:
        entry = RuleConfig()
        assert entry.enabled is None
        assert entry.severity is None

    def test_extra_options_kept(self) -> None:
        entry = RuleConfig.model_validate({"Max": 20})
        assert entry.model_extra == {"Max": 20}

    def test_unknown_severity(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            RuleConfig.model_validate({"Severity": "nope"})

    def test_frozen(self) -> None:
        entry = RuleConfig(enabled=True)
        with pytest.raises(pydantic.ValidationError):
            entry.enabled = False  # type: ignore[misc]


class TestGlobalConfig:
    def test_aliases(self) -> None:
        cfg = GlobalConfig.model_validate({"Exclude": ["vendor/**/*"], "TargetRubyVersion": 3.3})
        assert cfg.exclude == ["vendor/**/*"]
        assert cfg.target_ruby_version == 3.3


class TestLintConfig:
    def test_empty(self) -> None:
        config = LintConfig()
        assert config.exclude == []
        assert config.root is None
        assert config.target_ruby_version is None
        assert config.is_rule_enabled("Lint/Debugger") is None
        assert config.severity_override("Lint/Debugger") is None

    def test_root_is_source_directory(self, tmp_path: Path) -> None:
        config = LintConfig(source=str(tmp_path / ".rblint.yml"))
        assert config.root == tmp_path

    def test_exclude_is_a_copy(self) -> None:
        config = LintConfig(all_cops=GlobalConfig(exclude=["db/**/*"]))
        config.exclude.append("tmp/**/*")
        assert config.exclude == ["db/**/*"]

    def test_summary(self) -> None:
        config = LintConfig(
            all_cops=GlobalConfig(exclude=["db/**/*"], target_ruby_version=3.1),
            rules={"Lint/Debugger": RuleConfig(enabled=False)},
            source="x.yml",
        )
        assert config.summary() == {
            "source": "x.yml",
            "rules": 1,
            "exclude": ["db/**/*"],
            "target_ruby_version": 3.1,
        }
