"""Configuration models and loading."""

from rblint.kernel.config.loader import (
    CONFIG_FILENAMES,
    find_config_file,
    load_config,
    load_config_file,
    parse_config,
)
from rblint.kernel.config.models import GlobalConfig, LintConfig, RuleConfig

__all__ = [
    "CONFIG_FILENAMES",
    "GlobalConfig",
    "LintConfig",
    "RuleConfig",
    "find_config_file",
    "load_config",
    "load_config_file",
    "parse_config",
]
