"""Configuration loader for rblint.

Discovery order:

1. Explicit path passed by the caller (``--config``)
2. ``RBLINT_CONFIG`` environment variable
3. ``.rblint.yml`` then ``.rubocop.yml``, searched from the working
   directory upward to the filesystem root

No file found means an empty configuration; a file that exists but cannot
be parsed is a hard failure.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pydantic
import yaml

from rblint.kernel.config.models import GlobalConfig, LintConfig, RuleConfig
from rblint.kernel.exceptions import ConfigurationError, ResourceNotFoundError
from rblint.kernel.linting.models import RULE_ID_SEPARATOR
from rblint.kernel.logging import get_logger

CONFIG_FILENAMES = (".rblint.yml", ".rubocop.yml")
CONFIG_ENV_VAR = "RBLINT_CONFIG"
GLOBAL_SECTION = "AllCops"

logger = get_logger(__name__)


def find_config_file(start_dir: str | Path | None = None) -> Path | None:
    """Search ``start_dir`` and its parents for a config file.

    Returns
    -------
    Path | None
        First match, or None when no directory up to the root has one
    """
    current = Path(start_dir) if start_dir is not None else Path.cwd()
    current = current.resolve()
    for directory in (current, *current.parents):
        for name in CONFIG_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def parse_config(data: Any, source: str | None = None) -> LintConfig:
    """Validate already-loaded YAML data into a :class:`LintConfig`.

    Raises
    ------
    ConfigurationError
        If the data does not have the expected shape
    """
    label = source or "<config>"
    if data is None:
        return LintConfig(source=source)
    if not isinstance(data, dict):
        raise ConfigurationError(label, "top level must be a mapping")

    all_cops: GlobalConfig | None = None
    rules: dict[str, RuleConfig] = {}

    for key, value in data.items():
        key = str(key)
        try:
            if key == GLOBAL_SECTION:
                if value is not None and not isinstance(value, dict):
                    raise ConfigurationError(label, f"'{GLOBAL_SECTION}' must be a mapping")
                all_cops = GlobalConfig.model_validate(value or {})
            elif RULE_ID_SEPARATOR in key:
                if value is not None and not isinstance(value, dict):
                    raise ConfigurationError(label, f"section '{key}' must be a mapping")
                rules[key] = RuleConfig.model_validate(value or {})
            else:
                logger.debug("Ignoring unsupported config key {!r} in {}", key, label)
        except pydantic.ValidationError as e:
            raise ConfigurationError(label, f"invalid section '{key}': {e}") from e

    return LintConfig(all_cops=all_cops, rules=rules, source=source)


def load_config_file(path: str | Path) -> LintConfig:
    """Read and parse a YAML configuration file.

    Raises
    ------
    ResourceNotFoundError
        If the file does not exist
    ConfigurationError
        If the file cannot be read or parsed
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ResourceNotFoundError("config file", str(config_path))
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(str(config_path), f"cannot read file: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(str(config_path), f"invalid YAML: {e}") from e

    config = parse_config(data, source=str(config_path))
    logger.debug("Loaded configuration {}", config.summary())
    return config


def load_config(path: str | Path | None = None, start_dir: str | Path | None = None) -> LintConfig:
    """Load configuration following the discovery order.

    Parameters
    ----------
    path : str | Path | None
        Explicit config path; takes precedence over everything else
    start_dir : str | Path | None
        Directory to start the upward search from (defaults to cwd)

    Returns
    -------
    LintConfig
        Parsed configuration, empty when nothing was found
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = env_path
    if path is not None:
        return load_config_file(path)

    found = find_config_file(start_dir)
    if found is None:
        logger.debug("No configuration file found; using defaults")
        return LintConfig()
    return load_config_file(found)
