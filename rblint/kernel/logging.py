"""Loguru setup shared by the kernel, the rules and the CLI.

Modules obtain a logger once at import time::

    from rblint.kernel.logging import get_logger

    logger = get_logger(__name__)
    logger.debug("Skipping {}: not a regular file", path)

The CLI calls :func:`configure_logging` from its global callback; library
users who never do get a quiet WARNING-level console sink.
"""

from __future__ import annotations

import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from loguru import Logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_LEVELS: tuple[str, ...] = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}

_LINE_FORMATS = {
    "console": "{time:HH:mm:ss} {level: <8} {name} | {message}",
    "structured": (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level: <8}</level> "
        "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
    ),
}

# Settings of the active configuration and the loguru sink ids it installed
_CURRENT_CONFIG: dict[str, Any] | None = None
_HANDLER_IDS: list[int] = []


def normalize_level(level: str) -> LogLevel:
    """Turn a user-supplied level name (``warn``, ``Info``...) into a loguru level.

    Raises
    ------
    ValueError
        If the name is not a known level
    """
    name = level.strip().upper()
    name = _LEVEL_ALIASES.get(name, name)
    if name not in _LEVELS:
        raise ValueError(f"Unknown log level: {level!r}")
    return name  # type: ignore[return-value]


def _stream_sink(format: LogFormat) -> dict[str, Any]:
    """Keyword arguments for ``logger.add`` for the stderr sink of ``format``."""
    if format == "rich":
        handler = RichHandler(
            console=Console(stderr=True),
            markup=False,
            rich_tracebacks=True,
            show_path=False,
        )
        return {"sink": handler, "format": "{message}"}
    if format == "json":
        return {"sink": sys.stderr, "serialize": True}
    return {
        "sink": sys.stderr,
        "format": _LINE_FORMATS[format],
        "colorize": format == "structured" and sys.stderr.isatty(),
    }


def _remove_handlers() -> None:
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()


def configure_logging(
    level: LogLevel = "WARNING",
    format: LogFormat = "console",
    output_file: str | Path | None = None,
    force_reconfigure: bool = False,
) -> None:
    """Install rblint's log sinks.

    Calling again with the same arguments is a no-op unless
    ``force_reconfigure`` is set; the CLI forces it so each invocation
    writes to the streams that are current at that moment.

    Parameters
    ----------
    level : LogLevel, default="WARNING"
        Minimum level for every sink
    format : LogFormat, default="console"
        Layout of the stderr sink:
        - "console": one plain line per record
        - "structured": timestamped, coloured when stderr is a TTY
        - "json": one serialized record per line
        - "rich": rendered through a Rich handler
    output_file : str | Path | None, default=None
        Additional file receiving serialized JSON records
    force_reconfigure : bool, default=False
        Replace the sinks even if the settings are unchanged
    """
    global _CURRENT_CONFIG

    settings = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
    }
    if settings == _CURRENT_CONFIG and not force_reconfigure:
        return

    _remove_handlers()
    # loguru starts with its own DEBUG stderr sink (id 0)
    with suppress(ValueError):
        logger.remove(0)

    _HANDLER_IDS.append(logger.add(level=level, **_stream_sink(format)))

    if output_file:
        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _HANDLER_IDS.append(logger.add(path, level=level, serialize=True))

    _CURRENT_CONFIG = settings


@lru_cache(maxsize=128)
def get_logger(name: str) -> Logger:
    """Return the shared logger bound with ``module=name``.

    Installs the default sinks on first use if nothing configured logging yet.
    """
    if _CURRENT_CONFIG is None:
        configure_logging()
    return logger.bind(module=name)


def reset_logging() -> None:
    """Remove every sink installed here and forget the active settings."""
    global _CURRENT_CONFIG
    _remove_handlers()
    _CURRENT_CONFIG = None


__all__ = [
    "LogFormat",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "normalize_level",
    "reset_logging",
]
