"""rblint - a parallel, configurable linter for Ruby source files.

Files are loaded into text buffers, checked by a fixed set of independent
rules and the diagnostics merged into a deterministically ordered report.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("rblint")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

__all__ = ["__version__"]
