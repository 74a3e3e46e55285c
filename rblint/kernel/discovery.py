"""Ruby source file discovery.

Expands the paths given on the command line into the sorted list of files
the runner should check, honouring ``AllCops.Exclude`` globs.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Iterator
from pathlib import Path

from rblint.kernel.logging import get_logger

RUBY_EXTENSIONS = frozenset({".rb", ".rake", ".gemspec", ".ru"})
RUBY_FILENAMES = frozenset({"Gemfile", "Rakefile", "Guardfile", "Capfile"})
SKIP_DIRS = frozenset({"node_modules"})

logger = get_logger(__name__)


def is_ruby_file(path: Path) -> bool:
    """Check whether a path names a Ruby source file by extension or name."""
    return path.suffix in RUBY_EXTENSIONS or path.name in RUBY_FILENAMES


def _relative_posix(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def is_excluded(path: Path, patterns: Iterable[str], root: Path | None = None) -> bool:
    """Match a path against exclusion globs.

    Patterns are matched against the path relative to ``root`` in posix
    form. ``**/`` may also match zero directories, so ``vendor/**/*``
    excludes ``vendor/a.rb`` as well as ``vendor/x/a.rb``.
    """
    rel = _relative_posix(path, root or Path.cwd())
    for pattern in patterns:
        candidates = {pattern, pattern.replace("**/", "")}
        if any(fnmatch.fnmatchcase(rel, p) for p in candidates):
            return True
    return False


def _walk(directory: Path) -> Iterator[Path]:
    for entry in sorted(directory.iterdir()):
        if entry.name.startswith(".") or entry.name in SKIP_DIRS:
            continue
        if entry.is_dir() and not entry.is_symlink():
            yield from _walk(entry)
        elif entry.is_file() and is_ruby_file(entry):
            yield entry


def discover_ruby_files(
    paths: Iterable[str | Path],
    exclude: Iterable[str] = (),
    root: str | Path | None = None,
) -> list[Path]:
    """Expand files and directories into a sorted, de-duplicated file list.

    Parameters
    ----------
    paths : Iterable[str | Path]
        Files and directories to lint
    exclude : Iterable[str]
        Glob patterns of files to leave out
    root : str | Path | None
        Directory exclusion patterns are relative to (defaults to cwd)

    Returns
    -------
    list[Path]
        Ruby files, sorted by their string form
    """
    patterns = list(exclude)
    base = Path(root) if root is not None else Path.cwd()
    found: dict[str, Path] = {}

    for raw in paths:
        path = Path(raw)
        try:
            is_file, is_dir = path.is_file(), path.is_dir()
        except OSError as e:
            logger.debug("Ignoring {}: {}", path, e)
            continue

        if is_file:
            candidates: Iterable[Path] = [path] if is_ruby_file(path) else []
        elif is_dir:
            try:
                candidates = list(_walk(path))
            except OSError as e:
                logger.warning("Cannot read directory {}: {}", path, e)
                continue
        else:
            logger.debug("Ignoring {}: no such file or directory", path)
            continue

        for candidate in candidates:
            if patterns and is_excluded(candidate, patterns, base):
                logger.debug("Excluded {}", candidate)
                continue
            found.setdefault(str(candidate), candidate)

    return [found[key] for key in sorted(found)]
