from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging
import os
from pathlib import Path

from a11yaudit.errors import RootDirectoryMissing

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")
# Dependency, build and native platform trees never hold analyzable UI source.
HARD_EXCLUDED_DIRS = frozenset({"node_modules", "build", "dist", ".git", "android", "ios"})
GENERATED_FILE_SUFFIXES = (".min.js", ".bundle.js", ".map")


def collect(
    root: str | os.PathLike[str],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    excludes: Iterable[str] = (),
    max_file_size_kb: int = 0,
) -> Iterator[Path]:
    """Yield analyzable source files under ``root``, depth-first.

    The root is validated eagerly so a missing root fails the run before any
    work is scheduled; the walk itself is lazy.
    """
    root_path = Path(root)
    if not root_path.exists():
        raise RootDirectoryMissing(str(root_path))
    ext_set = _normalize_extensions(extensions)
    excluded = HARD_EXCLUDED_DIRS | set(excludes)

    if root_path.is_file():
        return iter([root_path] if _is_target(root_path, ext_set, max_file_size_kb) else [])

    try:
        os.listdir(root_path)
    except OSError as exc:
        raise RootDirectoryMissing(str(root_path), exc.strerror or str(exc)) from exc
    return _walk(root_path, ext_set, excluded, max_file_size_kb)


def _walk(root: Path, ext_set: set[str], excluded: set[str] | frozenset[str], max_file_size_kb: int) -> Iterator[Path]:
    visited: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root, topdown=True, onerror=_log_walk_error, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in visited:
            dirnames[:] = []
            continue
        visited.add(real)

        dir_path = Path(dirpath)
        dirnames[:] = sorted(
            name
            for name in dirnames
            if name not in excluded and os.path.realpath(dir_path / name) not in visited
        )
        for filename in sorted(filenames):
            file_path = dir_path / filename
            if _is_target(file_path, ext_set, max_file_size_kb):
                yield file_path


def _is_target(path: Path, ext_set: set[str], max_file_size_kb: int) -> bool:
    name_lower = path.name.lower()
    if name_lower.endswith(GENERATED_FILE_SUFFIXES):
        return False
    if path.suffix.lower() not in ext_set:
        return False
    if max_file_size_kb > 0:
        try:
            size = path.stat().st_size
        except OSError:
            # Unreadable files are still yielded so the read failure is reported.
            return True
        if size > max_file_size_kb * 1024:
            logger.debug("Skipping %s: larger than %d KB", path, max_file_size_kb)
            return False
    return True


def _normalize_extensions(extensions: Iterable[str]) -> set[str]:
    return {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}


def _log_walk_error(exc: OSError) -> None:
    logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc.strerror or exc)
