"""Corpus walking: enumerate every regular file under a repository root."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from .logging import get_logger
from .models import FileEntry, RepoSnapshot

logger = get_logger("scanner")


def _validate_root(root: Path, original: str | os.PathLike[str]) -> None:
    if not root.exists():
        raise FileNotFoundError(f"Repository path not found: {original}")
    if not root.is_dir():
        raise NotADirectoryError(f"Repository path is not a directory: {original}")
    if not os.access(root, os.R_OK | os.X_OK):
        raise PermissionError(f"Repository path is not readable: {original}")


def _is_regular(path: Path) -> bool:
    try:
        mode = path.lstat().st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode)


def _log_walk_error(error: OSError) -> None:
    logger.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror)


def _iter_entries(root: Path, excluded: frozenset[str]) -> Iterator[FileEntry]:
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        if excluded:
            dirnames[:] = [name for name in dirnames if name not in excluded]
        current_dir = Path(dirpath)
        for filename in filenames:
            path = current_dir / filename
            if not _is_regular(path):
                continue
            yield FileEntry(path=path, extension=path.suffix, is_regular=True)


def walk(root: str | os.PathLike[str], *, exclude_dirs: Iterable[str] = ()) -> Iterator[FileEntry]:
    """Return a lazy iterator over the regular files beneath ``root``.

    The root is validated before the iterator is returned, so a missing or
    unreadable root raises immediately rather than on first iteration.
    Symlinked directories are not followed and symlinked files are skipped.
    """
    root_path = Path(root).expanduser()
    _validate_root(root_path, root)
    return _iter_entries(root_path, frozenset(exclude_dirs))


class RepoScanner:
    """Walks a repository once and hands every phase the same file list."""

    def __init__(self, exclude_dirs: Sequence[str] = ()) -> None:
        self.exclude_dirs = tuple(exclude_dirs)

    def scan(self, root: str | os.PathLike[str]) -> RepoSnapshot:
        """Return a snapshot of all regular files under ``root``."""
        root_path = Path(root).expanduser().resolve()
        entries = tuple(walk(root_path, exclude_dirs=self.exclude_dirs))
        logger.debug("Walker discovered %d files under %s", len(entries), root_path)
        return RepoSnapshot(root=root_path, entries=entries)


__all__ = ["RepoScanner", "walk"]
