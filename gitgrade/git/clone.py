"""Repository acquisition: clone a remote into a throwaway directory."""

from __future__ import annotations

import re
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..logging import get_logger
from ._runner import CommandRunner, run_command

logger = get_logger("git.clone")

_URL_PATTERN = re.compile(r"^(?:(?:https?|ssh|git|file)://\S+|[\w.-]+@[\w.-]+:\S+)$")


class CloneError(RuntimeError):
    """Raised when a repository cannot be fetched."""


def is_remote_url(target: str) -> bool:
    return bool(_URL_PATTERN.match(target.strip()))


class RepoFetcher:
    """Clones repositories and removes the clone once the caller is done."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        workdir: Optional[Path] = None,
        timeout: float = 300.0,
    ) -> None:
        self._runner = runner or run_command
        self.workdir = workdir
        self.timeout = timeout

    @contextmanager
    def fetch(self, url: str) -> Iterator[Path]:
        """Clone ``url`` and yield the local root; the tree is deleted on exit."""
        url = url.strip()
        if not is_remote_url(url):
            raise CloneError(f"Unsupported repository URL: {url!r}")

        parent = Path(tempfile.mkdtemp(prefix="gitgrade_", dir=self.workdir))
        target = parent / "repo"
        try:
            logger.info("Cloning %s", url)
            try:
                self._runner(
                    ["git", "clone", "--quiet", "--", url, str(target)],
                    cwd=parent,
                    timeout=self.timeout,
                )
            except subprocess.CalledProcessError as exc:
                detail = (exc.stderr or "").strip() if isinstance(exc.stderr, str) else ""
                raise CloneError(f"Failed to clone repository: {detail or exc}") from exc
            except (OSError, subprocess.SubprocessError) as exc:
                raise CloneError(f"Failed to clone repository: {exc}") from exc
            yield target
        finally:
            logger.debug("Removing clone at %s", parent)
            shutil.rmtree(parent, ignore_errors=True)


__all__ = ["CloneError", "RepoFetcher", "is_remote_url"]
