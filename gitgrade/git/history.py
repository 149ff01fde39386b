"""Commit history summary for a cloned repository."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable, Optional

from ..logging import get_logger
from ..models import GitHistory
from ._runner import CommandRunner, run_command

logger = get_logger("git.history")


class GitHistoryAnalyzer:
    """Collects commit count, contributor count and last commit date."""

    def __init__(self, runner: CommandRunner | None = None, *, timeout: float = 30.0) -> None:
        self._runner = runner or run_command
        self.timeout = timeout

    def analyze(self, root: Path | str) -> Optional[GitHistory]:
        repo = Path(root)
        if not (repo / ".git").exists():
            logger.debug("No .git directory under %s; skipping history", repo)
            return None

        commits_raw = self._run(["git", "rev-list", "--count", "HEAD"], repo)
        shortlog_raw = self._run(["git", "shortlog", "-sn", "--all", "HEAD"], repo)
        last_raw = self._run(["git", "log", "-1", "--format=%cd"], repo)

        return GitHistory(
            total_commits=_parse_int(commits_raw),
            contributors=_count_lines(shortlog_raw),
            last_commit=(last_raw or "").strip() or None,
        )

    def _run(self, args: Iterable[str], cwd: Path) -> Optional[str]:
        args = list(args)
        try:
            return self._runner(args, cwd=cwd, timeout=self.timeout)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("git command %s failed: %s", " ".join(args), exc)
            return None


def _parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _count_lines(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    return sum(1 for line in raw.splitlines() if line.strip())


__all__ = ["GitHistoryAnalyzer"]
