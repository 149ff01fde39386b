"""Throwaway repositories for analyzer and pipeline tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from gitgrade.models import RepoSnapshot
from gitgrade.repo_scanner import RepoScanner


class RepoBuilder:
    """A ``repo/`` directory under tmp_path plus helpers to populate and scan it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()

    def _target(self, relative: str) -> Path:
        target = self.root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def write(self, files: Mapping[str, str]) -> None:
        """Write text files; indented triple-quoted bodies are dedented first."""
        for relative, body in files.items():
            text = textwrap.dedent(body).lstrip("\n")
            self._target(relative).write_text(text, encoding="utf-8")

    def write_bytes(self, relative: str, content: bytes) -> Path:
        target = self._target(relative)
        target.write_bytes(content)
        return target

    def mark_git_checkout(self) -> None:
        self.write({".git/HEAD": "ref: refs/heads/main\n"})

    def scan(self, *exclude_dirs: str) -> RepoSnapshot:
        return RepoScanner(exclude_dirs=exclude_dirs).scan(self.root)

    def path(self) -> Path:
        return self.root


__all__ = ["RepoBuilder"]
