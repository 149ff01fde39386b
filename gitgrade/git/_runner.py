"""Subprocess runner shared by the git helpers."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, Optional

CommandRunner = Callable[..., str]


def run_command(
    args: Iterable[str],
    *,
    cwd: Optional[Path] = None,
    timeout: Optional[float] = None,
) -> str:
    """Run ``args`` and return stdout; raises ``subprocess.CalledProcessError`` on failure."""
    completed = subprocess.run(
        list(args),
        cwd=str(cwd) if cwd is not None else None,
        check=True,
        text=True,
        capture_output=True,
        timeout=timeout,
    )
    return completed.stdout
