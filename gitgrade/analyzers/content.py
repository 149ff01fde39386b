"""Whole-file scans: code smells and README completeness."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

from ..logging import get_logger
from ..models import FileEntry, ReadmeQuality, SmellOccurrence
from .registries import (
    DEFAULT_README_CANDIDATES,
    README_SECTION_RULES,
    SMELL_RULES,
    Registry,
)

logger = get_logger("analyzers.content")

README_NOT_FOUND = "README file not found"


def _read_text(path: Path) -> str:
    return path.read_bytes().decode("utf-8", errors="replace")


def scan_content(entry: FileEntry, rules: Registry = SMELL_RULES) -> Optional[List[SmellOccurrence]]:
    """Count non-overlapping smell matches in ``entry``.

    Rules with zero matches produce no record. Returns ``None`` when the file
    cannot be read.
    """
    try:
        content = _read_text(entry.path)
    except OSError as exc:
        logger.warning("Skipping unreadable file %s: %s", entry.path, exc)
        return None

    smells: List[SmellOccurrence] = []
    for rule in rules.rules():
        count = rule.count(content)
        if count > 0:
            smells.append(SmellOccurrence(type=rule.label, file=entry.name, occurrences=count))
    return smells


class SmellAnalyzer:
    """Applies the smell registry to every file of the corpus."""

    def __init__(self, rules: Registry = SMELL_RULES, *, workers: int = 1) -> None:
        self.rules = rules
        self.workers = max(1, workers)

    def analyze(self, entries: Sequence[FileEntry]) -> List[SmellOccurrence]:
        if self.workers > 1 and len(entries) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                results = list(pool.map(self._scan, entries))
        else:
            results = [self._scan(entry) for entry in entries]

        smells: List[SmellOccurrence] = []
        for result in results:
            if result:
                smells.extend(result)
        return smells

    def _scan(self, entry: FileEntry) -> Optional[List[SmellOccurrence]]:
        return scan_content(entry, self.rules)


def find_readme(root: Path, candidates: Sequence[str] = DEFAULT_README_CANDIDATES) -> Optional[Path]:
    """Return the README at ``root``: exact-case candidates first, then any case."""
    names = sorted(child.name for child in root.iterdir() if child.is_file())
    present = set(names)
    for candidate in candidates:
        if candidate in present:
            return root / candidate

    lowered = {candidate.lower() for candidate in candidates}
    for name in names:
        if name.lower() in lowered:
            return root / name
    return None


def check_readme(
    root: Path,
    *,
    candidates: Sequence[str] = DEFAULT_README_CANDIDATES,
    rules: Registry = README_SECTION_RULES,
) -> ReadmeQuality:
    """Score the repository README by the sections it appears to cover."""
    readme = find_readme(root, candidates)
    if readme is None:
        return ReadmeQuality(exists=False, score=0, missing_sections=(README_NOT_FOUND,))

    content = _read_text(readme)
    missing = [rule.label for rule in rules.rules() if not rule.search(content)]
    found = len(rules) - len(missing)
    score = (found * 100) // len(rules) if len(rules) else 0
    return ReadmeQuality(exists=True, score=score, missing_sections=tuple(missing))


__all__ = ["README_NOT_FOUND", "SmellAnalyzer", "check_readme", "find_readme", "scan_content"]
