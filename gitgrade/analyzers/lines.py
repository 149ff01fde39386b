"""Line-oriented scanning: line classification, structure counts and security findings."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import ComplexityReport, FileEntry, Finding, LanguageStats
from .registries import (
    CLASS,
    COMMENT_MARKERS,
    FUNCTION,
    SECURITY_RULES,
    STRUCTURE_RULES,
    Registry,
)

logger = get_logger("analyzers.lines")


@dataclass(frozen=True)
class FileScan:
    """Result of scanning a single file line by line."""

    extension: str
    stats: LanguageStats
    findings: Tuple[Finding, ...]


def _decode(raw: bytes) -> str:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return ""


def _is_comment(line: str) -> bool:
    # Substring test only; markers inside string literals count too.
    return any(marker in line for marker in COMMENT_MARKERS)


def scan_lines(
    entry: FileEntry,
    *,
    security: Registry = SECURITY_RULES,
    structure: Registry = STRUCTURE_RULES,
) -> Optional[FileScan]:
    """Scan ``entry`` line by line.

    Returns ``None`` when the file cannot be read; the caller skips it and the
    run continues.
    """
    function_rules = structure.by_category(FUNCTION)
    class_rules = structure.by_category(CLASS)
    security_rules = security.rules()

    total = blank = comments = functions = classes = 0
    findings: List[Finding] = []

    try:
        with entry.path.open("rb") as handle:
            for line_number, raw in enumerate(handle, start=1):
                total += 1
                line = _decode(raw)
                if not line.strip():
                    blank += 1
                    continue
                if _is_comment(line):
                    comments += 1
                for rule in security_rules:
                    if rule.search(line):
                        findings.append(
                            Finding(
                                file=entry.name,
                                line=line_number,
                                issue=f"{rule.label} Detected",
                                severity=rule.severity or "HIGH",
                            )
                        )
                functions += sum(1 for rule in function_rules if rule.search(line))
                classes += sum(1 for rule in class_rules if rule.search(line))
    except OSError as exc:
        logger.warning("Skipping unreadable file %s: %s", entry.path, exc)
        return None

    stats = LanguageStats(
        total_lines=total,
        blank_lines=blank,
        comment_lines=comments,
        function_count=functions,
        class_count=classes,
    )
    return FileScan(extension=entry.extension, stats=stats, findings=tuple(findings))


def merge_scans(scans: Iterable[Optional[FileScan]]) -> Tuple[ComplexityReport, List[Finding]]:
    """Reduce per-file scans into corpus-wide stats and findings.

    Files without an extension contribute findings but are left out of the
    language buckets and the file total.
    """
    languages: Dict[str, LanguageStats] = {}
    findings: List[Finding] = []
    total_files = 0
    for scan in scans:
        if scan is None:
            continue
        findings.extend(scan.findings)
        if not scan.extension:
            continue
        total_files += 1
        languages[scan.extension] = languages.get(scan.extension, LanguageStats()) + scan.stats
    return ComplexityReport(total_files=total_files, languages=languages), findings


class ComplexityAnalyzer:
    """Runs :func:`scan_lines` over a corpus and merges the results."""

    def __init__(
        self,
        *,
        security: Registry = SECURITY_RULES,
        structure: Registry = STRUCTURE_RULES,
        workers: int = 1,
    ) -> None:
        self.security = security
        self.structure = structure
        self.workers = max(1, workers)

    def analyze(self, entries: Sequence[FileEntry]) -> Tuple[ComplexityReport, List[Finding]]:
        if self.workers > 1 and len(entries) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                scans = list(pool.map(self._scan, entries))
        else:
            scans = [self._scan(entry) for entry in entries]
        return merge_scans(scans)

    def _scan(self, entry: FileEntry) -> Optional[FileScan]:
        return scan_lines(entry, security=self.security, structure=self.structure)


__all__ = ["ComplexityAnalyzer", "FileScan", "merge_scans", "scan_lines"]
