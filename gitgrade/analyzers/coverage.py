"""Filename-based test coverage estimate."""

from __future__ import annotations

import os
from typing import AbstractSet, Iterable

from ..models import FileEntry, TestCoverageEstimate
from ..repo_scanner import walk
from .registries import DEFAULT_SOURCE_EXTENSIONS, TEST_FILENAME_RULES, Registry


class CoverageEstimator:
    """Classifies source files as test or production by name."""

    def __init__(
        self,
        source_extensions: AbstractSet[str] = DEFAULT_SOURCE_EXTENSIONS,
        rules: Registry = TEST_FILENAME_RULES,
    ) -> None:
        self.source_extensions = frozenset(source_extensions)
        self.rules = rules

    def is_test_file(self, name: str) -> bool:
        return any(rule.search(name) for rule in self.rules.rules())

    def estimate_entries(self, entries: Iterable[FileEntry]) -> TestCoverageEstimate:
        test_files = 0
        code_files = 0
        for entry in entries:
            if entry.extension not in self.source_extensions:
                continue
            code_files += 1
            if self.is_test_file(entry.name):
                test_files += 1

        ratio = (test_files / code_files * 100) if code_files else 0.0
        return TestCoverageEstimate(
            test_file_count=test_files,
            total_code_file_count=code_files,
            coverage_ratio=ratio,
            has_tests=test_files > 0,
        )

    def estimate(self, root: str | os.PathLike[str]) -> TestCoverageEstimate:
        return self.estimate_entries(walk(root))


def estimate(root: str | os.PathLike[str]) -> TestCoverageEstimate:
    """Walk ``root`` and estimate test coverage with the default tables."""
    return CoverageEstimator().estimate(root)


__all__ = ["CoverageEstimator", "estimate"]
