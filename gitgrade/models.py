"""Value objects produced by one analysis run.

Every object here is immutable and scoped to a single run. ``to_dict`` renders
the nested key/value schema that report consumers (CLI, HTTP service, AI
summarizer) depend on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FileEntry:
    """A regular file discovered by the corpus walker."""

    path: Path
    extension: str
    is_regular: bool = True

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class LanguageStats:
    """Line and structure counters for one file extension."""

    total_lines: int = 0
    blank_lines: int = 0
    comment_lines: int = 0
    function_count: int = 0
    class_count: int = 0

    @property
    def code_lines(self) -> int:
        # Not clamped: a line can be both a comment line and contain code.
        return self.total_lines - self.blank_lines - self.comment_lines

    @property
    def comment_ratio(self) -> float:
        if self.total_lines <= 0:
            return 0.0
        return self.comment_lines / self.total_lines

    def __add__(self, other: "LanguageStats") -> "LanguageStats":
        if not isinstance(other, LanguageStats):
            return NotImplemented
        return LanguageStats(
            total_lines=self.total_lines + other.total_lines,
            blank_lines=self.blank_lines + other.blank_lines,
            comment_lines=self.comment_lines + other.comment_lines,
            function_count=self.function_count + other.function_count,
            class_count=self.class_count + other.class_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_lines": self.total_lines,
            "code_lines": self.code_lines,
            "blank_lines": self.blank_lines,
            "comment_lines": self.comment_lines,
            "functions": self.function_count,
            "classes": self.class_count,
            "comment_ratio": self.comment_ratio,
        }


@dataclass(frozen=True)
class ComplexityReport:
    """Per-extension statistics for the whole corpus."""

    total_files: int = 0
    languages: Mapping[str, LanguageStats] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_files": self.total_files,
            "languages": {ext: stats.to_dict() for ext, stats in self.languages.items()},
        }


@dataclass(frozen=True)
class Finding:
    """One security match tied to a file basename and a 1-based line."""

    file: str
    line: int
    issue: str
    severity: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "issue": self.issue,
            "severity": self.severity,
        }


@dataclass(frozen=True)
class SmellOccurrence:
    """Count of one smell pattern inside one file."""

    type: str
    file: str
    occurrences: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "file": self.file, "occurrences": self.occurrences}


@dataclass(frozen=True)
class ManifestEntry:
    """A package-manager manifest found at the repository root."""

    filename: str
    estimated_dependency_count: int
    found: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "found": self.found,
            "filename": self.filename,
            "estimated_dependency_count": self.estimated_dependency_count,
        }


@dataclass(frozen=True)
class DependencyManifestResult:
    """Manifests detected per package manager plus the running total."""

    package_managers: Mapping[str, ManifestEntry] = field(default_factory=dict)
    total_dependencies: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package_managers": {
                name: entry.to_dict() for name, entry in self.package_managers.items()
            },
            "total_dependencies": self.total_dependencies,
        }


@dataclass(frozen=True)
class ReadmeQuality:
    exists: bool
    score: int
    missing_sections: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exists": self.exists,
            "score": self.score,
            "missing_sections": list(self.missing_sections),
        }


@dataclass(frozen=True)
class TestCoverageEstimate:
    """Filename-based proxy for test coverage."""

    __test__ = False  # keep pytest from collecting this as a test class

    test_file_count: int = 0
    total_code_file_count: int = 0
    coverage_ratio: float = 0.0
    has_tests: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "test_file_count": self.test_file_count,
            "total_code_file_count": self.total_code_file_count,
            "coverage_ratio": self.coverage_ratio,
            "has_tests": self.has_tests,
        }


@dataclass(frozen=True)
class QualityBreakdown:
    """Weighted sub-scores and the overall score."""

    security: int
    documentation: int
    organization: int
    dependency_management: int
    overall: int
    security_issues: int = 0
    comment_ratio: float = 0.0
    total_files: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_score": self.overall,
            "breakdown": {
                "security": {"score": self.security, "issues": self.security_issues},
                "documentation": {
                    "score": self.documentation,
                    "comment_ratio": self.comment_ratio,
                },
                "organization": {"score": self.organization, "files": self.total_files},
                "dependency_management": {"score": self.dependency_management},
            },
        }


@dataclass(frozen=True)
class GitHistory:
    total_commits: Optional[int] = None
    contributors: Optional[int] = None
    last_commit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.total_commits is not None:
            data["total_commits"] = self.total_commits
        if self.contributors is not None:
            data["contributors"] = self.contributors
        if self.last_commit is not None:
            data["last_commit"] = self.last_commit
        return data


@dataclass(frozen=True)
class AnalysisReport:
    """Everything produced for one repository snapshot."""

    root: str
    security: Tuple[Finding, ...]
    complexity: ComplexityReport
    dependencies: DependencyManifestResult
    code_smells: Tuple[SmellOccurrence, ...]
    readme_quality: ReadmeQuality
    test_coverage: TestCoverageEstimate
    quality_score: QualityBreakdown
    git_history: Optional[GitHistory] = None
    ai_roadmap: Optional[str] = None
    resume_bullets: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "security": [finding.to_dict() for finding in self.security],
            "complexity": self.complexity.to_dict(),
            "dependencies": self.dependencies.to_dict(),
            "code_smells": [smell.to_dict() for smell in self.code_smells],
            "readme_quality": self.readme_quality.to_dict(),
            "test_coverage": self.test_coverage.to_dict(),
            "quality_score": self.quality_score.to_dict(),
        }
        if self.git_history is not None:
            data["git_history"] = self.git_history.to_dict()
        if self.ai_roadmap is not None:
            data["ai_roadmap"] = self.ai_roadmap
        if self.resume_bullets is not None:
            data["resume_bullets"] = self.resume_bullets
        return data


@dataclass(frozen=True)
class RepoSnapshot:
    """Materialized walk of a repository root, shared by every phase of a run."""

    root: Path
    entries: Tuple[FileEntry, ...]


__all__ = [
    "AnalysisReport",
    "ComplexityReport",
    "DependencyManifestResult",
    "FileEntry",
    "Finding",
    "GitHistory",
    "LanguageStats",
    "ManifestEntry",
    "QualityBreakdown",
    "ReadmeQuality",
    "RepoSnapshot",
    "SmellOccurrence",
    "TestCoverageEstimate",
]
