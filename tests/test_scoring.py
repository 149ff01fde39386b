"""Tests for gitgrade.scoring."""

from __future__ import annotations

import pytest

from gitgrade.models import (
    ComplexityReport,
    DependencyManifestResult,
    Finding,
    LanguageStats,
    ManifestEntry,
)
from gitgrade.scoring import (
    aggregate,
    documentation_score,
    organization_score,
    overall_score,
    security_score,
)


def _findings(count: int) -> list[Finding]:
    return [Finding(file="a.py", line=i + 1, issue="Hardcoded IP Detected", severity="HIGH") for i in range(count)]


def _deps(total: int) -> DependencyManifestResult:
    if not total:
        return DependencyManifestResult()
    return DependencyManifestResult(
        package_managers={"pip": ManifestEntry(filename="requirements.txt", estimated_dependency_count=total)},
        total_dependencies=total,
    )


def test_sixty_files_without_comments_or_dependencies() -> None:
    complexity = ComplexityReport(
        total_files=60,
        languages={".py": LanguageStats(total_lines=400), ".js": LanguageStats(total_lines=100)},
    )

    result = aggregate(complexity, [], _deps(0))

    assert result.organization == 70
    assert result.dependency_management == 80
    assert result.security == 100
    assert result.documentation == 0
    assert result.overall == 67


def test_empty_repository_defaults() -> None:
    result = aggregate(ComplexityReport(), [], _deps(0))

    assert (result.security, result.documentation, result.organization, result.dependency_management) == (
        100,
        0,
        100,
        80,
    )
    assert result.overall == 76
    assert result.comment_ratio == 0.0


@pytest.mark.parametrize(("count", "expected"), [(0, 100), (1, 95), (5, 75), (6, 70), (40, 70)])
def test_security_penalty_is_capped(count: int, expected: int) -> None:
    assert security_score(_findings(count)) == expected


@pytest.mark.parametrize(
    ("files", "expected"), [(0, 100), (20, 100), (21, 85), (50, 85), (51, 70), (500, 70)]
)
def test_organization_steps(files: int, expected: int) -> None:
    assert organization_score(files) == expected


def test_documentation_uses_unweighted_mean_across_extensions() -> None:
    complexity = ComplexityReport(
        total_files=2,
        languages={
            ".py": LanguageStats(total_lines=1000, comment_lines=100),
            ".sh": LanguageStats(total_lines=10, comment_lines=0),
        },
    )

    result = aggregate(complexity, [], _deps(0))

    assert result.comment_ratio == pytest.approx(0.05)
    assert result.documentation == 25


def test_documentation_is_capped_at_100() -> None:
    assert documentation_score(0.9) == 100


def test_documentation_rounds_half_up() -> None:
    assert documentation_score(0.001) == 1
    assert documentation_score(0.0009) == 0


def test_overall_rounds_half_up_exactly() -> None:
    # 0.3*95 + 0.2*25 + 0.3*85 + 0.2*100 = 79.0; 0.3*75 + 0.2*1 + 0.3*100 + 0.2*80 = 68.7
    assert overall_score(95, 25, 85, 100) == 79
    assert overall_score(75, 1, 100, 80) == 69
    # 0.3*95 + 0.2*0 + 0.3*100 + 0.2*80 = 74.5
    assert overall_score(95, 0, 100, 80) == 75


def test_breakdown_shares_post_penalty_security_value() -> None:
    complexity = ComplexityReport(total_files=3, languages={".py": LanguageStats(total_lines=10, comment_lines=2)})

    result = aggregate(complexity, _findings(2), _deps(12))

    assert result.security == 90
    assert result.documentation == 100
    assert result.dependency_management == 100
    assert result.overall == round(0.3 * 90 + 0.2 * 100 + 0.3 * 100 + 0.2 * 100)
    assert result.to_dict() == {
        "overall_score": 97,
        "breakdown": {
            "security": {"score": 90, "issues": 2},
            "documentation": {"score": 100, "comment_ratio": pytest.approx(0.2)},
            "organization": {"score": 100, "files": 3},
            "dependency_management": {"score": 100},
        },
    }
