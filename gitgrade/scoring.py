"""Weighted quality score aggregation."""

from __future__ import annotations

import math
from typing import Sequence

from .models import ComplexityReport, DependencyManifestResult, Finding, QualityBreakdown

SECURITY_PENALTY_PER_FINDING = 5
SECURITY_PENALTY_CAP = 30
DOCUMENTATION_SCALE = 500

# Weights in percent; they must sum to 100.
WEIGHTS = {
    "security": 30,
    "documentation": 20,
    "organization": 30,
    "dependency_management": 20,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def security_score(findings: Sequence[Finding]) -> int:
    return 100 - min(SECURITY_PENALTY_CAP, SECURITY_PENALTY_PER_FINDING * len(findings))


def average_comment_ratio(complexity: ComplexityReport) -> float:
    """Unweighted mean of the per-extension comment ratios."""
    ratios = [stats.comment_ratio for stats in complexity.languages.values()]
    if not ratios:
        return 0.0
    return sum(ratios) / len(ratios)


def documentation_score(avg_ratio: float) -> int:
    return min(100, _round_half_up(DOCUMENTATION_SCALE * avg_ratio))


def organization_score(total_files: int) -> int:
    if total_files > 50:
        return 70
    if total_files > 20:
        return 85
    return 100


def dependency_management_score(dependencies: DependencyManifestResult) -> int:
    return 100 if dependencies.total_dependencies > 0 else 80


def overall_score(security: int, documentation: int, organization: int, dependency: int) -> int:
    """Weighted sum, computed in hundredths so rounding is exact."""
    weighted = (
        WEIGHTS["security"] * security
        + WEIGHTS["documentation"] * documentation
        + WEIGHTS["organization"] * organization
        + WEIGHTS["dependency_management"] * dependency
    )
    rounded = (weighted + 50) // 100
    return max(0, min(100, rounded))


def aggregate(
    complexity: ComplexityReport,
    security_findings: Sequence[Finding],
    dependencies: DependencyManifestResult,
) -> QualityBreakdown:
    """Combine scan results into the four sub-scores and the overall score."""
    avg_ratio = average_comment_ratio(complexity)
    sec = security_score(security_findings)
    doc = documentation_score(avg_ratio)
    org = organization_score(complexity.total_files)
    dep = dependency_management_score(dependencies)
    return QualityBreakdown(
        security=sec,
        documentation=doc,
        organization=org,
        dependency_management=dep,
        overall=overall_score(sec, doc, org, dep),
        security_issues=len(security_findings),
        comment_ratio=avg_ratio,
        total_files=complexity.total_files,
    )


__all__ = [
    "aggregate",
    "average_comment_ratio",
    "dependency_management_score",
    "documentation_score",
    "organization_score",
    "overall_score",
    "security_score",
]
