"""Resume-style bullet points summarizing a report."""

from __future__ import annotations

from typing import List

from ..models import AnalysisReport


def build_resume_bullets(report: AnalysisReport) -> str:
    languages = report.complexity.languages
    total_lines = sum(max(stats.code_lines, 0) for stats in languages.values())

    bullets: List[str] = []
    headline = f"Developed production-grade software with {total_lines}+ lines of code"
    if languages:
        headline += f" across {len(languages)} languages"
    bullets.append(headline)

    findings = len(report.security)
    if findings == 0:
        bullets.append(
            "Implemented secure coding practices with zero security vulnerabilities detected"
        )
    else:
        bullets.append(
            f"Conducted comprehensive security audit identifying {findings} areas for improvement"
        )

    bullets.append(
        f"Maintained code quality score of {report.quality_score.overall}/100 through best practices"
    )

    history = report.git_history
    if history is not None and history.total_commits is not None:
        line = f"Contributed {history.total_commits} commits"
        if history.contributors is not None:
            line += f" with {history.contributors} collaborators"
        bullets.append(line)

    coverage = report.test_coverage
    if coverage.has_tests:
        bullets.append(
            f"Achieved {int(coverage.coverage_ratio)}% test coverage with automated testing"
        )

    return "".join(f"• {bullet}\n" for bullet in bullets)


__all__ = ["build_resume_bullets"]
