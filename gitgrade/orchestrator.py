"""Pipeline orchestration: run every analysis phase for one repository."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Optional

from .analyzers import (
    ComplexityAnalyzer,
    CoverageEstimator,
    DependencyAnalyzer,
    SmellAnalyzer,
    check_readme,
)
from .config import GitGradeConfig
from .git import GitHistoryAnalyzer, RepoFetcher
from .llm.runner import LLMRunner
from .logging import get_logger
from .models import AnalysisReport
from .reporting import RoadmapWriter, build_resume_bullets
from .repo_scanner import RepoScanner
from .scoring import aggregate


class Orchestrator:
    """Coordinates the analysis phases; each phase finishes before the next starts."""

    def __init__(
        self,
        config: GitGradeConfig | None = None,
        *,
        scanner: RepoScanner | None = None,
        complexity_analyzer: ComplexityAnalyzer | None = None,
        smell_analyzer: SmellAnalyzer | None = None,
        dependency_analyzer: DependencyAnalyzer | None = None,
        coverage_estimator: CoverageEstimator | None = None,
        history_analyzer: GitHistoryAnalyzer | None = None,
        fetcher: RepoFetcher | None = None,
        llm_runner: LLMRunner | None = None,
    ) -> None:
        self.config = config or GitGradeConfig()
        analysis = self.config.analysis
        self.scanner = scanner or RepoScanner(exclude_dirs=analysis.exclude_dirs)
        self.complexity_analyzer = complexity_analyzer or ComplexityAnalyzer(workers=analysis.workers)
        self.smell_analyzer = smell_analyzer or SmellAnalyzer(workers=analysis.workers)
        self.dependency_analyzer = dependency_analyzer or DependencyAnalyzer(analysis.manifests)
        self.coverage_estimator = coverage_estimator or CoverageEstimator(
            frozenset(analysis.source_extensions)
        )
        self.history_analyzer = history_analyzer or GitHistoryAnalyzer()
        self.fetcher = fetcher or RepoFetcher()
        self._llm_runner = llm_runner
        self.logger = get_logger("orchestrator")

    def analyze(self, path: str | Path, *, include_history: Optional[bool] = None) -> AnalysisReport:
        """Analyze a local repository and return its report."""
        if include_history is None:
            include_history = self.config.analysis.include_history

        snapshot = self.scanner.scan(path)
        root = snapshot.root
        self.logger.info("Analyzing repository at %s (%d files)", root, len(snapshot.entries))

        self.logger.info("Running security scan and complexity analysis...")
        complexity, findings = self.complexity_analyzer.analyze(snapshot.entries)

        self.logger.info("Analyzing dependencies...")
        dependencies = self.dependency_analyzer.detect(root)

        history = None
        if include_history:
            self.logger.info("Analyzing git history...")
            history = self.history_analyzer.analyze(root)

        self.logger.info("Detecting code smells...")
        smells = self.smell_analyzer.analyze(snapshot.entries)

        self.logger.info("Checking README quality...")
        readme = check_readme(root, candidates=self.config.analysis.readme_candidates)

        self.logger.info("Estimating test coverage...")
        coverage = self.coverage_estimator.estimate_entries(snapshot.entries)

        self.logger.info("Calculating quality score...")
        quality = aggregate(complexity, findings, dependencies)

        self.logger.debug(
            "Scores: overall=%d security=%d documentation=%d organization=%d dependencies=%d",
            quality.overall,
            quality.security,
            quality.documentation,
            quality.organization,
            quality.dependency_management,
        )

        return AnalysisReport(
            root=str(root),
            security=tuple(findings),
            complexity=complexity,
            dependencies=dependencies,
            code_smells=tuple(smells),
            readme_quality=readme,
            test_coverage=coverage,
            quality_score=quality,
            git_history=history,
        )

    def analyze_remote(
        self,
        url: str,
        *,
        with_roadmap: bool = False,
        include_history: Optional[bool] = None,
    ) -> AnalysisReport:
        """Clone ``url``, analyze it, and remove the clone afterwards."""
        self.logger.info("Analyzing repository: %s", url)
        with self.fetcher.fetch(url) as root:
            report = self.analyze(root, include_history=include_history)
        report = self.enrich(report, with_roadmap=with_roadmap)
        self.logger.info("Analysis complete!")
        return report

    def enrich(self, report: AnalysisReport, *, with_roadmap: bool = False) -> AnalysisReport:
        """Attach resume bullets and, when requested, the AI roadmap."""
        roadmap = None
        if with_roadmap:
            self.logger.info("Generating AI insights...")
            roadmap = RoadmapWriter(self._resolve_llm_runner()).write(report)
        report = dataclasses.replace(report, ai_roadmap=roadmap)
        self.logger.info("Generating resume bullets...")
        return dataclasses.replace(report, resume_bullets=build_resume_bullets(report))

    def _resolve_llm_runner(self) -> LLMRunner:
        if self._llm_runner is None:
            self._llm_runner = LLMRunner.from_config(self.config.llm)
        return self._llm_runner


__all__ = ["Orchestrator"]
