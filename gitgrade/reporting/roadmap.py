"""AI-written improvement roadmap."""

from __future__ import annotations

from typing import Protocol

from ..logging import get_logger
from ..models import AnalysisReport

logger = get_logger("reporting.roadmap")

ROADMAP_SYSTEM_PROMPT = (
    "You are an expert code reviewer. Analyze repository metrics and give "
    "concrete, prioritized advice."
)

ROADMAP_UNAVAILABLE = (
    "AI analysis unavailable. Please check your LLM configuration and network connection."
)


class PromptRunner(Protocol):
    def run(self, prompt: str, *, system: str | None = None) -> str:
        ...


def build_roadmap_prompt(report: AnalysisReport) -> str:
    """Render the report metrics the summarizer sees."""
    lines = [
        "Analyze this repository data and provide a detailed 5-step improvement roadmap.",
        "",
        "Repository Analysis:",
        f"- Total Files: {report.complexity.total_files}",
        f"- Security Issues: {len(report.security)}",
        f"- Test Coverage: {report.test_coverage.coverage_ratio:.1f}%",
        f"- README Score: {report.readme_quality.score}/100",
        f"- Code Smells: {len(report.code_smells)}",
        f"- Overall Quality Score: {report.quality_score.overall}/100",
        "",
        "Provide 5 specific, actionable steps to improve this codebase. Format each step clearly.",
    ]
    return "\n".join(lines)


class RoadmapWriter:
    """Asks the configured model for a roadmap, falling back to a fixed notice."""

    def __init__(self, runner: PromptRunner) -> None:
        self.runner = runner

    def write(self, report: AnalysisReport) -> str:
        prompt = build_roadmap_prompt(report)
        try:
            text = self.runner.run(prompt, system=ROADMAP_SYSTEM_PROMPT)
        except RuntimeError as exc:
            logger.warning("Roadmap generation failed: %s", exc)
            return ROADMAP_UNAVAILABLE
        if not text.strip():
            logger.warning("Roadmap generation returned no text")
            return ROADMAP_UNAVAILABLE
        return text.strip()


__all__ = ["ROADMAP_UNAVAILABLE", "RoadmapWriter", "build_roadmap_prompt"]
