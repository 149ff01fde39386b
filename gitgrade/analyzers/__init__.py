"""Heuristic scanners that make up the analysis engine."""

from __future__ import annotations

from .content import SmellAnalyzer, check_readme, scan_content
from .coverage import CoverageEstimator
from .dependencies import DependencyAnalyzer
from .lines import ComplexityAnalyzer, FileScan, scan_lines
from .registries import PatternError, PatternRule, Registry, build_registry

__all__ = [
    "ComplexityAnalyzer",
    "CoverageEstimator",
    "DependencyAnalyzer",
    "FileScan",
    "PatternError",
    "PatternRule",
    "Registry",
    "SmellAnalyzer",
    "build_registry",
    "check_readme",
    "scan_content",
    "scan_lines",
]
