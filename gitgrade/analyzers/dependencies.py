"""Dependency manifest detection."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping

from ..logging import get_logger
from ..models import DependencyManifestResult, ManifestEntry
from .registries import DEFAULT_MANIFESTS

logger = get_logger("analyzers.dependencies")


def _count_lines(path: Path) -> int:
    return path.read_bytes().count(b"\n")


class DependencyAnalyzer:
    """Checks the repository root for well-known package-manager manifests.

    The dependency count is the manifest's newline count, an estimate rather
    than a parse of the manifest format.
    """

    def __init__(self, manifests: Mapping[str, str] = DEFAULT_MANIFESTS) -> None:
        self.manifests = dict(manifests)

    def detect(self, root: Path | str) -> DependencyManifestResult:
        root_path = Path(root)
        found: Dict[str, ManifestEntry] = {}
        total = 0
        for manager, filename in self.manifests.items():
            manifest = root_path / filename
            if not manifest.is_file():
                continue
            count = _count_lines(manifest)
            logger.debug("Found %s manifest %s (%d lines)", manager, filename, count)
            found[manager] = ManifestEntry(filename=filename, estimated_dependency_count=count)
            total += count
        return DependencyManifestResult(package_managers=found, total_dependencies=total)


def detect(root: Path | str, manifests: Mapping[str, str] = DEFAULT_MANIFESTS) -> DependencyManifestResult:
    """Convenience wrapper around :class:`DependencyAnalyzer`."""
    return DependencyAnalyzer(manifests).detect(root)


__all__ = ["DependencyAnalyzer", "detect"]
