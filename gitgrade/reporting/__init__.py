"""Natural-language renderings of an analysis report."""

from .resume import build_resume_bullets
from .roadmap import ROADMAP_UNAVAILABLE, RoadmapWriter, build_roadmap_prompt

__all__ = ["ROADMAP_UNAVAILABLE", "RoadmapWriter", "build_resume_bullets", "build_roadmap_prompt"]
