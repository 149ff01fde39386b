"""Git collaborators: repository acquisition and history inspection."""

from .clone import CloneError, RepoFetcher
from .history import GitHistoryAnalyzer

__all__ = ["CloneError", "GitHistoryAnalyzer", "RepoFetcher"]
