"""Repository insight: manifests, frameworks, classification and architecture graphs."""

from __future__ import annotations

from .errors import ConfigError, RepoInsightError, TreeError
from .models import AnalysisResult, RepositoryInfo, TreeItem
from .pipeline import RepositoryAnalyzer, analyze_repository

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "ConfigError",
    "RepoInsightError",
    "RepositoryAnalyzer",
    "RepositoryInfo",
    "TreeError",
    "TreeItem",
    "__version__",
    "analyze_repository",
]
