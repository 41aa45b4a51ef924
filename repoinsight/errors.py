"""Exception types raised by repoinsight."""

from __future__ import annotations

from typing import Optional


class RepoInsightError(RuntimeError):
    """Base class for errors the CLI reports without a traceback."""


class TreeError(RepoInsightError):
    """Raised when the repository tree listing is malformed."""

    def __init__(self, message: str, *, index: Optional[int] = None) -> None:
        self.index = index
        if index is not None:
            message = f"tree item {index}: {message}"
        super().__init__(message)


class ConfigError(RepoInsightError):
    """Raised when the configuration file cannot be parsed."""


__all__ = ["ConfigError", "RepoInsightError", "TreeError"]
