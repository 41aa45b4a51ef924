"""Repository data sources consumed by the analysis pipeline."""

from __future__ import annotations

from .base import RepositorySource
from .local import LocalRepositorySource

__all__ = ["LocalRepositorySource", "RepositorySource"]
