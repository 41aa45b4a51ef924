"""Contract for collaborators that supply repository data to the pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from ..models import RepositoryInfo, TreeItem


class RepositorySource(ABC):
    """Provides metadata, the flat tree listing and file contents for one repository.

    Implementations own all I/O (disk, network, batching, fallbacks). The
    analysis pipeline only ever sees the resolved values.
    """

    @abstractmethod
    def repository_info(self) -> RepositoryInfo:
        """Return repository metadata."""

    @abstractmethod
    def list_tree(self) -> List[TreeItem]:
        """Return every file and directory of the repository as a flat list."""

    @abstractmethod
    def read_files(self, paths: Sequence[str]) -> Dict[str, str]:
        """Return ``path -> text`` for the requested paths; unreadable paths are omitted."""
