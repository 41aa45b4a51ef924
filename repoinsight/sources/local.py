"""Repository source backed by a local checkout."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterator, List, Sequence

from ..logging import get_logger
from ..models import DIRECTORY, FILE, RepositoryInfo, TreeItem
from .base import RepositorySource

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


class LocalRepositorySource(RepositorySource):
    """Lists and reads files from a directory on disk."""

    def __init__(self, root: str | Path, exclude_paths: Sequence[str] = ()) -> None:
        self.root = Path(root).expanduser().resolve()
        if not self.root.is_dir():
            raise FileNotFoundError(f"Repository path not found: {self.root}")
        self._patterns = [pattern.strip().strip("/") for pattern in exclude_paths if pattern.strip("/ ")]
        self.logger = get_logger("sources.local")

    def repository_info(self) -> RepositoryInfo:
        return RepositoryInfo(name=self.root.name or "repository", url=self.root.as_uri())

    def list_tree(self) -> List[TreeItem]:
        items = list(self._walk())
        self.logger.debug("Listed %d tree items under %s", len(items), self.root)
        return items

    def read_files(self, paths: Sequence[str]) -> Dict[str, str]:
        contents: Dict[str, str] = {}
        for rel_path in paths:
            target = (self.root / rel_path).resolve()
            if not target.is_relative_to(self.root):
                self.logger.warning("Refusing to read %s outside the repository", rel_path)
                continue
            try:
                contents[rel_path] = target.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.debug("Could not read %s: %s", rel_path, exc)
        return contents

    def _walk(self) -> Iterator[TreeItem]:
        for dirpath, dirnames, filenames in os.walk(self.root):
            current = Path(dirpath)
            rel_dir = current.relative_to(self.root).as_posix() if current != self.root else ""

            kept_dirs = []
            for name in sorted(dirnames):
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if name in _EXCLUDED_DIRS or self._is_excluded(rel_path):
                    continue
                kept_dirs.append(name)
                yield TreeItem(path=rel_path, kind=DIRECTORY)
            dirnames[:] = kept_dirs

            for name in sorted(filenames):
                if name in _EXCLUDED_FILES:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if self._is_excluded(rel_path):
                    continue
                try:
                    size = (current / name).stat().st_size
                except OSError:
                    size = None
                yield TreeItem(path=rel_path, kind=FILE, size=size)

    def _is_excluded(self, rel_path: str) -> bool:
        for pattern in self._patterns:
            if "/" in pattern:
                if fnmatchcase(rel_path, pattern) or rel_path.startswith(f"{pattern}/"):
                    return True
            elif any(fnmatchcase(part, pattern) for part in rel_path.split("/")):
                return True
        return False


__all__ = ["LocalRepositorySource"]
