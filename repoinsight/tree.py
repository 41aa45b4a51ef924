"""Validation and derived views of the flat repository tree listing."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Tuple

from .errors import TreeError
from .languages import DEFAULT_COLOR, LANGUAGE_COLORS, file_extension, language_for
from .models import DIRECTORY, FILE, FileNode, FileStats, LanguageStats, TreeItem

_KIND_ALIASES = {
    "file": FILE,
    "blob": FILE,
    "directory": DIRECTORY,
    "dir": DIRECTORY,
    "tree": DIRECTORY,
}

# Generated or vendored locations excluded from the nested tree and statistics.
_EXCLUDED_PATHS = (
    ".git",
    "node_modules",
    "dist",
    "build",
    ".next",
    "coverage",
    "__pycache__",
    ".pytest_cache",
    "target",
    "vendor",
    ".gradle",
    ".idea",
    ".vscode",
    ".settings",
    "bin",
    "obj",
)

_LARGEST_FILES_LIMIT = 10


def parse_tree(raw_items: Iterable[Any]) -> List[TreeItem]:
    """Validate raw tree entries and convert them into ``TreeItem`` objects.

    Entries may already be ``TreeItem`` instances or mappings with ``path``,
    ``kind`` (or the Git-style ``type`` with ``blob``/``tree``) and an
    optional ``size``. Any malformed entry raises ``TreeError`` so upstream
    integration defects surface immediately.
    """
    items: List[TreeItem] = []
    seen: set[str] = set()
    for index, raw in enumerate(raw_items):
        item = _coerce_item(raw, index)
        if item.path in seen:
            raise TreeError(f"duplicate path '{item.path}'", index=index)
        seen.add(item.path)
        items.append(item)
    return items


def _coerce_item(raw: Any, index: int) -> TreeItem:
    if isinstance(raw, TreeItem):
        path, kind, size = raw.path, raw.kind, raw.size
    elif isinstance(raw, Mapping):
        path = raw.get("path")
        kind = raw.get("kind", raw.get("type"))
        size = raw.get("size")
    else:
        raise TreeError(f"expected a mapping, got {type(raw).__name__}", index=index)

    if not isinstance(path, str) or not path.strip("/"):
        raise TreeError("missing or empty 'path'", index=index)
    normalised_kind = _KIND_ALIASES.get(kind) if isinstance(kind, str) else None
    if normalised_kind is None:
        raise TreeError(f"unknown kind {kind!r} for '{path}'", index=index)
    if size is not None and (isinstance(size, bool) or not isinstance(size, int) or size < 0):
        raise TreeError(f"invalid size {size!r} for '{path}'", index=index)

    return TreeItem(path=path.strip("/"), kind=normalised_kind, size=size)


def split_tree(items: Iterable[TreeItem]) -> Tuple[List[str], List[str]]:
    """Return ``(file_paths, directory_paths)`` preserving tree order."""
    files: List[str] = []
    directories: List[str] = []
    for item in items:
        if item.is_file:
            files.append(item.path)
        else:
            directories.append(item.path)
    return files, directories


def _round_half_up(value: float) -> int:
    # Halves round up; round() would send 2.5 to 2.
    return math.floor(value + 0.5)


def _is_excluded(path: str) -> bool:
    return any(path == excluded or path.startswith(f"{excluded}/") for excluded in _EXCLUDED_PATHS)


def build_file_tree(items: Iterable[TreeItem]) -> List[FileNode]:
    """Nest the flat listing into ``FileNode`` objects rooted at the repository root."""
    kept = [item for item in items if not _is_excluded(item.path)]

    nodes: Dict[str, FileNode] = {}
    for item in kept:
        name = item.path.rsplit("/", 1)[-1]
        nodes[item.path] = FileNode(
            path=item.path,
            name=name,
            kind=item.kind,
            size=item.size,
            extension=file_extension(name) if item.is_file else None,
            children=[] if item.is_directory else None,
        )

    roots: List[FileNode] = []
    for item in kept:
        node = nodes[item.path]
        parent_path, _, _ = item.path.rpartition("/")
        if not parent_path:
            roots.append(node)
            continue
        parent = nodes.get(parent_path)
        if parent is not None and parent.children is not None:
            parent.children.append(node)
    return roots


def compute_language_stats(items: Iterable[TreeItem]) -> List[LanguageStats]:
    """Language distribution by bytes, sorted largest first."""
    totals: Dict[str, List[int]] = {}
    total_size = 0
    for item in items:
        if not item.is_file or _is_excluded(item.path):
            continue
        language = language_for(item.path)
        if language is None:
            continue
        size = item.size or 0
        total_size += size
        bucket = totals.setdefault(language, [0, 0])
        bucket[0] += 1
        bucket[1] += size

    divisor = total_size or 1
    stats = [
        LanguageStats(
            name=name,
            file_count=file_count,
            total_size=size,
            percentage=_round_half_up(size / divisor * 1000) / 10,
            color=LANGUAGE_COLORS.get(name, DEFAULT_COLOR),
        )
        for name, (file_count, size) in totals.items()
    ]
    return sorted(stats, key=lambda stat: stat.total_size, reverse=True)


def compute_file_stats(items: Iterable[TreeItem]) -> FileStats:
    stats = FileStats()
    sizes: List[Tuple[str, int]] = []
    for item in items:
        if _is_excluded(item.path):
            continue
        if item.is_file:
            size = item.size or 0
            stats.total_files += 1
            stats.total_size += size
            sizes.append((item.path, size))
        else:
            stats.total_directories += 1

    sizes.sort(key=lambda entry: entry[1], reverse=True)
    stats.largest_files = sizes[:_LARGEST_FILES_LIMIT]
    if stats.total_files:
        stats.avg_file_size = _round_half_up(stats.total_size / stats.total_files)
    return stats


__all__ = [
    "build_file_tree",
    "compute_file_stats",
    "compute_language_stats",
    "parse_tree",
    "split_tree",
]
