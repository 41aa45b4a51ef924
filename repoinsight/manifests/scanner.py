"""Locate dependency manifests inside a flat tree listing."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

from ..models import ManifestLocation, TreeItem

NPM = "npm"
MAVEN = "maven"
GRADLE = "gradle"
PIP = "pip"
PIPENV = "pipenv"
POETRY = "poetry"
CARGO = "cargo"
GO = "go"
GEMFILE = "gemfile"
COMPOSER = "composer"
NUGET = "nuget"

# Checked in order; the first pattern that matches a file's basename wins.
MANIFEST_PATTERNS: Tuple[Tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^package\.json$"), NPM),
    (re.compile(r"^pom\.xml$"), MAVEN),
    (re.compile(r"^build\.gradle(\.kts)?$"), GRADLE),
    (re.compile(r"^requirements\.txt$"), PIP),
    (re.compile(r"^Pipfile$"), PIPENV),
    (re.compile(r"^pyproject\.toml$"), POETRY),
    (re.compile(r"^Cargo\.toml$"), CARGO),
    (re.compile(r"^go\.mod$"), GO),
    (re.compile(r"^Gemfile$"), GEMFILE),
    (re.compile(r"^composer\.json$"), COMPOSER),
    (re.compile(r"^.+\.csproj$"), NUGET),
)

ECOSYSTEMS: Tuple[str, ...] = tuple(ecosystem for _, ecosystem in MANIFEST_PATTERNS)

EXCLUDED_DIRS = frozenset(
    {
        "node_modules",
        "vendor",
        ".git",
        "dist",
        "build",
        "target",
        "__pycache__",
    }
)


class ManifestScanner:
    """Finds manifest files of the known ecosystems, skipping vendored directories."""

    def __init__(self, extra_excluded_dirs: Sequence[str] = ()) -> None:
        extra = {name.strip("/") for name in extra_excluded_dirs if name.strip("/")}
        self._excluded = EXCLUDED_DIRS | extra

    def scan(self, items: Iterable[TreeItem]) -> List[ManifestLocation]:
        locations: List[ManifestLocation] = []
        for item in items:
            if not item.is_file or self._is_excluded(item.path):
                continue
            ecosystem = match_ecosystem(item.path)
            if ecosystem is not None:
                locations.append(ManifestLocation(path=item.path, ecosystem=ecosystem))
        return locations

    def _is_excluded(self, path: str) -> bool:
        directories = path.split("/")[:-1]
        return any(part in self._excluded for part in directories)


def match_ecosystem(path: str) -> str | None:
    """Return the ecosystem tag for a manifest path, or None."""
    name = path.rsplit("/", 1)[-1]
    for pattern, ecosystem in MANIFEST_PATTERNS:
        if pattern.match(name):
            return ecosystem
    return None


__all__ = ["ECOSYSTEMS", "EXCLUDED_DIRS", "MANIFEST_PATTERNS", "ManifestScanner", "match_ecosystem"]
