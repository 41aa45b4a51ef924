"""Project classification: type, structure, entry points and health flags."""

from __future__ import annotations

import re
from typing import List, Sequence, Set

from ..manifests.scanner import NPM
from ..models import DetectedFramework, ManifestRecord, ProjectInsight, TreeItem
from ..tree import split_tree
from .signatures import BACKEND, BUILD, FRONTEND

FULL_STACK = "Full-Stack Application"
FRONTEND_APP = "Frontend Application"
BACKEND_SERVICE = "Backend Service / API"
LIBRARY = "Library / Package"
CLI_TOOL = "CLI Tool"
APPLICATION = "Application"
GENERIC_PROJECT = "Project"

MONOREPO = "Monorepo"
MULTI_MODULE = "Multi-Module"
FRONTEND_BACKEND = "Multi-Module (Frontend + Backend)"
SINGLE_MODULE = "Single Module"

_ROOT_BUCKET = "root"

_NPM_ENTRY_CANDIDATES = (
    "src/index.ts",
    "src/index.js",
    "src/main.ts",
    "src/main.tsx",
    "src/app.ts",
    "index.ts",
    "index.js",
    "server.ts",
    "server.js",
)

_GLOBAL_ENTRY_CANDIDATES = (
    "main.py",
    "app.py",
    "manage.py",
    "main.go",
    "cmd/main.go",
    "src/main.rs",
    "src/lib.rs",
)

_KEY_DIRECTORY_NAMES = frozenset(
    {
        "src", "lib", "app", "api", "pages", "components", "services",
        "utils", "hooks", "models", "controllers", "routes", "middleware",
        "public", "static", "assets", "config", "scripts", "test", "tests",
        "docs", "packages", "apps", "frontend", "backend", "server", "client",
    }
)

_CONFIG_FILE = re.compile(
    r"^(\..+rc\.?(js|json|yml|yaml|cjs|mjs)?|tsconfig.*\.json|jest\.config.*|vite\.config.*"
    r"|webpack\.config.*|next\.config.*|nuxt\.config.*|tailwind\.config.*|postcss\.config.*"
    r"|babel\.config.*|\.env\.example|Makefile|Dockerfile|docker-compose.*|\.gitignore"
    r"|\.editorconfig|\.prettierrc.*|\.eslintrc.*)$"
)

_TEST_DIRECTORY_NAMES = ("test", "tests", "__tests__", "spec", "specs")
_TEST_FILE = re.compile(
    r"(\.(test|spec)\.(ts|tsx|js|jsx|py|rb)$|(^|/)test_[^/]+\.py$|_test\.go$)"
)
_CI_FILE_MARKERS = (".github/workflows/", ".gitlab-ci", "Jenkinsfile", ".circleci")
_DOCS_FILE = re.compile(r"^(README|CONTRIBUTING|CHANGELOG|docs/)", re.IGNORECASE)
_DOCKER_FILE = re.compile(r"(Dockerfile|docker-compose)", re.IGNORECASE)
_LICENSE_FILE = re.compile(r"^LICENSE", re.IGNORECASE)
_CLI_FILE = re.compile(r"^(cli|bin)/")


class ProjectClassifier:
    """Derives a ``ProjectInsight`` from the tree, manifests and detected frameworks."""

    def classify(
        self,
        items: Sequence[TreeItem],
        manifests: Sequence[ManifestRecord],
        frameworks: Sequence[DetectedFramework],
    ) -> ProjectInsight:
        files, directories = split_tree(items)
        return ProjectInsight(
            project_type=detect_project_type(frameworks, files, directories),
            structure=detect_structure(directories, manifests),
            frameworks=list(frameworks),
            build_tools=[fw.name for fw in frameworks if fw.category == BUILD],
            has_tests=has_tests(files, directories),
            has_ci=has_ci(files, directories),
            has_docs=has_docs(files, directories),
            has_docker=any(_DOCKER_FILE.search(path) for path in files),
            has_license=any(_LICENSE_FILE.match(path) for path in files),
            entry_points=find_entry_points(files, manifests),
            config_files=[path for path in files if is_config_file(path)],
            key_directories=find_key_directories(directories),
        )


def detect_project_type(
    frameworks: Sequence[DetectedFramework],
    files: Sequence[str],
    directories: Sequence[str],
) -> str:
    """First matching rule wins: stack categories, then layout conventions."""
    has_frontend = any(fw.category == FRONTEND for fw in frameworks)
    has_backend = any(fw.category == BACKEND for fw in frameworks)

    if has_frontend and has_backend:
        return FULL_STACK
    if has_frontend:
        return FRONTEND_APP
    if has_backend:
        return BACKEND_SERVICE
    if "index.d.ts" in files or any(d in ("lib", "src/lib") for d in directories):
        return LIBRARY
    if any(_CLI_FILE.match(path) for path in files):
        return CLI_TOOL
    if "src" in directories:
        return APPLICATION
    return GENERIC_PROJECT


def detect_structure(directories: Sequence[str], manifests: Sequence[ManifestRecord]) -> str:
    """Classify the layout from where manifests live and conventional directories."""
    parents: Set[str] = {manifest.directory or _ROOT_BUCKET for manifest in manifests}

    if len(parents) > 2:
        return MONOREPO
    # Workspace directories outrank the two-parent rule: packages/a + packages/b is a monorepo.
    if "packages" in directories or "apps" in directories:
        return MONOREPO
    if len(parents) == 2 and _ROOT_BUCKET not in parents:
        return MULTI_MODULE

    has_frontend = any(d in ("frontend", "client") for d in directories)
    has_backend = any(d in ("backend", "server", "api") for d in directories)
    if has_frontend and has_backend:
        return FRONTEND_BACKEND

    return SINGLE_MODULE


def find_entry_points(files: Sequence[str], manifests: Sequence[ManifestRecord]) -> List[str]:
    """Conventional entry files, relative to npm manifests and then repository-wide."""
    file_set = set(files)
    entries: List[str] = []

    for manifest in manifests:
        if manifest.ecosystem != NPM:
            continue
        base = manifest.directory
        for candidate in _NPM_ENTRY_CANDIDATES:
            full = f"{base}/{candidate}" if base else candidate
            if full in file_set:
                entries.append(full)
                break

    entries.extend(candidate for candidate in _GLOBAL_ENTRY_CANDIDATES if candidate in file_set)
    return list(dict.fromkeys(entries))


def is_config_file(path: str) -> bool:
    return bool(_CONFIG_FILE.match(path.rsplit("/", 1)[-1]))


def find_key_directories(directories: Sequence[str]) -> List[str]:
    return [
        path
        for path in directories
        if path.rsplit("/", 1)[-1] in _KEY_DIRECTORY_NAMES and path.count("/") <= 1
    ]


def has_tests(files: Sequence[str], directories: Sequence[str]) -> bool:
    if any(
        d == name or d.endswith(f"/{name}") for d in directories for name in _TEST_DIRECTORY_NAMES
    ):
        return True
    return any(_TEST_FILE.search(path) for path in files)


def has_ci(files: Sequence[str], directories: Sequence[str]) -> bool:
    if any(".github/workflows" in d for d in directories):
        return True
    return any(marker in path for path in files for marker in _CI_FILE_MARKERS)


def has_docs(files: Sequence[str], directories: Sequence[str]) -> bool:
    if any(d in ("docs", "doc") for d in directories):
        return True
    return any(_DOCS_FILE.match(path) for path in files)


__all__ = [
    "ProjectClassifier",
    "detect_project_type",
    "detect_structure",
    "find_entry_points",
    "find_key_directories",
    "has_ci",
    "has_docs",
    "has_tests",
    "is_config_file",
]
