"""Core data models shared across repoinsight components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

FILE = "file"
DIRECTORY = "directory"


@dataclass
class TreeItem:
    """A single entry of the flat repository listing."""

    path: str
    kind: str
    size: Optional[int] = None

    @property
    def is_file(self) -> bool:
        return self.kind == FILE

    @property
    def is_directory(self) -> bool:
        return self.kind == DIRECTORY


@dataclass
class RepositoryInfo:
    """Repository metadata supplied by a source collaborator."""

    name: str
    description: Optional[str] = None
    language: Optional[str] = None
    url: Optional[str] = None
    default_branch: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "language": self.language,
            "url": self.url,
            "defaultBranch": self.default_branch,
        }


# Manifests and dependencies


@dataclass
class ManifestLocation:
    """A manifest file located in the tree, tagged with its ecosystem."""

    path: str
    ecosystem: str


@dataclass
class ManifestRecord:
    """Normalized dependencies parsed from one manifest file."""

    path: str
    ecosystem: str
    production: Dict[str, str] = field(default_factory=dict)
    development: Dict[str, str] = field(default_factory=dict)

    @property
    def total_count(self) -> int:
        return len(self.production) + len(self.development)

    @property
    def directory(self) -> str:
        """Containing directory of the manifest, ``""`` for the repo root."""
        head, _, _ = self.path.rpartition("/")
        return head

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "type": self.ecosystem,
            "production": dict(self.production),
            "development": dict(self.development),
            "totalCount": self.total_count,
        }


@dataclass
class DependencyInfo:
    """Aggregated dependency counts across every parsed manifest."""

    manifests: List[ManifestRecord] = field(default_factory=list)
    total_dependencies: int = 0
    total_dev_dependencies: int = 0

    @property
    def total_count(self) -> int:
        return self.total_dependencies + self.total_dev_dependencies

    def to_dict(self) -> Dict[str, Any]:
        return {
            "manifests": [manifest.to_dict() for manifest in self.manifests],
            "totalDependencies": self.total_dependencies,
            "totalDevDependencies": self.total_dev_dependencies,
            "totalCount": self.total_count,
        }


# Framework detection


@dataclass(frozen=True)
class Indicator:
    """One piece of evidence that a framework is in use."""

    kind: str
    pattern: str

    def describe(self) -> str:
        return f"{self.kind}: {self.pattern}"


@dataclass(frozen=True)
class FrameworkSignature:
    """Static detection rule for a framework or tool."""

    name: str
    category: str
    indicators: Tuple[Indicator, ...]


@dataclass
class DetectedFramework:
    """A framework whose signature matched at least one indicator."""

    name: str
    category: str
    confidence: float
    detected_from: str
    version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "category": self.category,
            "confidence": self.confidence,
            "detectedFrom": self.detected_from,
        }
        if self.version is not None:
            payload["version"] = self.version
        return payload


@dataclass
class ProjectInsight:
    """Classification of the project derived from tree, manifests and frameworks."""

    project_type: str
    structure: str
    frameworks: List[DetectedFramework] = field(default_factory=list)
    build_tools: List[str] = field(default_factory=list)
    has_tests: bool = False
    has_ci: bool = False
    has_docs: bool = False
    has_docker: bool = False
    has_license: bool = False
    entry_points: List[str] = field(default_factory=list)
    config_files: List[str] = field(default_factory=list)
    key_directories: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectType": self.project_type,
            "structure": self.structure,
            "frameworks": [framework.to_dict() for framework in self.frameworks],
            "buildTools": list(self.build_tools),
            "hasTests": self.has_tests,
            "hasCI": self.has_ci,
            "hasDocs": self.has_docs,
            "hasDocker": self.has_docker,
            "hasLicense": self.has_license,
            "entryPoints": list(self.entry_points),
            "configFiles": list(self.config_files),
            "keyDirectories": list(self.key_directories),
        }


# Architecture graph

NODE_ROOT = "root"
NODE_MODULE = "module"
NODE_ENTRY = "entry"
NODE_CONFIG = "config"
NODE_EXTERNAL = "external"


@dataclass
class ArchitectureNode:
    """Semantic node of the architecture graph (no layout information)."""

    id: str
    label: str
    kind: str
    file_count: int = 0
    total_size: int = 0
    languages: List[str] = field(default_factory=list)
    frameworks: List[str] = field(default_factory=list)
    is_hotspot: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.kind,
            "fileCount": self.file_count,
            "totalSize": self.total_size,
            "languages": list(self.languages),
            "frameworks": list(self.frameworks),
            "isHotspot": self.is_hotspot,
        }


@dataclass
class ArchitectureEdge:
    source: str
    target: str
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"source": self.source, "target": self.target}
        if self.label is not None:
            payload["label"] = self.label
        return payload


@dataclass
class ArchitectureGraph:
    nodes: List[ArchitectureNode] = field(default_factory=list)
    edges: List[ArchitectureEdge] = field(default_factory=list)

    def node(self, node_id: str) -> Optional[ArchitectureNode]:
        for candidate in self.nodes:
            if candidate.id == node_id:
                return candidate
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


# File tree and statistics


@dataclass
class FileNode:
    """Nested view of the flat tree listing."""

    path: str
    name: str
    kind: str
    size: Optional[int] = None
    extension: Optional[str] = None
    children: Optional[List["FileNode"]] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"path": self.path, "name": self.name, "type": self.kind}
        if self.size is not None:
            payload["size"] = self.size
        if self.extension is not None:
            payload["extension"] = self.extension
        if self.children is not None:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


@dataclass
class LanguageStats:
    name: str
    file_count: int
    total_size: int
    percentage: float
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "fileCount": self.file_count,
            "totalSize": self.total_size,
            "percentage": self.percentage,
            "color": self.color,
        }


@dataclass
class FileStats:
    total_files: int = 0
    total_directories: int = 0
    total_size: int = 0
    avg_file_size: int = 0
    largest_files: List[Tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalDirectories": self.total_directories,
            "totalSize": self.total_size,
            "avgFileSize": self.avg_file_size,
            "largestFiles": [{"path": path, "size": size} for path, size in self.largest_files],
        }


@dataclass
class AnalysisResult:
    """Complete output of one pipeline run."""

    repository: RepositoryInfo
    file_tree: List[FileNode]
    file_stats: FileStats
    languages: List[LanguageStats]
    dependencies: DependencyInfo
    insights: ProjectInsight
    architecture: ArchitectureGraph
    summary: str
    analyzed_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "repository": self.repository.to_dict(),
            "fileTree": [node.to_dict() for node in self.file_tree],
            "fileStats": self.file_stats.to_dict(),
            "languages": [language.to_dict() for language in self.languages],
            "dependencies": self.dependencies.to_dict(),
            "insights": self.insights.to_dict(),
            "architecture": self.architecture.to_dict(),
            "summary": self.summary,
            "analyzedAt": self.analyzed_at,
        }
