"""Semantic architecture graph built from the tree, manifests and insights.

Graph construction:

1. A root node summarises files at the repository root.
2. Each top-level directory becomes a module node (or an entry node when it
   contains an entry point); sufficiently populated depth-2 directories get
   child nodes.
3. Entry points not already represented become standalone entry nodes.
4. One external node per ecosystem collects the declared dependencies.
5. A handful of root-level config files become leaf config nodes.

Only the semantic graph is produced; layout belongs to the presentation layer.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import GraphConfig
from ..languages import SOURCE_LANGUAGE_BY_EXTENSION, language_for
from ..logging import get_logger
from ..models import (
    NODE_CONFIG,
    NODE_ENTRY,
    NODE_EXTERNAL,
    NODE_MODULE,
    NODE_ROOT,
    ArchitectureEdge,
    ArchitectureGraph,
    ArchitectureNode,
    DetectedFramework,
    ManifestRecord,
    ProjectInsight,
    TreeItem,
)
from .signatures import BACKEND, FRONTEND

ROOT_ID = "root"

_FRONTEND_DIRS = ("frontend", "client", "web")
_BACKEND_DIRS = ("backend", "server", "api")


def _external_id(ecosystem: str) -> str:
    return f"ext-{ecosystem}"


class _NodeRegistry:
    """Nodes keyed by id plus pending edges, checked when the graph is finalised.

    Synthetic ids (the root and external nodes) are reserved up front. A tree
    path spelling one of them gets a trailing ``/`` as its id instead; tree
    paths are normalised without one, so the two can never meet.
    """

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._nodes: Dict[str, ArchitectureNode] = {}
        self._edges: List[ArchitectureEdge] = []
        self._reserved = frozenset(reserved)
        self.logger = get_logger("architecture")

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def path_id(self, path: str) -> str:
        return f"{path}/" if path in self._reserved else path

    def nearest_node(self, path: str) -> str:
        """Id of the closest registered ancestor directory of ``path``, else the root."""
        parent, _, _ = path.rpartition("/")
        while parent:
            node_id = self.path_id(parent)
            if node_id in self._nodes:
                return node_id
            parent, _, _ = parent.rpartition("/")
        return ROOT_ID

    def add_node(self, node: ArchitectureNode) -> bool:
        if node.id in self._nodes:
            self.logger.debug("Node id %s already registered; keeping the first", node.id)
            return False
        self._nodes[node.id] = node
        return True

    def add_edge(self, source: str, target: str, label: Optional[str] = None) -> None:
        self._edges.append(ArchitectureEdge(source=source, target=target, label=label))

    def finalise(self) -> ArchitectureGraph:
        edges = []
        for edge in self._edges:
            if edge.source in self._nodes and edge.target in self._nodes:
                edges.append(edge)
            else:
                self.logger.warning(
                    "Dropping edge %s -> %s with an unknown endpoint", edge.source, edge.target
                )
        return ArchitectureGraph(nodes=list(self._nodes.values()), edges=edges)


class ArchitectureGraphBuilder:
    """Synthesises the hierarchical node/edge graph for a repository."""

    def __init__(self, config: GraphConfig | None = None) -> None:
        self.config = config or GraphConfig()

    def build(
        self,
        items: Sequence[TreeItem],
        manifests: Sequence[ManifestRecord],
        insight: ProjectInsight,
    ) -> ArchitectureGraph:
        registry = _NodeRegistry(
            [ROOT_ID, *(_external_id(manifest.ecosystem) for manifest in manifests)]
        )
        files = [item for item in items if item.is_file]
        directories = [item.path for item in items if item.is_directory]
        top_dirs = [path for path in directories if "/" not in path]

        files_by_top: Dict[str, List[TreeItem]] = defaultdict(list)
        files_by_second: Dict[str, List[TreeItem]] = defaultdict(list)
        root_files: List[TreeItem] = []
        for item in files:
            parts = item.path.split("/")
            if len(parts) == 1:
                root_files.append(item)
                continue
            files_by_top[parts[0]].append(item)
            if len(parts) > 2:
                files_by_second[f"{parts[0]}/{parts[1]}"].append(item)

        counts = [len(files_by_top.get(path, [])) for path in top_dirs]
        mean_count = sum(counts) / len(counts) if counts else 0.0
        hotspot_threshold = mean_count * self.config.hotspot_factor

        registry.add_node(
            ArchitectureNode(
                id=ROOT_ID,
                label="Root",
                kind=NODE_ROOT,
                file_count=len(root_files),
                total_size=_total_size(root_files),
                languages=self._languages(root_files),
            )
        )

        self._add_directory_nodes(
            registry,
            top_dirs,
            directories,
            files_by_top,
            files_by_second,
            insight,
            hotspot_threshold,
        )
        self._add_entry_nodes(registry, files, insight.entry_points)
        self._add_external_nodes(registry, manifests)
        self._add_config_nodes(registry, insight.config_files)

        return registry.finalise()

    def _add_directory_nodes(
        self,
        registry: _NodeRegistry,
        top_dirs: Sequence[str],
        directories: Sequence[str],
        files_by_top: Dict[str, List[TreeItem]],
        files_by_second: Dict[str, List[TreeItem]],
        insight: ProjectInsight,
        hotspot_threshold: float,
    ) -> None:
        subdirs_by_top: Dict[str, List[str]] = defaultdict(list)
        for path in directories:
            parts = path.split("/")
            if len(parts) == 2:
                subdirs_by_top[parts[0]].append(path)

        for dir_path in top_dirs:
            child_files = files_by_top.get(dir_path, [])
            is_entry = any(
                entry == dir_path or entry.startswith(f"{dir_path}/")
                for entry in insight.entry_points
            )
            dir_id = registry.path_id(dir_path)
            added = registry.add_node(
                ArchitectureNode(
                    id=dir_id,
                    label=dir_path,
                    kind=NODE_ENTRY if is_entry else NODE_MODULE,
                    file_count=len(child_files),
                    total_size=_total_size(child_files),
                    languages=self._languages(child_files),
                    frameworks=_frameworks_for_directory(dir_path, insight.frameworks),
                    is_hotspot=len(child_files) > hotspot_threshold,
                )
            )
            if not added:
                continue
            registry.add_edge(ROOT_ID, dir_id)

            for subdir in subdirs_by_top.get(dir_path, []):
                sub_files = files_by_second.get(subdir, [])
                if len(sub_files) < self.config.min_subdirectory_files:
                    continue
                sub_id = registry.path_id(subdir)
                if registry.add_node(
                    ArchitectureNode(
                        id=sub_id,
                        label=subdir.rsplit("/", 1)[-1],
                        kind=NODE_MODULE,
                        file_count=len(sub_files),
                        total_size=_total_size(sub_files),
                        languages=self._languages(sub_files),
                        is_hotspot=len(sub_files) > hotspot_threshold,
                    )
                ):
                    registry.add_edge(dir_id, sub_id)

    def _add_entry_nodes(
        self,
        registry: _NodeRegistry,
        files: Sequence[TreeItem],
        entry_points: Sequence[str],
    ) -> None:
        sizes = {item.path: item.size or 0 for item in files}
        for entry in entry_points:
            entry_id = registry.path_id(entry)
            if entry_id in registry:
                continue
            language = language_for(entry, SOURCE_LANGUAGE_BY_EXTENSION)
            registry.add_node(
                ArchitectureNode(
                    id=entry_id,
                    label=entry.rsplit("/", 1)[-1],
                    kind=NODE_ENTRY,
                    file_count=1,
                    total_size=sizes.get(entry, 0),
                    languages=[language] if language else [],
                )
            )
            registry.add_edge(registry.nearest_node(entry), entry_id, label="entry")

    def _add_external_nodes(
        self, registry: _NodeRegistry, manifests: Sequence[ManifestRecord]
    ) -> None:
        groups: Dict[str, List[ManifestRecord]] = {}
        for manifest in manifests:
            groups.setdefault(manifest.ecosystem, []).append(manifest)

        for ecosystem, group in groups.items():
            node_id = _external_id(ecosystem)
            total = sum(manifest.total_count for manifest in group)
            registry.add_node(
                ArchitectureNode(
                    id=node_id,
                    label=f"{ecosystem} deps ({total})",
                    kind=NODE_EXTERNAL,
                    file_count=total,
                )
            )
            for manifest in group:
                directory = registry.path_id(manifest.directory) if manifest.directory else ROOT_ID
                source = directory if directory in registry else ROOT_ID
                registry.add_edge(source, node_id, label=f"{manifest.total_count} packages")

    def _add_config_nodes(self, registry: _NodeRegistry, config_files: Sequence[str]) -> None:
        # Nested config files are left out to bound the graph size.
        root_level = [path for path in config_files if "/" not in path]
        for path in root_level[: self.config.max_config_nodes]:
            node_id = registry.path_id(path)
            if registry.add_node(ArchitectureNode(id=node_id, label=path, kind=NODE_CONFIG, file_count=1)):
                registry.add_edge(ROOT_ID, node_id)

    def _languages(self, files: Iterable[TreeItem]) -> List[str]:
        counts: Counter[str] = Counter()
        for item in files:
            language = language_for(item.path, SOURCE_LANGUAGE_BY_EXTENSION)
            if language:
                counts[language] += 1
        return [language for language, _ in counts.most_common(self.config.top_languages)]


def _total_size(files: Iterable[TreeItem]) -> int:
    return sum(item.size or 0 for item in files)


def _frameworks_for_directory(
    dir_path: str, frameworks: Sequence[DetectedFramework]
) -> List[str]:
    attached: List[str] = []
    for framework in frameworks:
        if dir_path in framework.detected_from:
            attached.append(framework.name)
        elif dir_path in _FRONTEND_DIRS and framework.category == FRONTEND:
            attached.append(framework.name)
        elif dir_path in _BACKEND_DIRS and framework.category == BACKEND:
            attached.append(framework.name)
    return attached


__all__ = ["ArchitectureGraphBuilder", "ROOT_ID"]
