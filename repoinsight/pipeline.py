"""Pipeline orchestration: tree + manifest texts in, analysis result out."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Iterable, Mapping, Optional

from .analyzers import ArchitectureGraphBuilder, FrameworkDetector, ProjectClassifier
from .config import RepoInsightConfig
from .logging import get_logger
from .manifests import ManifestScanner, aggregate_dependencies, collect_manifests
from .models import AnalysisResult, RepositoryInfo
from .sources import RepositorySource
from .summary import generate_summary
from .tree import build_file_tree, compute_file_stats, compute_language_stats, parse_tree


class RepositoryAnalyzer:
    """Coordinates scanning, parsing, detection, classification and graph synthesis.

    Every stage is a pure function of its inputs, so one analyzer can be
    reused across repositories and threads.
    """

    def __init__(
        self,
        config: RepoInsightConfig | None = None,
        *,
        scanner: ManifestScanner | None = None,
        detector: FrameworkDetector | None = None,
        classifier: ProjectClassifier | None = None,
        graph_builder: ArchitectureGraphBuilder | None = None,
    ) -> None:
        self.config = config or RepoInsightConfig()
        self.scanner = scanner or ManifestScanner(self.config.exclude_paths)
        self.detector = detector or FrameworkDetector()
        self.classifier = classifier or ProjectClassifier()
        self.graph_builder = graph_builder or ArchitectureGraphBuilder(self.config.graph)
        self.logger = get_logger("pipeline")

    def run(self, source: RepositorySource, *, analyzed_at: Optional[str] = None) -> AnalysisResult:
        """Pull data from ``source`` and analyze it."""
        repository = source.repository_info()
        items = parse_tree(source.list_tree())
        locations = self.scanner.scan(items)
        contents = source.read_files([location.path for location in locations])
        return self.analyze(items, contents, repository=repository, analyzed_at=analyzed_at)

    def analyze(
        self,
        tree: Iterable[Any],
        manifest_contents: Mapping[str, str],
        *,
        repository: RepositoryInfo | None = None,
        analyzed_at: Optional[str] = None,
    ) -> AnalysisResult:
        """Analyze a resolved tree listing and its manifest texts.

        Raises ``TreeError`` when the tree listing is malformed.
        """
        items = parse_tree(tree)
        repository = repository or RepositoryInfo(name="repository")
        self.logger.info("Analyzing %s (%d tree items)", repository.name, len(items))

        locations = self.scanner.scan(items)
        records = collect_manifests(locations, manifest_contents)
        dependencies = aggregate_dependencies(records)
        self.logger.debug(
            "Parsed %d of %d manifests (%d dependencies)",
            len(records),
            len(locations),
            dependencies.total_count,
        )

        frameworks = self.detector.detect(items, records)
        insight = self.classifier.classify(items, records, frameworks)
        self.logger.debug(
            "Detected %d frameworks; classified as %s (%s)",
            len(frameworks),
            insight.project_type,
            insight.structure,
        )

        architecture = self.graph_builder.build(items, records, insight)
        languages = compute_language_stats(items)
        file_stats = compute_file_stats(items)
        summary = generate_summary(
            repository.description,
            insight,
            file_stats.total_files,
            dependencies.total_count,
            languages,
        )

        self.logger.info(
            "Finished %s: %d nodes, %d edges",
            repository.name,
            len(architecture.nodes),
            len(architecture.edges),
        )
        return AnalysisResult(
            repository=repository,
            file_tree=build_file_tree(items),
            file_stats=file_stats,
            languages=languages,
            dependencies=dependencies,
            insights=insight,
            architecture=architecture,
            summary=summary,
            analyzed_at=analyzed_at or _utc_now(),
        )


def analyze_repository(
    tree: Iterable[Any],
    manifest_contents: Mapping[str, str],
    *,
    repository: RepositoryInfo | None = None,
    config: RepoInsightConfig | None = None,
) -> AnalysisResult:
    """Convenience wrapper around ``RepositoryAnalyzer.analyze``."""
    return RepositoryAnalyzer(config).analyze(tree, manifest_contents, repository=repository)


def _utc_now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


__all__ = ["RepositoryAnalyzer", "analyze_repository"]
