"""Framework detection by scoring static signatures against repository evidence."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from ..models import DetectedFramework, FrameworkSignature, Indicator, ManifestRecord, TreeItem
from ..tree import split_tree
from .signatures import DEPENDENCY, DIRECTORY, FILE, FRAMEWORK_SIGNATURES


def dependency_names(manifests: Iterable[ManifestRecord]) -> Set[str]:
    """Lower-cased production and development dependency names across manifests."""
    names: Set[str] = set()
    for manifest in manifests:
        names.update(name.lower() for name in manifest.production)
        names.update(name.lower() for name in manifest.development)
    return names


class FrameworkDetector:
    """Scores each signature; confidence is the fraction of indicators that matched."""

    def __init__(self, signatures: Sequence[FrameworkSignature] = FRAMEWORK_SIGNATURES) -> None:
        self.signatures = tuple(signatures)

    def detect(
        self, items: Sequence[TreeItem], manifests: Sequence[ManifestRecord]
    ) -> List[DetectedFramework]:
        files, directories = split_tree(items)
        return self.score(dependency_names(manifests), files, directories, manifests)

    def score(
        self,
        dependencies: Set[str],
        files: Sequence[str],
        directories: Sequence[str],
        manifests: Sequence[ManifestRecord],
    ) -> List[DetectedFramework]:
        lowered_files = [path.lower() for path in files]
        lowered_dirs = [path.lower() for path in directories]

        detected: List[DetectedFramework] = []
        for signature in self.signatures:
            matched = [
                indicator
                for indicator in signature.indicators
                if _indicator_hits(indicator, dependencies, lowered_files, lowered_dirs)
            ]
            if not matched:
                continue

            first_dependency = next(
                (indicator for indicator in matched if indicator.kind == DEPENDENCY), None
            )
            source = first_dependency or matched[0]
            version = (
                resolve_version(first_dependency.pattern, manifests)
                if first_dependency is not None
                else None
            )
            detected.append(
                DetectedFramework(
                    name=signature.name,
                    category=signature.category,
                    confidence=min(len(matched) / len(signature.indicators), 1.0),
                    detected_from=source.describe(),
                    version=version,
                )
            )

        # sorted() is stable, so equal confidences keep table order.
        return sorted(detected, key=lambda framework: framework.confidence, reverse=True)


def _indicator_hits(
    indicator: Indicator,
    dependencies: Set[str],
    files: Sequence[str],
    directories: Sequence[str],
) -> bool:
    pattern = indicator.pattern.lower()
    if indicator.kind == DEPENDENCY:
        return pattern in dependencies
    if indicator.kind == FILE:
        return any(pattern in path for path in files)
    if indicator.kind == DIRECTORY:
        return any(pattern in path for path in directories)
    return False


def resolve_version(name: str, manifests: Iterable[ManifestRecord]) -> Optional[str]:
    """Version of the first manifest (in scan order) declaring ``name``.

    Production entries are consulted before development ones and names are
    compared case-insensitively, matching how detection itself works.
    """
    target = name.lower()
    for manifest in manifests:
        for section in (manifest.production, manifest.development):
            for declared, version in section.items():
                if declared.lower() == target and version:
                    return version
    return None


__all__ = ["FrameworkDetector", "dependency_names", "resolve_version"]
